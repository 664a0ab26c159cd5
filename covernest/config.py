"""CoverNest Server Configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    server_name: str = "CoverNest Server"
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False
    log_level: str = "INFO"

    # Paths
    data_dir: Path = Path.home() / "covernest" / "data"

    # Database
    db_path: Path = Path.home() / "covernest" / "data" / "covernest.db"
    db_journal_mode: str = "WAL"  # readers never block the tree writer
    db_synchronous: str = "NORMAL"
    db_busy_timeout: float = 5.0  # seconds

    # Thumbnails are served by the storage layer under this prefix
    thumb_url_prefix: str = "/api/v1/photos"

    # Cover ranking (always preceded by starred-first)
    photo_sorting_column: str = "created_at"
    photo_sorting_order: str = "desc"

    model_config = {"env_prefix": "COVERNEST_"}

    def ensure_dirs(self) -> None:
        """Create all required directories."""
        for d in [self.data_dir, self.db_path.parent]:
            d.mkdir(parents=True, exist_ok=True)


settings = Settings()
settings.ensure_dirs()
