"""Server entry point."""

from covernest import main


def test_run_serves_app_with_configured_address(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(main.settings, "host", "127.0.0.1")
    monkeypatch.setattr(main.settings, "port", 9123)
    monkeypatch.setattr(main.settings, "log_level", "DEBUG")

    main.run()

    assert calls == [(main.app, {"host": "127.0.0.1", "port": 9123, "log_level": "debug"})]


def test_root_reports_server_name(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["name"] == main.settings.server_name
    assert r.json()["status"] == "running"
