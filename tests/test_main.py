import uvicorn

from salon_booking import main
from salon_booking.config import HOST, PORT


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_run_serves_the_app(monkeypatch):
    calls = {}
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.update(app=app, **kwargs))

    main.run()

    assert calls["app"] is main.app
    assert calls["host"] == HOST
    assert calls["port"] == PORT
