import pytest
from fastapi.testclient import TestClient

from lets_api import main as main_module
from lets_api.core.config import settings
from lets_api.core.security import create_access_token
from lets_api.db.session import get_db
from lets_api.main import app


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _auth(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_feeds_require_bearer_token(client) -> None:
    response = client.get("/api/v1/feeds/public")

    assert response.status_code == 401


def test_public_feed_envelope(client, seed) -> None:
    viewer = seed.user("viewer")
    activity = seed.activity(viewer)
    seed.activity(viewer)

    response = client.get("/api/v1/feeds/public", params={"limit": 1}, headers=_auth(viewer))

    body = response.json()
    assert response.status_code == 200
    assert body["paging"] == {"total": 2, "next": 1}
    assert body["data"][0]["verb"] == "post"
    assert body["data"][0]["item"]["id"] != str(activity.id)
    assert body["data"][0]["item"]["parent"] is None
    assert "password_hash" not in body["data"][0]["item"]["author"]


def test_follow_state_route(client, seed) -> None:
    viewer = seed.user("viewer")

    response = client.get(f"/api/v1/users/{viewer.id}/follow-state", headers=_auth(viewer))

    assert response.json() == {"follow_state": 64}


def test_private_activity_maps_to_403(client, seed) -> None:
    author = seed.user("author")
    stranger = seed.user("stranger")
    activity = seed.activity(author, privacy="private")

    response = client.get(f"/api/v1/activities/{activity.id}", headers=_auth(stranger))

    assert response.status_code == 403
    assert response.json()["code"] == "E11020"


def test_missing_activity_maps_to_404(client, seed) -> None:
    viewer = seed.user("viewer")

    response = client.get(f"/api/v1/activities/{viewer.id}", headers=_auth(viewer))

    assert response.status_code == 404
    assert response.json()["code"] == "E1030"


def test_follow_other_account_is_forbidden(client, seed) -> None:
    viewer = seed.user("viewer")
    other = seed.user("other")
    target = seed.user("target")

    response = client.post(f"/api/v1/users/{other.id}/followings/{target.id}", headers=_auth(viewer))

    assert response.status_code == 403


def test_zero_page_size_is_rejected(client, seed) -> None:
    viewer = seed.user("viewer")

    response = client.get("/api/v1/feeds/public", params={"limit": 0}, headers=_auth(viewer))

    assert response.status_code == 422


def test_run_serves_app_on_configured_address(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(main_module.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    main_module.run()

    assert calls == [((app,), {"host": settings.app_host, "port": settings.app_port})]
