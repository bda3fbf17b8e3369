"""
API tests for session authentication, preferences and favourites.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from floodmonitor.backend.core.db.models import User


def _register(client: TestClient, username: str = "kelani_resident", password: str = "rain-gauge", **extra):
    return client.post("/api/auth/register", json={"username": username, "password": password, **extra})


class TestRegistration:
    def test_register_logs_in(self, client: TestClient) -> None:
        resp = _register(client, email="resident@example.lk")
        assert resp.status_code == 201
        body = resp.json()
        assert body["username"] == "kelani_resident"
        assert body["email"] == "resident@example.lk"
        assert "password" not in body

        me = client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.json()["id"] == body["id"]

    def test_password_is_hashed(self, client: TestClient) -> None:
        _register(client)
        with client.app.state.database.session() as db:
            user = db.query(User).filter_by(username="kelani_resident").one()
        assert user.password != "rain-gauge"
        assert user.password.startswith("$2")

    def test_duplicate_username_409(self, client: TestClient) -> None:
        assert _register(client).status_code == 201
        resp = _register(client, password="another-password")
        assert resp.status_code == 409
        assert resp.json() == {"error": "Username already exists"}

    def test_blank_email_is_ignored(self, client: TestClient) -> None:
        resp = _register(client, email="")
        assert resp.status_code == 201
        assert resp.json()["email"] is None

    def test_validation_errors_are_400(self, client: TestClient) -> None:
        assert _register(client, username="ab").status_code == 400
        assert _register(client, password="12345").status_code == 400
        resp = _register(client, email="not-an-email")
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("email")

    def test_register_creates_default_preferences(self, client: TestClient) -> None:
        _register(client)
        prefs = client.get("/api/user/preferences").json()
        assert prefs == {
            "alertsEnabled": True,
            "emailAlerts": False,
            "warningThreshold": "warning",
            "preferredDistricts": [],
            "theme": "system",
        }


class TestLoginLogout:
    def test_login_and_logout(self, client: TestClient) -> None:
        _register(client)
        client.post("/api/auth/logout")
        assert client.get("/api/auth/me").status_code == 401

        resp = client.post("/api/auth/login", json={"username": "kelani_resident", "password": "rain-gauge"})
        assert resp.status_code == 200
        assert resp.json()["username"] == "kelani_resident"
        assert client.get("/api/auth/me").status_code == 200

        resp = client.post("/api/auth/logout")
        assert resp.json() == {"message": "Logged out successfully"}
        assert client.get("/api/auth/me").json() == {"error": "Not authenticated"}

    def test_wrong_password_401(self, client: TestClient) -> None:
        _register(client)
        client.post("/api/auth/logout")
        resp = client.post("/api/auth/login", json={"username": "kelani_resident", "password": "wrong-pass"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid username or password"}

    def test_unknown_user_401(self, client: TestClient) -> None:
        resp = client.post("/api/auth/login", json={"username": "nobody", "password": "whatever"})
        assert resp.status_code == 401

    def test_short_credentials_are_rejected_as_401(self, client: TestClient) -> None:
        _register(client)
        client.post("/api/auth/logout")
        for creds in ({"username": "ab", "password": "whatever1"}, {"username": "kelani_resident", "password": "rain"}):
            resp = client.post("/api/auth/login", json=creds)
            assert resp.status_code == 401
            assert resp.json() == {"error": "Invalid username or password"}

    def test_empty_credentials_are_400(self, client: TestClient) -> None:
        assert client.post("/api/auth/login", json={"username": "", "password": "x"}).status_code == 400

    def test_logout_without_session(self, client: TestClient) -> None:
        assert client.post("/api/auth/logout").status_code == 200

    def test_session_for_deleted_user(self, auth_client: TestClient) -> None:
        with auth_client.app.state.database.session() as db:
            db.delete(db.query(User).filter_by(username="river_watcher").one())
            db.commit()
        assert auth_client.get("/api/auth/me").status_code == 401


class TestPreferences:
    def test_requires_login(self, client: TestClient) -> None:
        assert client.get("/api/user/preferences").status_code == 401
        assert client.put("/api/user/preferences", json={"theme": "dark"}).status_code == 401

    def test_partial_update(self, auth_client: TestClient) -> None:
        resp = auth_client.put(
            "/api/user/preferences",
            json={"theme": "dark", "preferredDistricts": ["Gampaha", "Colombo", "Gampaha"]},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["theme"] == "dark"
        assert body["preferredDistricts"] == ["Gampaha", "Colombo"]
        assert body["alertsEnabled"] is True

        body = auth_client.put("/api/user/preferences", json={"emailAlerts": True}).json()
        assert body["emailAlerts"] is True
        assert body["theme"] == "dark"

    def test_invalid_values(self, auth_client: TestClient) -> None:
        assert auth_client.put("/api/user/preferences", json={"theme": "neon"}).status_code == 400
        assert auth_client.put(
            "/api/user/preferences", json={"warningThreshold": "panic"}
        ).status_code == 400
        resp = auth_client.put("/api/user/preferences", json={"preferredDistricts": ["Atlantis"]})
        assert resp.status_code == 400
        assert "Atlantis" in resp.json()["error"]


class TestFavorites:
    FAVORITE = {"stationId": "kalu-ratnapura", "name": "Home river", "latitude": 6.6804, "longitude": 80.4036}

    def test_requires_login(self, client: TestClient) -> None:
        assert client.get("/api/user/favorites").status_code == 401
        assert client.post("/api/user/favorites", json=self.FAVORITE).status_code == 401

    def test_add_list_remove(self, auth_client: TestClient) -> None:
        resp = auth_client.post("/api/user/favorites", json=self.FAVORITE)
        assert resp.status_code == 201
        fav = resp.json()
        assert fav["stationId"] == "kalu-ratnapura"
        assert fav["createdAt"].endswith(("Z", "+00:00"))

        assert [f["id"] for f in auth_client.get("/api/user/favorites").json()] == [fav["id"]]

        assert auth_client.delete(f"/api/user/favorites/{fav['id']}").status_code == 204
        assert auth_client.get("/api/user/favorites").json() == []
        assert auth_client.delete(f"/api/user/favorites/{fav['id']}").status_code == 404

    def test_duplicate_station_409(self, auth_client: TestClient) -> None:
        auth_client.post("/api/user/favorites", json=self.FAVORITE)
        resp = auth_client.post("/api/user/favorites", json=self.FAVORITE)
        assert resp.status_code == 409

    def test_unknown_station_404(self, auth_client: TestClient) -> None:
        resp = auth_client.post("/api/user/favorites", json={**self.FAVORITE, "stationId": "nowhere"})
        assert resp.status_code == 404

    def test_cannot_delete_other_users_favorite(self, auth_client: TestClient) -> None:
        fav_id = auth_client.post("/api/user/favorites", json=self.FAVORITE).json()["id"]
        auth_client.post("/api/auth/logout")
        _register(auth_client, username="second_user")

        assert auth_client.get("/api/user/favorites").json() == []
        assert auth_client.delete(f"/api/user/favorites/{fav_id}").status_code == 404

    def test_favorites_removed_with_user(self, auth_client: TestClient) -> None:
        from floodmonitor.backend.core.db.models import FavoriteLocation

        auth_client.post("/api/user/favorites", json=self.FAVORITE)
        with auth_client.app.state.database.session() as db:
            db.delete(db.query(User).filter_by(username="river_watcher").one())
            db.commit()
            assert db.query(FavoriteLocation).count() == 0
