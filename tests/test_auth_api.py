"""
Tests for the auth endpoints: register, login, logout and check-user.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from core.config import settings
from core.errors import DuplicateEmailError
from core.security import create_session_token
from models.user import UserCreate
from services import auth_service
from services.user_repository import UserRepository

COOKIE = settings.SESSION_COOKIE_NAME


class TestRegister:
    def test_register_returns_user_and_sets_cookie(self, client, fake_db, sample_user):
        response = client.post("register", json=sample_user())

        assert response.status_code == 201
        body = response.json()
        assert body["status"] is True
        assert body["user"]["name"] == "Olena"
        assert body["user"]["email"] == "olena@example.com"
        assert "password_hash" not in body["user"]
        assert client.cookies.get(COOKIE)

        stored = list(fake_db.collection("users").docs.values())
        assert len(stored) == 1
        assert stored[0]["password_hash"] != "secret123"

    def test_session_cookie_is_http_only(self, client, sample_user):
        response = client.post("register", json=sample_user())
        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert f"max-age={settings.SESSION_MAX_AGE_SECONDS}" in set_cookie

    def test_duplicate_email_rejected(self, client, fake_db, sample_user):
        client.post("register", json=sample_user())
        response = client.post("register", json=sample_user(name="Other"))

        assert response.status_code == 400
        assert response.json()["code"] == "duplicate_email"
        assert len(fake_db.collection("users").docs) == 1

    def test_duplicate_email_is_case_insensitive(self, client, fake_db, sample_user):
        client.post("register", json=sample_user())
        response = client.post("register", json=sample_user(email="OLENA@Example.com"))

        assert response.json()["code"] == "duplicate_email"
        assert len(fake_db.collection("users").docs) == 1

    def test_short_password_rejected(self, client, fake_db, sample_user):
        response = client.post("register", json=sample_user(password="123"))

        assert response.status_code == 422
        body = response.json()
        assert body["status"] is False
        assert body["code"] == "validation_failed"
        assert body["errors"][0]["loc"] == ["body", "password"]
        assert fake_db.collection("users").docs == {}

    def test_blank_name_rejected(self, client, sample_user):
        response = client.post("register", json=sample_user(name="   "))
        assert response.json()["code"] == "validation_failed"

    def test_invalid_email_rejected(self, client, sample_user):
        response = client.post("register", json=sample_user(email="not-an-email"))
        assert response.json()["code"] == "validation_failed"

    def test_missing_fields_rejected(self, client):
        response = client.post("register", json={"email": "olena@example.com"})
        assert response.status_code == 422


class TestLogin:
    def test_login_sets_cookie(self, make_client, sample_user):
        make_client().post("register", json=sample_user())

        client = make_client()
        response = client.post("login", json={"email": "olena@example.com", "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Olena"
        assert client.cookies.get(COOKIE)

    def test_login_email_case_insensitive(self, registered_client):
        response = registered_client.post("login", json={"email": "Olena@Example.com", "password": "secret123"})
        assert response.status_code == 200

    def test_wrong_password(self, registered_client):
        response = registered_client.post("login", json={"email": "olena@example.com", "password": "wrong-pass"})

        assert response.status_code == 401
        assert response.json()["code"] == "invalid_credentials"

    def test_unknown_email_gives_same_error(self, client):
        response = client.post("login", json={"email": "nobody@example.com", "password": "secret123"})

        assert response.status_code == 401
        assert response.json()["code"] == "invalid_credentials"
        assert response.json()["detail"] == "Incorrect email or password"


class TestCheckUser:
    def test_without_cookie(self, client):
        response = client.get("check-user")

        assert response.status_code == 200
        assert response.json() == {"status": False, "user": None, "reason": "no_session"}

    def test_with_garbage_cookie(self, client):
        client.cookies.set(COOKIE, "garbage")
        response = client.get("check-user")

        assert response.status_code == 200
        assert response.json()["status"] is False
        assert response.json()["reason"] == "invalid_session"

    def test_token_for_missing_user(self, client):
        client.cookies.set(COOKIE, create_session_token("ghost"))
        response = client.get("check-user")
        assert response.json()["reason"] == "invalid_session"

    def test_with_session(self, registered_client):
        response = registered_client.get("check-user")

        assert response.json()["status"] is True
        assert response.json()["user"]["email"] == "olena@example.com"

    def test_bearer_header_fallback(self, registered_client, make_client):
        token = registered_client.cookies.get(COOKIE)
        other = make_client()

        response = other.get("check-user", headers={"Authorization": f"Bearer {token}"})
        assert response.json()["status"] is True


class TestLogout:
    def test_logout_clears_cookie(self, registered_client):
        response = registered_client.post("logout")

        assert response.json() == {"status": True}
        assert registered_client.cookies.get(COOKIE) is None
        assert registered_client.get("check-user").json()["status"] is False


def test_root(client):
    response = client.get("http://testserver/")
    assert response.json()["status"] == "ok"


class TestConcurrentRegistration:
    def test_parallel_registrations_store_one_user(self, fake_db, monkeypatch):
        users = UserRepository(fake_db)
        original_find = UserRepository.find_by_email
        both_checked = threading.Barrier(2, timeout=5)

        # Обидва запити проходять перевірку email до того, як хтось встиг записати
        def find_then_wait(self, email):
            found = original_find(self, email)
            both_checked.wait()
            return found

        monkeypatch.setattr(UserRepository, "find_by_email", find_then_wait)

        def attempt(name):
            data = UserCreate(name=name, email="olena@example.com", password="secret123")
            try:
                return auth_service.register(users, data)[0]
            except DuplicateEmailError as e:
                return e

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(attempt, ["Olena", "Twin"]))

        assert sum(isinstance(r, DuplicateEmailError) for r in results) == 1
        assert len(fake_db.collection("users").docs) == 1
        assert len(fake_db.collection("user_emails").docs) == 1

    def test_reserved_email_maps_to_duplicate_error(self, client, fake_db, monkeypatch, sample_user):
        client.post("register", json=sample_user())
        # Перевірка нічого не бачить, як у вікні гонки
        monkeypatch.setattr(UserRepository, "find_by_email", lambda self, email: None)

        response = client.post("register", json=sample_user(name="Twin"))

        assert response.status_code == 400
        assert response.json()["code"] == "duplicate_email"
        assert len(fake_db.collection("users").docs) == 1


class TestCors:
    def test_allowed_origin_gets_credentials(self, client):
        response = client.get("http://testserver/", headers={"Origin": "http://localhost:3000"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.parametrize("origin", ["http://evil.example", "https://spendx.vercel.app.evil.example"])
    def test_foreign_origin_is_not_allowed(self, client, origin):
        response = client.get("http://testserver/", headers={"Origin": origin})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers

    def test_preflight_for_allowed_origin(self, client):
        response = client.options(
            "add-income",
            headers={"Origin": "https://spendx.vercel.app", "Access-Control-Request-Method": "POST"},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://spendx.vercel.app"
        assert response.headers["access-control-allow-credentials"] == "true"
