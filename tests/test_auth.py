"""
Authentication Tests
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from scribeai.models import User
from scribeai.schemas.auth import UserOut
from scribeai.services.auth import (
    SESSION_COOKIE,
    authorize_credentials,
    decode_token,
    issue_token,
    register_user,
)

ALICE = {"email": "alice@scribe.io", "password": "s3cret-pass", "name": "Alice"}


@pytest.fixture()
def alice(client):
    response = client.post("/api/auth/register", json=ALICE)
    assert response.status_code == 201
    return response.json()["user"]


class TestRegistration:
    """Test user registration"""

    def test_register_creates_user(self, client, db_session):
        response = client.post("/api/auth/register", json=ALICE)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["user"]["email"] == "alice@scribe.io"
        assert body["user"]["name"] == "Alice"
        assert body["user"]["emailVerified"] is not None
        assert "password" not in str(body["user"]).lower()

        user = db_session.query(User).filter_by(email="alice@scribe.io").one()
        assert user.password_hash != ALICE["password"]
        assert user.check_password(ALICE["password"])

    def test_duplicate_email_is_conflict(self, client, alice):
        response = client.post("/api/auth/register", json=ALICE)
        assert response.status_code == 409
        assert response.json() == {"user": None, "message": "User with this email already exists"}

    def test_short_password(self, client):
        response = client.post("/api/auth/register", json={**ALICE, "password": "12345"})
        assert response.status_code == 400
        assert response.json() == {"user": None, "message": "Password must be at least 6 characters"}

    def test_short_name(self, client):
        response = client.post("/api/auth/register", json={**ALICE, "name": "A"})
        assert response.status_code == 400
        assert response.json()["message"] == "Name must be at least 2 characters"

    def test_invalid_email(self, client):
        response = client.post("/api/auth/register", json={**ALICE, "email": "not-an-email"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid email"

    def test_missing_body(self, client):
        response = client.post("/api/auth/register")
        assert response.status_code == 400
        assert response.json()["user"] is None

    def test_same_email_twice_in_service(self, db_session):
        from scribeai.services.auth import DuplicateEmailError

        register_user(db_session, email="bob@scribe.io", password="password", name="Bob")
        with pytest.raises(DuplicateEmailError):
            register_user(db_session, email="bob@scribe.io", password="password", name="Bob")


class TestCredentials:
    """Test the credential grant"""

    def test_valid_credentials(self, db_session):
        register_user(db_session, email="carol@scribe.io", password="password", name="Carol")
        user = authorize_credentials(db_session, "carol@scribe.io", "password")
        assert user is not None
        assert user.email == "carol@scribe.io"

    def test_wrong_password_returns_none(self, db_session):
        register_user(db_session, email="carol@scribe.io", password="password", name="Carol")
        assert authorize_credentials(db_session, "carol@scribe.io", "wrong-password") is None

    def test_unknown_user_returns_none(self, db_session):
        assert authorize_credentials(db_session, "nobody@scribe.io", "password") is None

    def test_user_without_password_returns_none(self, db_session):
        db_session.add(User(email="oauth@scribe.io", name="OAuth Only"))
        db_session.commit()
        assert authorize_credentials(db_session, "oauth@scribe.io", "anything") is None

    def test_missing_fields_return_none(self, db_session):
        assert authorize_credentials(db_session, None, "password") is None
        assert authorize_credentials(db_session, "carol@scribe.io", "") is None

    def test_user_out_reads_model_attributes(self, db_session):
        user = register_user(db_session, email="dave@scribe.io", password="password", name="Dave")
        out = UserOut.model_validate(user)
        assert out.email == "dave@scribe.io"
        assert out.email_verified is not None
        assert "passwordHash" not in out.model_dump(by_alias=True)


class TestSessionTokens:
    def test_round_trip(self, settings, db_session):
        user = register_user(db_session, email="dave@scribe.io", password="password", name="Dave")
        token, expires = issue_token(user, settings)
        session_user, token_expires = decode_token(token, settings)
        assert session_user.id == user.id
        assert session_user.email == "dave@scribe.io"
        assert token_expires == expires

    def test_expired_token_is_rejected(self, settings):
        past = datetime.now(timezone.utc) - timedelta(minutes=5)
        token = jwt.encode(
            {"sub": "1", "email": "x@scribe.io", "exp": past},
            settings.auth_secret,
            algorithm="HS256",
        )
        assert decode_token(token, settings) is None

    def test_foreign_signature_is_rejected(self, settings):
        token = jwt.encode({"sub": "1", "email": "x@scribe.io"}, "other-secret", algorithm="HS256")
        assert decode_token(token, settings) is None

    def test_missing_secret_fails_closed(self, settings, db_session):
        user = register_user(db_session, email="erin@scribe.io", password="password", name="Erin")
        token, _ = issue_token(user, settings)
        settings.auth_secret = ""
        assert decode_token(token, settings) is None


class TestLogin:
    """Test user login"""

    def test_login_sets_session_cookie(self, client, alice):
        response = client.post(
            "/api/auth/login",
            json={"email": ALICE["email"], "password": ALICE["password"]},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["user"]["email"] == ALICE["email"]
        assert body["accessToken"]
        assert response.cookies.get(SESSION_COOKIE) == body["accessToken"]

        session = client.get("/api/auth/session").json()
        assert session["user"]["email"] == ALICE["email"]

    def test_wrong_password(self, client, alice):
        response = client.post(
            "/api/auth/login",
            json={"email": ALICE["email"], "password": "not-the-password"},
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}
        assert SESSION_COOKIE not in response.cookies
        assert client.get("/api/auth/session").json()["user"] is None

    def test_malformed_body(self, client):
        response = client.post("/api/auth/login", json={"email": 42, "password": "x"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    def test_bearer_token(self, client, alice):
        token = client.post(
            "/api/auth/login",
            json={"email": ALICE["email"], "password": ALICE["password"]},
        ).json()["accessToken"]
        client.cookies.clear()

        response = client.get("/api/auth/session", headers={"Authorization": f"Bearer {token}"})
        assert response.json()["user"]["email"] == ALICE["email"]

    def test_logout_clears_cookie(self, client, alice):
        client.post("/api/auth/login", json={"email": ALICE["email"], "password": ALICE["password"]})
        client.post("/api/auth/logout")
        assert client.get("/api/auth/session").json()["user"] is None

    def test_login_without_secret_is_config_error(self, client, settings, alice):
        settings.auth_secret = ""
        response = client.post(
            "/api/auth/login",
            json={"email": ALICE["email"], "password": ALICE["password"]},
        )
        assert response.status_code == 500
        assert "AUTH_SECRET" in response.json()["error"]


class TestRouteProtection:
    def _login(self, client):
        client.post("/api/auth/login", json={"email": ALICE["email"], "password": ALICE["password"]})

    def test_dashboard_redirects_anonymous_users(self, client):
        response = client.get("/dashboard", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    def test_dashboard_served_to_signed_in_users(self, client, alice):
        self._login(client)
        response = client.get("/dashboard", follow_redirects=False)
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]

    def test_login_page_redirects_signed_in_users(self, client, alice):
        self._login(client)
        response = client.get("/login", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/dashboard"

    def test_login_page_served_to_anonymous_users(self, client):
        response = client.get("/login", follow_redirects=False)
        assert response.status_code == 200
