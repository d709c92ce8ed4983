"""Unit tests for AuthService (sign-up, login, verification, password reset)."""

import pytest

from conference_portal.client.errors import (
    ApiError,
    AuthenticationError,
    EmailNotVerifiedError,
    FormValidationError,
)


class TestLogin:
    """Test login and session handling."""

    def test_login_saves_session(self, client, respond, sent, store):
        """Test a successful login stores token, role, user and country."""
        store.clear()
        respond(
            {
                "success": True,
                "token": "jwt-123",
                "role": "Reviewer",
                "email": "rev@example.com",
                "username": "Grace",
                "country": "India",
            }
        )

        session = client.auth.login(" rev@example.com ", "secret")

        method, url, kwargs = sent()
        assert (method, url) == ("POST", "http://api.test/api/auth/login")
        assert kwargs["json"] == {"email": "rev@example.com", "password": "secret"}
        assert "Authorization" not in kwargs["headers"]
        assert session.role == "Reviewer"
        assert store.token == "jwt-123"
        assert store.role == "Reviewer"
        assert store.user == {"email": "rev@example.com", "username": "Grace", "role": "Reviewer"}
        assert store.get("country") == "India"

    def test_login_fills_missing_email(self, client, respond, store):
        """Test the typed email is used when the response has none."""
        respond({"token": "jwt", "role": "Author"})

        session = client.auth.login("ada@example.com", "pw")
        assert session.email == "ada@example.com"
        assert store.user["email"] == "ada@example.com"

    def test_unverified_email(self, client, respond, store):
        """Test an unverified account raises with the email attached and keeps no session."""
        store.clear()
        respond({"success": False, "needsVerification": True, "message": "Please verify your email"})

        with pytest.raises(EmailNotVerifiedError) as exc_info:
            client.auth.login("new@example.com", "pw")

        assert exc_info.value.email == "new@example.com"
        assert store.token is None

    def test_wrong_password(self, client, respond):
        """Test a 401 from login raises AuthenticationError."""
        respond({"message": "Invalid credentials"}, status_code=401)

        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            client.auth.login("ada@example.com", "wrong")

    def test_response_without_token(self, client, respond):
        """Test a login response without a token is treated as a failure."""
        respond({"message": "Login failed"})

        with pytest.raises(ApiError, match="Login failed"):
            client.auth.login("ada@example.com", "pw")

    def test_blank_password(self, client, session):
        """Test a blank password is caught before any request."""
        with pytest.raises(FormValidationError, match="Password is required"):
            client.auth.login("ada@example.com", "  ")
        session.request.assert_not_called()

    def test_logout_clears_store(self, client, store):
        """Test logout drops the session."""
        client.auth.logout()
        assert not store.is_authenticated


class TestAccount:
    """Test account endpoints."""

    def test_signup(self, client, respond, sent):
        """Test sign-up posts to /signin without a token."""
        respond({"success": True, "message": "Verification email sent"})

        client.auth.signup("new@example.com", "pw", username="Lin")

        method, url, kwargs = sent()
        assert (method, url) == ("POST", "http://api.test/signin")
        assert kwargs["json"] == {"email": "new@example.com", "password": "pw", "username": "Lin"}
        assert "Authorization" not in kwargs["headers"]

    def test_verify_email_token(self, client, respond, sent):
        """Test the verification link data is forwarded."""
        respond({"success": True})

        client.auth.verify_email_token("tok", "new@example.com", "2026-01-01T00:00:00Z")

        assert sent()[1] == "http://api.test/verify-email-token"
        assert sent()[2]["json"] == {
            "token": "tok",
            "email": "new@example.com",
            "timestamp": "2026-01-01T00:00:00Z",
        }

    def test_verify_email_token_incomplete(self, client, session):
        """Test a link without token or email is rejected locally."""
        with pytest.raises(ApiError, match="Verification data is incomplete"):
            client.auth.verify_email_token("", "new@example.com")
        session.request.assert_not_called()

    def test_reset_password(self, client, respond, sent):
        """Test the OTP and new password are sent."""
        respond({"success": True})

        client.auth.reset_password("ada@example.com", "123456", "n3w")

        assert sent()[1] == "http://api.test/reset-password"
        assert sent()[2]["json"] == {"email": "ada@example.com", "otp": "123456", "newPassword": "n3w"}

    def test_reset_password_requires_otp(self, client):
        """Test a missing OTP is reported against its field."""
        with pytest.raises(FormValidationError) as exc_info:
            client.auth.reset_password("ada@example.com", "", "n3w")
        assert exc_info.value.field == "otp"

    def test_current_user_caches_country(self, client, respond, store):
        """Test the profile country is remembered."""
        respond({"user": {"_id": "u1", "email": "ada@example.com", "role": "Author", "country": "Indonesia"}})

        user = client.auth.current_user()

        assert user.id == "u1"
        assert user.country == "Indonesia"
        assert store.get("country") == "Indonesia"

    def test_update_country(self, client, respond, sent, store):
        """Test the country is saved with a PUT and cached."""
        respond({"success": True})

        client.auth.update_country("India")

        assert sent()[0] == "PUT"
        assert sent()[1] == "http://api.test/api/auth/update-country"
        assert store.get("country") == "India"

    def test_acceptance_status_uses_stored_email(self, client, respond, sent):
        """Test the logged-in user's email is used by default."""
        respond({"isAccepted": True})

        assert client.auth.check_acceptance_status() is True
        assert sent()[2]["params"] == {"email": "ada@example.com"}
