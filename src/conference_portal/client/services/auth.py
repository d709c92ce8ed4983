"""Sign-up, login, email verification and password reset."""

from datetime import datetime, timezone
from typing import Optional

from conference_portal.client.errors import ApiError, EmailNotVerifiedError
from conference_portal.client.services.base import BaseService
from conference_portal.core.models import AuthSession, UserProfile
from conference_portal.core.workflow import require_text
from conference_portal.utils.logging_config import get_logger

logger = get_logger(__name__)


class AuthService(BaseService):
    def signup(self, email: str, password: str, username: Optional[str] = None) -> dict:
        """Create an account. The server emails a verification link before login is allowed."""
        payload = {
            "email": require_text("email", email, "Email is required"),
            "password": require_text("password", password, "Password is required"),
        }
        if username:
            payload["username"] = username
        body = self.client.post("/signin", json=payload, authenticated=False)
        logger.info("Account created", email=email)
        return body

    def login(self, email: str, password: str) -> AuthSession:
        """Log in and persist the token, role and user record.

        Raises:
            EmailNotVerifiedError: The account exists but the email is not verified yet
            AuthenticationError: Wrong credentials
        """
        email = require_text("email", email, "Email is required")
        password = require_text("password", password, "Password is required")
        try:
            body = self.client.post(
                "/api/auth/login",
                json={"email": email, "password": password},
                authenticated=False,
            )
        except EmailNotVerifiedError as e:
            e.email = email
            raise

        if not body.get("token") or body.get("verified") is False:
            raise ApiError(message=body.get("message") or "Login failed", payload=body)

        session = AuthSession.model_validate(body)
        if not session.email:
            session.email = email
        self.store.save_session(session.token, session.role, session.user_record())
        if session.country:
            self.store.set("country", session.country)
        logger.info("Logged in", email=session.email, role=session.role)
        return session

    def logout(self) -> None:
        self.store.clear()

    def resend_verification(self, email: str) -> dict:
        return self.client.post(
            "/resend-verification", json={"email": email}, authenticated=False
        )

    def verify_email_token(self, token: str, email: str, timestamp: Optional[str] = None) -> dict:
        """Confirm an email address with the token from the verification link."""
        if not token or not email:
            raise ApiError(message="Verification data is incomplete")
        payload = {
            "token": token,
            "email": email,
            "timestamp": timestamp or datetime.now(timezone.utc).isoformat(),
        }
        return self.client.post("/verify-email-token", json=payload, authenticated=False)

    def forgot_password(self, email: str) -> dict:
        """Ask the server to email a one-time password."""
        return self.client.post("/forgot-password", json={"email": email}, authenticated=False)

    def reset_password(self, email: str, otp: str, new_password: str) -> dict:
        payload = {
            "email": email,
            "otp": require_text("otp", otp, "Please enter the OTP from your email"),
            "newPassword": require_text("newPassword", new_password, "Please enter a new password"),
        }
        return self.client.post("/reset-password", json=payload, authenticated=False)

    def current_user(self) -> UserProfile:
        body = self.client.get("/api/auth/me")
        user = UserProfile.model_validate(body.get("user") or {})
        if user.country:
            self.store.set("country", user.country)
        return user

    def update_country(self, country: str) -> dict:
        body = self.client.put("/api/auth/update-country", json={"country": country})
        self.store.set("country", country)
        return body

    def check_acceptance_status(self, email: Optional[str] = None) -> bool:
        """Whether the user's paper has been accepted (which unlocks author registration)."""
        email = email or self.store.user.get("email")
        body = self.client.get("/api/auth/check-acceptance-status", params={"email": email})
        return bool(body.get("isAccepted"))
