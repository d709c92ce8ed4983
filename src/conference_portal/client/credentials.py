"""Persistent store for the login token, role and small user preferences."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from conference_portal.utils.logging_config import get_logger

logger = get_logger(__name__)


class CredentialStore:
    """JSON-file backed key/value store for the current session.

    Holds the bearer token, the user's role, a small user record and cached
    preferences such as the selected country or the last submission id.
    Pass ``path=None`` for an in-memory store (used by the web UI, which keeps
    one store per browser session).
    """

    SESSION_KEYS = ("token", "role", "user")

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path).expanduser() if path else None
        self._data: dict = {}
        self._load()

    def _load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                self._data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable session file", path=str(self.path), error=str(e))
            self._data = {}

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Token is a credential: owner-only from creation on
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)
        # Files created by older versions may be wider
        os.chmod(self.path, 0o600)

    @property
    def token(self) -> Optional[str]:
        return self._data.get("token")

    @property
    def role(self) -> Optional[str]:
        return self._data.get("role")

    @property
    def user(self) -> dict:
        return self._data.get("user") or {}

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def save_session(self, token: str, role: Optional[str], user: dict) -> None:
        """Persist a freshly issued login."""
        self._data.update({"token": token, "role": role, "user": user})
        self._save()
        logger.info("Session saved", role=role, email=user.get("email"))

    def clear(self) -> None:
        """Drop the login but keep unrelated preferences."""
        for key in self.SESSION_KEYS:
            self._data.pop(key, None)
        self._save()
        logger.info("Session cleared")

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()
