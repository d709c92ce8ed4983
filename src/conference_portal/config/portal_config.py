"""Portal configuration loaded from the environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_TIMEOUT = 30.0
DEFAULT_STATE_FILE = str(Path.home() / ".conference_portal" / "session.json")


@dataclass
class PortalConfig:
    """Configuration for talking to a conference backend."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    state_file: str = DEFAULT_STATE_FILE
    log_level: str = "WARNING"
    extra_headers: dict = field(default_factory=dict)

    def __post_init__(self):
        self.api_url = self.api_url.rstrip("/")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

    def url(self, path: str) -> str:
        """Join an API path onto the base URL."""
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.api_url}{path}"


def get_portal_config(env_file: str = None) -> PortalConfig:
    """Build a PortalConfig from environment variables (and an optional .env file)."""
    load_dotenv(env_file)

    raw_timeout = os.getenv("PORTAL_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ValueError(f"PORTAL_TIMEOUT must be a number, got '{raw_timeout}'")

    return PortalConfig(
        api_url=os.getenv("PORTAL_API_URL", DEFAULT_API_URL),
        timeout=timeout,
        state_file=os.getenv("PORTAL_STATE_FILE", DEFAULT_STATE_FILE),
        log_level=os.getenv("PORTAL_LOG_LEVEL", "WARNING").upper(),
    )
