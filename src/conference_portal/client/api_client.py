"""HTTP client for the conference management REST API."""

from typing import Any, Optional

import requests

from conference_portal.client.credentials import CredentialStore
from conference_portal.client.errors import (
    ApiError,
    AuthenticationError,
    ConnectionFailedError,
    EmailNotVerifiedError,
    error_for_status,
)
from conference_portal.client.services import (
    AdminService,
    AuthService,
    CommitteeService,
    CopyrightService,
    EditorService,
    PaperService,
    RegistrationService,
    ReviewerService,
    SupportService,
)
from conference_portal.config.portal_config import PortalConfig, get_portal_config
from conference_portal.utils.logging_config import get_logger

logger = get_logger(__name__)


class ConferenceApiClient:
    """Client for the conference backend.

    Every call is a single synchronous request. Authenticated calls carry the
    stored bearer token. Errors are raised as ``ApiError`` subclasses; a 401
    also clears the stored session so the user is sent back to login.
    """

    def __init__(
        self,
        config: Optional[PortalConfig] = None,
        session: Optional[requests.Session] = None,
        store: Optional[CredentialStore] = None,
    ):
        self.config = config or get_portal_config()
        self.session = session or requests.Session()
        self.store = store if store is not None else CredentialStore(self.config.state_file)

        self.auth = AuthService(self)
        self.papers = PaperService(self)
        self.reviewer = ReviewerService(self)
        self.editor = EditorService(self)
        self.registration = RegistrationService(self)
        self.committee = CommitteeService(self)
        self.copyright = CopyrightService(self)
        self.support = SupportService(self)
        self.admin = AdminService(self)

        logger.debug("Initialized API client", api_url=self.config.api_url)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        self.session.close()

    def _headers(self, authenticated: bool) -> dict:
        headers = dict(self.config.extra_headers)
        if authenticated and self.store.token:
            headers["Authorization"] = f"Bearer {self.store.token}"
        return headers

    @staticmethod
    def _decode(response) -> Any:
        try:
            return response.json()
        except ValueError:
            text = getattr(response, "text", "") or ""
            return {"message": text.strip()} if text.strip() else {}

    def _raise_for_error(self, method: str, path: str, status_code: int, body: Any) -> None:
        message = body.get("message") if isinstance(body, dict) else None
        logger.warning(
            "API request failed",
            method=method,
            path=path,
            status=status_code,
            message=message,
        )
        if status_code == 401:
            self.store.clear()
        error_cls = error_for_status(status_code)
        raise error_cls(message=message, status_code=status_code, payload=body)

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: Optional[dict] = None,
        files: Optional[dict] = None,
        params: Optional[dict] = None,
        authenticated: bool = True,
    ) -> Any:
        """Send one request and return the decoded JSON body."""
        if authenticated and not self.store.token:
            raise AuthenticationError("Not logged in. Please login first.")

        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}

        try:
            response = self.session.request(
                method,
                self.config.url(path),
                json=json,
                data=data,
                files=files,
                params=params or None,
                headers=self._headers(authenticated),
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("Network error", method=method, path=path, error=str(e))
            raise ConnectionFailedError(message=str(e)) from e

        status_code = response.status_code
        logger.debug("API request", method=method, path=path, status=status_code)
        body = self._decode(response)

        if status_code >= 400:
            self._raise_for_error(method, path, status_code, body)

        if isinstance(body, dict):
            if body.get("needsVerification"):
                raise EmailNotVerifiedError(
                    message=body.get("message"), status_code=status_code, payload=body
                )
            if body.get("success") is False:
                logger.warning("API reported failure", method=method, path=path, message=body.get("message"))
                raise ApiError(message=body.get("message"), status_code=status_code, payload=body)

        return body

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> Any:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs) -> Any:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)
