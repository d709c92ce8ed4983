"""Support chat between authors and the conference admin."""

from typing import Optional

from conference_portal.client.services.base import BaseService
from conference_portal.core.models import SupportThread
from conference_portal.core.workflow import require_text


class SupportService(BaseService):
    def my_messages(self) -> Optional[SupportThread]:
        body = self.client.get("/api/support-messages/my-messages")
        data = body.get("data")
        return SupportThread.model_validate(data) if data else None

    def send(self, message: str, author_id: Optional[str] = None) -> SupportThread:
        """Send a support message. Admins reply into an author's thread by passing ``author_id``."""
        payload = {"message": require_text("message", message, "Message cannot be empty")}
        if author_id:
            payload["authorId"] = author_id
        body = self.client.post("/api/support-messages/send", json=payload)
        return SupportThread.model_validate(body.get("data") or {})

    def all_threads(self) -> list[SupportThread]:
        body = self.client.get("/api/support-messages/all-threads")
        return [SupportThread.model_validate(t) for t in body.get("data", [])]
