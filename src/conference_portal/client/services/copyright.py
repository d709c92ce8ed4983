"""Copyright form upload, review and the author/admin message thread."""

from dataclasses import dataclass, field
from typing import Optional

from conference_portal.client.errors import FormValidationError
from conference_portal.client.services.base import BaseService
from conference_portal.config.constants import CopyrightStatus
from conference_portal.core.models import (
    CopyrightMessage,
    CopyrightRecord,
    PaperHistory,
    PaperSubmission,
)
from conference_portal.core.workflow import require_text
from conference_portal.utils.logging_config import get_logger
from conference_portal.utils.utils import validate_upload

logger = get_logger(__name__)

COPYRIGHT_FORM_EXTENSIONS = {".pdf", ".doc", ".docx", ".png", ".jpg", ".jpeg"}
REVIEW_STATUSES = (CopyrightStatus.APPROVED.value, CopyrightStatus.REJECTED.value)


@dataclass
class CopyrightDashboard:
    has_paper: bool
    paper: Optional[PaperSubmission] = None
    copyright: Optional[CopyrightRecord] = None
    payment: Optional[dict] = None
    all_papers: list = field(default_factory=list)


class CopyrightService(BaseService):
    def dashboard(self) -> CopyrightDashboard:
        body = self.client.get("/api/copyright/author/dashboard")
        if not body.get("hasPaper"):
            return CopyrightDashboard(has_paper=False)
        data = body.get("data") or {}
        paper = data.get("paper")
        record = data.get("copyright")
        return CopyrightDashboard(
            has_paper=True,
            paper=PaperSubmission.model_validate(paper) if paper else None,
            copyright=CopyrightRecord.model_validate(record) if record else None,
            payment=data.get("payment"),
            all_papers=[PaperSubmission.model_validate(p) for p in data.get("allPapers", [])],
        )

    def upload_form(self, path: str) -> CopyrightRecord:
        form_path = validate_upload(path, COPYRIGHT_FORM_EXTENSIONS, field="file")
        with self.open_files(file=form_path) as files:
            body = self.client.post("/api/copyright/author/upload", files=files)
        logger.info("Copyright form uploaded", file=form_path.name)
        return CopyrightRecord.model_validate(body.get("data") or {})

    def send_message(self, copyright_id: str, message: str) -> list[CopyrightMessage]:
        """Post to the copyright thread. Returns the updated message list."""
        payload = {
            "copyrightId": copyright_id,
            "message": require_text("message", message, "Message cannot be empty"),
        }
        body = self.client.post("/api/copyright/message", json=payload)
        return [CopyrightMessage.model_validate(m) for m in body.get("data", [])]

    def list_forms(self) -> list[CopyrightRecord]:
        body = self.client.get("/api/copyright/admin/list")
        return [CopyrightRecord.model_validate(r) for r in body.get("data", [])]

    def review(self, copyright_id: str, status: str, comment: str = "") -> CopyrightRecord:
        """Approve or reject a submitted form. A default comment is sent when none is given."""
        if status not in REVIEW_STATUSES:
            raise FormValidationError("status", "Status must be 'Approved' or 'Rejected'")
        payload = {
            "copyrightId": copyright_id,
            "status": status,
            "adminComment": comment.strip() or f"Form {status.lower()} by Admin.",
        }
        body = self.client.post("/api/copyright/admin/review", json=payload)
        logger.info("Copyright form reviewed", copyright_id=copyright_id, status=status)
        return CopyrightRecord.model_validate(body.get("data") or {})

    def paper_history(self, submission_id: str) -> PaperHistory:
        body = self.client.get(f"/api/admin/papers/{submission_id}/history")
        return PaperHistory.model_validate(body)
