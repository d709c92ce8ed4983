"""Author-side paper lifecycle: submission, revisions, re-upload and final document."""

import base64
from pathlib import Path
from typing import Optional

from conference_portal.client.errors import FormValidationError
from conference_portal.client.services.base import BaseService
from conference_portal.config.constants import (
    FINAL_DOC_EXTENSIONS,
    PAPER_CATEGORIES,
    PAPER_EXTENSIONS,
    PAPER_MAX_BYTES,
    REVISION_EXTENSIONS,
    REVISION_MAX_BYTES,
)
from conference_portal.core.models import PaperHistory, PaperSubmission, RevisionRequest
from conference_portal.core.workflow import require_text
from conference_portal.utils.logging_config import get_logger
from conference_portal.utils.utils import validate_upload

logger = get_logger(__name__)


class PaperService(BaseService):
    def submit_paper(
        self,
        paper_title: str,
        author_name: str,
        email: str,
        category: str,
        pdf_path: str,
    ) -> str:
        """Submit a new paper and return its submission id.

        The manuscript must be a PDF, DOC or DOCX under 3 MB.
        """
        fields = {
            "paperTitle": require_text("paperTitle", paper_title, "Paper title is required"),
            "authorName": require_text("authorName", author_name, "Author name is required"),
            "email": require_text("email", email, "Email is required"),
            "category": require_text("category", category, "Please select a category"),
        }
        if category not in PAPER_CATEGORIES:
            raise FormValidationError("category", f"Unknown category '{category}'")
        path = validate_upload(pdf_path, PAPER_EXTENSIONS, PAPER_MAX_BYTES, field="pdf")

        with self.open_files(pdf=path) as files:
            body = self.client.post("/api/papers/submit", data=fields, files=files)

        submission_id = body.get("submissionId", "")
        if submission_id:
            self.store.set("last_submission_id", submission_id)
        logger.info("Paper submitted", submission_id=submission_id, title=paper_title)
        return submission_id

    def edit_submission(self, submission_id: str, fields: dict, pdf_path: Optional[str] = None) -> PaperSubmission:
        """Edit a submission's details, optionally replacing the manuscript."""
        if pdf_path is None:
            body = self.client.put(f"/api/papers/edit/{submission_id}", data=fields)
        else:
            path = validate_upload(pdf_path, PAPER_EXTENSIONS, PAPER_MAX_BYTES, field="pdf")
            with self.open_files(pdf=path) as files:
                body = self.client.put(f"/api/papers/edit/{submission_id}", data=fields, files=files)
        return PaperSubmission.model_validate(body.get("submission") or {})

    def my_submission(self) -> Optional[PaperSubmission]:
        body = self.client.get("/api/papers/my-submission")
        if not body.get("hasSubmission"):
            return None
        return PaperSubmission.model_validate(body.get("submission") or {})

    def status(self, submission_id: str) -> PaperSubmission:
        """Public status lookup by submission id."""
        body = self.client.get(f"/api/papers/status/{submission_id}", authenticated=False)
        return PaperSubmission.model_validate(body.get("submission") or {})

    def submit_revision(
        self,
        paper_id: str,
        submission_id: str,
        author_email: str,
        clean_pdf: str,
        highlighted_pdf: str,
        response_pdf: str,
    ) -> dict:
        """Upload a full revision package: clean manuscript, highlighted changes and response letter."""
        paths = {
            "cleanPdf": validate_upload(clean_pdf, REVISION_EXTENSIONS, REVISION_MAX_BYTES, "cleanPdf"),
            "highlightedPdf": validate_upload(
                highlighted_pdf, REVISION_EXTENSIONS, REVISION_MAX_BYTES, "highlightedPdf"
            ),
            "responsePdf": validate_upload(
                response_pdf, REVISION_EXTENSIONS, REVISION_MAX_BYTES, "responsePdf"
            ),
        }
        fields = {"paperId": paper_id, "submissionId": submission_id, "authorEmail": author_email}
        with self.open_files(**paths) as files:
            body = self.client.post("/api/papers/submit-revision", data=fields, files=files)
        logger.info("Revision package submitted", submission_id=submission_id)
        return body

    def revision_requests(self) -> list[RevisionRequest]:
        body = self.client.get("/api/author/revision-requests")
        return [RevisionRequest.model_validate(r) for r in body.get("revisions", [])]

    def submit_revision_file(
        self, revision: RevisionRequest, pdf_path: str, author_notes: str = ""
    ) -> dict:
        """Answer a revision request with a single revised PDF (sent inline as base64)."""
        path = validate_upload(pdf_path, REVISION_EXTENSIONS, REVISION_MAX_BYTES, field="file")
        raw = Path(path).read_bytes()
        payload = {
            "submissionId": revision.submission_id,
            "paperId": revision.paper_id,
            "fileName": path.name,
            "fileSize": len(raw),
            "base64": "data:application/pdf;base64," + base64.b64encode(raw).decode("ascii"),
            "authorNotes": author_notes,
        }
        body = self.client.post("/api/author/submit-revision", json=payload)
        logger.info("Revision file submitted", submission_id=revision.submission_id, bytes=len(raw))
        return body

    def reupload(self, submission_id: str, pdf_path: str) -> dict:
        path = validate_upload(pdf_path, PAPER_EXTENSIONS, PAPER_MAX_BYTES, field="pdf")
        with self.open_files(pdf=path) as files:
            return self.client.post(f"/api/papers/reupload/{submission_id}", files=files)

    def upload_final_document(self, submission_id: str, doc_path: str) -> dict:
        """Upload the camera-ready document (DOC, DOCX or PDF) for an accepted paper."""
        path = validate_upload(doc_path, FINAL_DOC_EXTENSIONS, field="finalDoc")
        with self.open_files(finalDoc=path) as files:
            body = self.client.post(f"/api/papers/upload-final-doc/{submission_id}", files=files)
        logger.info("Final document uploaded", submission_id=submission_id)
        return body

    def history(self, submission_id: str) -> PaperHistory:
        body = self.client.get(f"/api/papers/{submission_id}/history")
        return PaperHistory.model_validate(body)

    def check_selection(self) -> dict:
        """Whether the logged-in author was selected for the conference."""
        body = self.client.get("/api/papers/check-selection")
        return {
            "isSelected": bool(body.get("isSelected")),
            "selectedUser": body.get("selectedUser"),
        }
