"""Reviewer side of the review lifecycle."""

from typing import Optional

from conference_portal.client.services.base import BaseService
from conference_portal.core.models import (
    ConversationMessage,
    PaperSubmission,
    ReviewerAssignment,
    ReviewForm,
)
from conference_portal.core.workflow import require_text, validate_review_form
from conference_portal.utils.logging_config import get_logger

logger = get_logger(__name__)


class ReviewerService(BaseService):
    def dashboard_stats(self) -> dict:
        return self.client.get("/api/reviewer/dashboard-stats").get("stats", {})

    def assigned_papers(self) -> list[PaperSubmission]:
        body = self.client.get("/api/reviewer/papers")
        return [PaperSubmission.model_validate(p) for p in body.get("papers", [])]

    def paper(self, submission_id: str) -> PaperSubmission:
        body = self.client.get(f"/api/reviewer/papers/{submission_id}")
        return PaperSubmission.model_validate(body.get("paper") or {})

    def draft(self, submission_id: str) -> Optional[ReviewForm]:
        """Saved draft for a paper, or None if the reviewer has not started one."""
        body = self.client.get(f"/api/reviewer/papers/{submission_id}/draft")
        review = body.get("review")
        if not review:
            return None
        return ReviewForm.from_draft(review)

    def submit_review(self, submission_id: str, form: ReviewForm) -> dict:
        validate_review_form(form)
        body = self.client.post(
            f"/api/reviewer/papers/{submission_id}/submit-review", json=form.to_payload()
        )
        logger.info(
            "Review submitted",
            submission_id=submission_id,
            recommendation=form.recommendation,
            overall=form.overall_rating,
        )
        return body

    def assignment(self, assignment_id: str, reviewer_email: str) -> ReviewerAssignment:
        """Load an invitation from the link in the assignment email."""
        body = self.client.get(
            f"/api/reviewer/assignment/{assignment_id}",
            params={"email": reviewer_email},
            authenticated=False,
        )
        return ReviewerAssignment.model_validate(body.get("assignment") or body)

    def accept_assignment(self, assignment: ReviewerAssignment) -> dict:
        payload = {
            "assignmentId": assignment.id,
            "reviewerEmail": assignment.reviewer_email,
            "paperId": assignment.paper_id,
        }
        body = self.client.post(
            "/api/reviewer/accept-assignment", json=payload, authenticated=False
        )
        logger.info("Assignment accepted", assignment_id=assignment.id)
        return body

    def reject_assignment(
        self,
        assignment: ReviewerAssignment,
        reason: str,
        alternative_email: Optional[str] = None,
        alternative_name: Optional[str] = None,
    ) -> dict:
        """Decline an invitation, optionally suggesting another reviewer."""
        payload = {
            "assignmentId": assignment.id,
            "reviewerEmail": assignment.reviewer_email,
            "paperId": assignment.paper_id,
            "rejectionReason": require_text(
                "rejectionReason", reason, "Please provide a reason for declining"
            ),
            "alternativeReviewerEmail": alternative_email or "",
            "alternativeReviewerName": alternative_name or "",
        }
        body = self.client.post(
            "/api/reviewer/reject-assignment", json=payload, authenticated=False
        )
        logger.info("Assignment declined", assignment_id=assignment.id)
        return body

    def messages(self, submission_id: str) -> list[ConversationMessage]:
        body = self.client.get(f"/api/reviewer/messages/{submission_id}")
        thread = body.get("messageThread") or {}
        return [ConversationMessage.model_validate(m) for m in thread.get("conversation", [])]

    def send_message(self, submission_id: str, message: str) -> dict:
        payload = {
            "submissionId": submission_id,
            "recipientType": "editor",
            "message": require_text("message", message, "Message cannot be empty"),
        }
        return self.client.post("/api/reviewer/send-message", json=payload)
