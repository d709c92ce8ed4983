"""Editor side of the review lifecycle: reviewers, decisions, messages and reminders."""

from datetime import date, datetime
from typing import Iterable, Optional, Union

from tqdm import tqdm

from conference_portal.client.errors import FormValidationError
from conference_portal.client.services.base import BaseService
from conference_portal.config.constants import FINAL_DECISIONS, REVISION_DECISIONS
from conference_portal.core.models import (
    ConversationMessage,
    NonRespondingReviewer,
    PaperSubmission,
    PdfAsset,
    ReviewRecord,
    ReviewerProfile,
    RevisionRequest,
)
from conference_portal.core.workflow import require_text
from conference_portal.utils.logging_config import get_logger

logger = get_logger(__name__)

DateLike = Union[str, date, datetime]


def _date_str(value: DateLike) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class EditorService(BaseService):
    def verify_access(self) -> bool:
        body = self.client.get("/api/editor/verify-access")
        return bool(body.get("success", True))

    def dashboard_stats(self) -> dict:
        return self.client.get("/api/editor/dashboard-stats").get("stats", {})

    def papers(self) -> list[PaperSubmission]:
        body = self.client.get("/api/editor/papers")
        return [PaperSubmission.model_validate(p) for p in body.get("papers", [])]

    def pdf(self, submission_id: str) -> dict:
        """PDF location and file name for a submission."""
        return self.client.get(f"/api/editor/pdf/{submission_id}")

    # Reviewer accounts

    def reviewers(self) -> list[ReviewerProfile]:
        body = self.client.get("/api/editor/reviewers")
        return [ReviewerProfile.model_validate(r) for r in body.get("reviewers", [])]

    def create_reviewer(self, email: str, username: str, password: str) -> dict:
        payload = {
            "email": require_text("email", email, "Email is required"),
            "username": require_text("username", username, "Username is required"),
            "password": require_text("password", password, "Password is required"),
        }
        body = self.client.post("/api/editor/reviewers", json=payload)
        logger.info("Reviewer created", email=email)
        return body

    def update_reviewer(self, reviewer_id: str, username: str, email: str) -> dict:
        return self.client.put(
            f"/api/editor/reviewers/{reviewer_id}",
            json={"username": username, "email": email},
        )

    def delete_reviewer(self, reviewer_id: str) -> dict:
        body = self.client.delete(f"/api/editor/reviewers/{reviewer_id}")
        logger.info("Reviewer deleted", reviewer_id=reviewer_id)
        return body

    def assign_reviewers(
        self, paper: PaperSubmission, reviewer_ids: list[str], deadline: DateLike
    ) -> dict:
        if not reviewer_ids:
            raise FormValidationError("reviewerIds", "Select at least one reviewer")
        if not deadline:
            raise FormValidationError("deadline", "Please set a review deadline")
        payload = {
            "paperId": paper.id,
            "submissionId": paper.submission_id,
            "reviewerIds": list(reviewer_ids),
            "deadline": _date_str(deadline),
        }
        body = self.client.post("/api/editor/assign-reviewers", json=payload)
        logger.info(
            "Reviewers assigned",
            submission_id=paper.submission_id,
            reviewer_count=len(reviewer_ids),
        )
        return body

    def remove_reviewer(self, paper_id: str, reviewer_id: str) -> dict:
        return self.client.post(
            "/api/editor/remove-reviewer",
            json={"paperId": paper_id, "reviewerId": reviewer_id},
        )

    # Reviews

    def paper_reviews(self, paper_id: str) -> list[ReviewRecord]:
        body = self.client.get(f"/api/editor/papers/{paper_id}/reviews")
        return [ReviewRecord.model_validate(r) for r in body.get("reviews", [])]

    def paper_re_reviews(self, paper_id: str) -> list[ReviewRecord]:
        body = self.client.get(f"/api/editor/papers/{paper_id}/re-reviews")
        return [ReviewRecord.model_validate(r) for r in body.get("reReviews", [])]

    def review_details(self, review_id: str) -> ReviewRecord:
        body = self.client.get(f"/api/editor/review/{review_id}")
        return ReviewRecord.model_validate(body.get("review") or {})

    def update_review(self, review_id: str, fields: dict) -> dict:
        return self.client.put(f"/api/editor/reviews/{review_id}", json=fields)

    # Decisions

    def accept_paper(self, paper_id: str) -> dict:
        body = self.client.post("/api/editor/accept-paper", json={"paperId": paper_id})
        logger.info("Paper accepted", paper_id=paper_id)
        return body

    def reject_paper(self, paper_id: str, reason: str, comments: str = "") -> dict:
        payload = {
            "rejectionReason": require_text("rejectionReason", reason, "Please provide a rejection reason"),
            "rejectionComments": comments,
        }
        body = self.client.post(f"/api/editor/reject-paper/{paper_id}", json=payload)
        logger.info("Paper rejected", paper_id=paper_id)
        return body

    def request_revision(self, paper_id: str, message: str, deadline: DateLike) -> dict:
        payload = {
            "paperId": paper_id,
            "revisionMessage": require_text("revisionMessage", message, "Please describe the required changes"),
            "revisionDeadline": _date_str(deadline),
        }
        body = self.client.post("/api/editor/request-revision", json=payload)
        logger.info("Revision requested", paper_id=paper_id)
        return body

    def send_final_decision(
        self,
        paper: PaperSubmission,
        decision: str,
        email_content: str,
        reviewer_comments: str = "",
    ) -> dict:
        """Send the decision email built with core.templates.compose_decision_email."""
        if decision not in FINAL_DECISIONS:
            raise FormValidationError(
                "decision", f"Decision must be one of {', '.join(FINAL_DECISIONS)}"
            )
        payload = {
            "submissionId": paper.submission_id,
            "decision": decision,
            "authorEmail": paper.email,
            "authorName": paper.author_name,
            "paperTitle": paper.paper_title,
            "emailContent": require_text("emailContent", email_content, "Email content cannot be empty"),
            "reviewerComments": reviewer_comments,
        }
        body = self.client.post(f"/api/editor/papers/{paper.id}/final-decision", json=payload)
        logger.info("Final decision sent", submission_id=paper.submission_id, decision=decision)
        return body

    # Messages

    def messages(self) -> list[dict]:
        return self.client.get("/api/editor/messages").get("messages", [])

    def paper_messages(self, paper_id: str) -> list[dict]:
        return self.client.get(f"/api/editor/papers/{paper_id}/messages").get("messages", [])

    def message_thread(
        self,
        submission_id: str,
        review_id: Optional[str] = None,
        reviewer_id: Optional[str] = None,
    ) -> list[ConversationMessage]:
        """Editor/reviewer conversation for one paper.

        Before a review exists the thread is looked up by reviewer instead.
        """
        if review_id:
            body = self.client.get(f"/api/editor/messages/{submission_id}/{review_id}")
        else:
            body = self.client.get(
                f"/api/editor/messages/{submission_id}/null",
                params={"reviewerId": reviewer_id},
            )
        thread = body.get("messageThread") or {}
        return [ConversationMessage.model_validate(m) for m in thread.get("conversation", [])]

    def send_message(
        self,
        submission_id: str,
        message: str,
        reviewer_id: str,
        review_id: Optional[str] = None,
    ) -> dict:
        payload = {
            "submissionId": submission_id,
            "reviewId": review_id,
            "reviewerId": reviewer_id,
            "recipientType": "reviewer",
            "message": require_text("message", message, "Message cannot be empty"),
        }
        return self.client.post("/api/editor/send-message", json=payload)

    def send_message_to_author(self, paper: PaperSubmission, message: str) -> dict:
        payload = {
            "authorEmail": paper.email,
            "authorName": paper.author_name,
            "submissionId": paper.submission_id,
            "message": require_text("message", message, "Message cannot be empty"),
        }
        return self.client.post("/api/editor/send-message-to-author", json=payload)

    def send_reviewer_inquiry(self, paper_id: str, reviewer_id: str, message: str) -> dict:
        payload = {
            "paperId": paper_id,
            "reviewerId": reviewer_id,
            "message": require_text("message", message, "Message cannot be empty"),
        }
        return self.client.post("/api/editor/send-reviewer-inquiry", json=payload)

    def send_re_review_emails(self, paper_id: str) -> int:
        """Ask the original reviewers to look at a revised submission. Returns emails sent."""
        body = self.client.post("/api/editor/send-re-review-emails", json={"paperId": paper_id})
        return int(body.get("emailsSent", 0))

    # Reminders

    def non_responding_reviewers(self) -> list[NonRespondingReviewer]:
        body = self.client.get("/api/editor/non-responding-reviewers")
        return [NonRespondingReviewer.model_validate(r) for r in body.get("reviewers", [])]

    def send_reminder(self, reviewer: NonRespondingReviewer) -> dict:
        body = self.client.post("/api/editor/send-reminder", json=reviewer.reminder_payload())
        logger.info(
            "Reminder sent",
            submission_id=reviewer.submission_id,
            reviewer_email=reviewer.reviewer_email,
        )
        return body

    def send_bulk_reminders(self, reviewers: Iterable[NonRespondingReviewer]) -> dict:
        reminders = [r.reminder_payload() for r in reviewers]
        if not reminders:
            raise FormValidationError("reminders", "Select at least one reviewer to remind")
        body = self.client.post("/api/editor/send-bulk-reminders", json={"reminders": reminders})
        return body.get("results", {})

    # Revisions

    def revision_submissions(self) -> list[RevisionRequest]:
        body = self.client.get("/api/editor/revision-submissions")
        return [RevisionRequest.model_validate(r) for r in body.get("revisions", [])]

    def review_revision(
        self, revision: RevisionRequest, decision: str, comments: str = ""
    ) -> dict:
        if decision not in REVISION_DECISIONS:
            raise FormValidationError(
                "decision", f"Decision must be one of {', '.join(REVISION_DECISIONS)}"
            )
        payload = {
            "revisionId": revision.id,
            "paperId": revision.paper_id,
            "decision": decision,
            "editorComments": comments,
            "authorEmail": revision.author_email,
        }
        body = self.client.post("/api/editor/review-revision", json=payload)
        logger.info("Revision reviewed", submission_id=revision.submission_id, decision=decision)
        return body

    # Stored PDFs

    def pdfs(self) -> list[PdfAsset]:
        body = self.client.get("/api/editor/pdfs")
        return [PdfAsset.model_validate(p) for p in body.get("pdfs", [])]

    def delete_pdf(self, public_id: str) -> dict:
        return self.client.delete("/api/editor/pdfs", json={"publicId": public_id})

    def delete_pdfs(self, public_ids: list[str]) -> int:
        """Delete several stored PDFs one request at a time. Returns how many were deleted."""
        deleted = 0
        for public_id in tqdm(public_ids, desc="Deleting PDFs", disable=len(public_ids) < 2):
            self.delete_pdf(public_id)
            deleted += 1
        return deleted

    def send_selection_email(self, submission_id: str) -> dict:
        """Notify a selected author and ask for the final document."""
        return self.client.post(
            "/api/editor/selected-users/send-email", json={"submissionId": submission_id}
        )
