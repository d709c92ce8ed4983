"""Client-side workflow rules: role routing, deadlines, acceptance and form checks.

The backend owns every state transition. These helpers only decide what the
UI offers and catch incomplete forms before a request is sent.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional

from conference_portal.client.errors import FormValidationError
from conference_portal.config.constants import (
    BANK_TRANSFER_SUB_METHODS,
    MIN_REVIEWS_FOR_ACCEPTANCE,
    PAYMENT_METHODS,
    REGISTRATION_TYPES,
    PaperStatus,
    Role,
)
from conference_portal.core.models import PaperSubmission, ReviewForm, ReviewRecord

SECONDS_PER_DAY = 24 * 60 * 60


def dashboard_for_role(role: Optional[str]) -> str:
    """Route a freshly logged-in user: reviewers to /reviewer, everyone else to /dashboard."""
    if role == Role.REVIEWER.value:
        return "/reviewer"
    return "/dashboard"


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def _days_delta(deadline: datetime, now: Optional[datetime]) -> float:
    now = _now(now)
    if deadline.tzinfo is None and now.tzinfo is not None:
        deadline = deadline.replace(tzinfo=timezone.utc)
    elif deadline.tzinfo is not None and now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (deadline - now).total_seconds() / SECONDS_PER_DAY


@dataclass
class DeadlineStatus:
    status: str
    text: str
    days_left: int


def deadline_status(deadline: datetime, now: Optional[datetime] = None) -> DeadlineStatus:
    """Label a reviewer deadline. Days are rounded up, so 3 hours left is 'Due in 1 day'."""
    days_left = math.ceil(_days_delta(deadline, now))
    if days_left < 0:
        return DeadlineStatus("overdue", f"Overdue by {abs(days_left)} day(s)", days_left)
    if days_left == 0:
        return DeadlineStatus("today", "Due today", days_left)
    if days_left <= 1:
        return DeadlineStatus("urgent", f"Due in {days_left} day", days_left)
    return DeadlineStatus("ok", f"Due in {days_left} days", days_left)


def assignment_urgency(deadline: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Bucket an assignment for filtering: 'overdue', 'urgent' (2 days or less) or 'pending'.

    Days are rounded down here. Papers without a deadline are treated as pending.
    """
    if deadline is None:
        return "pending"
    days_left = math.floor(_days_delta(deadline, now))
    if days_left < 0:
        return "overdue"
    if days_left <= 2:
        return "urgent"
    return "pending"


def reviewers_with_status(
    paper: PaperSubmission,
    reviews: Iterable[ReviewRecord],
    re_reviews: Iterable[ReviewRecord] = (),
) -> list[dict]:
    """Join a paper's assigned reviewers with the reviews fetched for it.

    The paper list only carries reviewer names and emails, so each entry gains
    ``review``, ``reReview`` and a ``reviewStatus`` of Submitted or Pending.
    """
    by_reviewer = {r.reviewer_id: r for r in reviews if r.reviewer_id}
    re_by_reviewer = {r.reviewer_id: r for r in re_reviews if r.reviewer_id}
    joined = []
    for reviewer in paper.assigned_reviewers:
        reviewer_id = reviewer.get("_id") or reviewer.get("id")
        review = by_reviewer.get(reviewer_id)
        joined.append(
            {
                **reviewer,
                "reviewStatus": "Submitted" if review is not None else "Pending",
                "review": review,
                "reReview": re_by_reviewer.get(reviewer_id),
            }
        )
    return joined


def reviewer_has_review(reviewer: dict) -> bool:
    return reviewer.get("review") is not None or reviewer.get("reviewStatus") == "Submitted"


def can_accept(status: Optional[str], reviewers: Iterable[dict]) -> bool:
    """Whether the editor may accept a paper.

    Requires at least three assigned reviewers who have all submitted, unless
    the paper is a revised submission.
    """
    if status == PaperStatus.REVISED_SUBMITTED.value:
        return True
    reviewers = list(reviewers)
    return len(reviewers) >= MIN_REVIEWS_FOR_ACCEPTANCE and all(
        reviewer_has_review(r) for r in reviewers
    )


def validate_review_form(form: ReviewForm) -> ReviewForm:
    if not form.comments.strip():
        raise FormValidationError("comments", "Please provide comments for the author")
    if not form.comments_to_editor.strip():
        raise FormValidationError("commentsToEditor", "Please provide comments for the editor")
    return form


def validate_payment(
    registration_type: str,
    payment_method: str,
    payment_sub_method: Optional[str],
    transaction_id: Optional[str],
    has_proof: bool,
    country: Optional[str],
    category: Optional[str],
    institution: Optional[str] = None,
    address: Optional[str] = None,
) -> None:
    """Check a registration form before it is submitted."""
    if registration_type not in REGISTRATION_TYPES:
        raise FormValidationError("registrationType", f"Unknown registration type '{registration_type}'")
    if not country:
        raise FormValidationError("country", "Please select your country")
    if not category:
        raise FormValidationError("registrationCategory", "Please select a registration category")
    if payment_method not in PAYMENT_METHODS:
        raise FormValidationError("paymentMethod", "Please select a payment method")

    if payment_method == "bank-transfer":
        if payment_sub_method not in BANK_TRANSFER_SUB_METHODS:
            raise FormValidationError(
                "paymentSubMethod", "Please choose UPI or bank account for the transfer"
            )
    elif not (transaction_id or "").strip():
        raise FormValidationError("transactionId", "Please enter the transaction ID")

    if not has_proof:
        raise FormValidationError("paymentScreenshot", "Please upload the payment screenshot")

    if registration_type == "listener":
        if not (institution or "").strip():
            raise FormValidationError("institution", "Please enter your institution")
        if not (address or "").strip():
            raise FormValidationError("address", "Please enter your address")


def require_text(field: str, value: Optional[str], message: str) -> str:
    """Return the trimmed value or raise if it is blank."""
    value = (value or "").strip()
    if not value:
        raise FormValidationError(field, message)
    return value
