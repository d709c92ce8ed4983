"""Data models for records returned by the conference backend."""

from datetime import datetime
from typing import List, Optional

import numpy as np
from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from conference_portal.config.constants import (
    DEFAULT_RATING,
    DEFAULT_RECOMMENDATION,
    RATING_RANGE,
    REVIEW_RECOMMENDATIONS,
    AssignmentStatus,
    CopyrightStatus,
    PaperStatus,
    PaymentStatus,
    RevisionStatus,
)
from conference_portal.utils.logging_config import get_logger

logger = get_logger(__name__)


def _enum_or_none(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        return None


class ApiModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python, unknown fields ignored."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }

    def to_payload(self) -> dict:
        """Serialize back to the backend's camelCase field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def _id_field():
    return Field(default=None, validation_alias=AliasChoices("_id", "id"))


class UserProfile(ApiModel):
    id: Optional[str] = _id_field()
    username: Optional[str] = None
    email: str = ""
    role: Optional[str] = None
    country: Optional[str] = None
    user_type: Optional[str] = None
    verified: Optional[bool] = None


class ReviewerProfile(UserProfile):
    """A reviewer account with the workload figures the editor dashboard shows."""

    name: Optional[str] = None
    expertise: List[str] = Field(default_factory=list)
    assigned_papers: int = 0
    completed_reviews: int = 0
    pending_reviews: int = 0
    overdue_reviews: int = 0
    average_rating: float = 0.0
    status: str = "active"
    created_at: Optional[datetime] = None

    @field_validator("average_rating", mode="before")
    @classmethod
    def _rating_or_zero(cls, value):
        return value or 0.0

    @property
    def display_name(self) -> str:
        return self.name or self.username or self.email


class AuthSession(ApiModel):
    """Credentials returned by a successful login."""

    token: str
    role: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    country: Optional[str] = None

    def user_record(self) -> dict:
        return {"email": self.email, "username": self.username, "role": self.role}


class AssignmentDetails(ApiModel):
    deadline: Optional[datetime] = None
    status: Optional[str] = None
    assigned_at: Optional[datetime] = None


class PaperSubmission(ApiModel):
    """A submitted paper as seen by its author, a reviewer or the editor."""

    id: Optional[str] = _id_field()
    submission_id: str = ""
    paper_title: str = ""
    author_name: str = ""
    email: str = ""
    category: Optional[str] = None
    topic: Optional[str] = None
    status: Optional[str] = None
    pdf_url: Optional[str] = None
    pdf_file_name: Optional[str] = None
    final_doc_url: Optional[str] = None
    assignment_details: Optional[AssignmentDetails] = None
    assigned_reviewers: List[dict] = Field(default_factory=list)
    review_assignments: List[dict] = Field(default_factory=list)
    revision_count: int = 0
    created_at: Optional[datetime] = None

    @property
    def paper_status(self) -> Optional[PaperStatus]:
        return _enum_or_none(PaperStatus, self.status)

    @property
    def deadline(self) -> Optional[datetime]:
        return self.assignment_details.deadline if self.assignment_details else None

    @property
    def reviewer_count(self) -> int:
        return len(self.assigned_reviewers)


class ReviewForm(ApiModel):
    """Review draft filled in by a reviewer before submission."""

    comments: str = ""
    comments_to_reviewer: str = ""
    comments_to_editor: str = ""
    strengths: str = ""
    weaknesses: str = ""
    overall_rating: int = DEFAULT_RATING
    novelty_rating: int = DEFAULT_RATING
    quality_rating: int = DEFAULT_RATING
    clarity_rating: int = DEFAULT_RATING
    recommendation: str = DEFAULT_RECOMMENDATION

    @field_validator("overall_rating", "novelty_rating", "quality_rating", "clarity_rating")
    @classmethod
    def _rating_in_range(cls, value: int) -> int:
        low, high = RATING_RANGE
        if not low <= value <= high:
            raise ValueError(f"Rating must be between {low} and {high}, got {value}")
        return value

    @field_validator("recommendation")
    @classmethod
    def _known_recommendation(cls, value: str) -> str:
        if value not in REVIEW_RECOMMENDATIONS:
            raise ValueError(
                f"Recommendation must be one of {', '.join(REVIEW_RECOMMENDATIONS)}"
            )
        return value

    @classmethod
    def from_draft(cls, draft: Optional[dict]) -> "ReviewForm":
        """Prefill a form from a saved draft, keeping defaults for anything missing."""
        if not draft:
            return cls()
        fields = {
            key: value for key, value in draft.items() if value is not None and value != ""
        }
        return cls.model_validate(fields)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class ReviewRecord(ApiModel):
    """A review already stored on the server."""

    id: Optional[str] = _id_field()
    submission_id: Optional[str] = None
    reviewer_id: Optional[str] = None
    reviewer_name: Optional[str] = None
    reviewer_email: Optional[str] = None
    comments: Optional[str] = None
    comments_to_reviewer: Optional[str] = None
    comments_to_editor: Optional[str] = None
    strengths: Optional[str] = None
    weaknesses: Optional[str] = None
    overall_rating: Optional[int] = None
    novelty_rating: Optional[int] = None
    quality_rating: Optional[int] = None
    clarity_rating: Optional[int] = None
    recommendation: Optional[str] = None
    status: Optional[str] = None
    submitted_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_reviewer(cls, data):
        # Reviews populate "reviewer" with username and email, re-reviews use "reviewerId"
        if not isinstance(data, dict):
            return data
        reviewer = data.get("reviewer", data.get("reviewerId"))
        if isinstance(reviewer, dict):
            data = {**data, "reviewerId": reviewer.get("_id") or reviewer.get("id")}
            data.setdefault("reviewerName", reviewer.get("username") or reviewer.get("name"))
            data.setdefault("reviewerEmail", reviewer.get("email"))
        elif isinstance(reviewer, str):
            data = {**data, "reviewerId": reviewer}
        return data

    @property
    def ratings(self) -> list[int]:
        values = [self.overall_rating, self.novelty_rating, self.quality_rating, self.clarity_rating]
        return [v for v in values if v is not None]

    @property
    def avg_rating(self) -> float:
        """Mean of the ratings the reviewer filled in."""
        return float(np.mean(self.ratings)) if self.ratings else 0.0


class ReviewerAssignment(ApiModel):
    id: Optional[str] = _id_field()
    paper_id: Optional[str] = None
    submission_id: Optional[str] = None
    reviewer_id: Optional[str] = None
    reviewer_email: str = ""
    reviewer_name: Optional[str] = None
    paper_title: Optional[str] = None
    abstract: Optional[str] = None
    status: str = AssignmentStatus.PENDING.value
    rejection_reason: Optional[str] = None
    review_deadline: Optional[datetime] = None

    @field_validator("paper_id", "reviewer_id", mode="before")
    @classmethod
    def _flatten_reference(cls, value):
        if isinstance(value, dict):
            return value.get("_id") or value.get("id")
        return value

    @property
    def is_pending(self) -> bool:
        return self.status == AssignmentStatus.PENDING.value


class ConversationMessage(ApiModel):
    sender: Optional[str] = None
    sender_type: Optional[str] = None
    sender_name: Optional[str] = None
    message: str = ""
    timestamp: Optional[datetime] = None


class MessageThread(ApiModel):
    id: Optional[str] = _id_field()
    submission_id: Optional[str] = None
    conversation: List[ConversationMessage] = Field(default_factory=list)


class RevisionRequest(ApiModel):
    """An editor's request for a revised manuscript, and the author's response."""

    id: Optional[str] = _id_field()
    submission_id: str = ""
    paper_id: Optional[str] = None
    paper_title: Optional[str] = None
    author_email: Optional[str] = None
    original_decision: Optional[str] = None
    deadline: Optional[datetime] = None
    revision_files: List[dict] = Field(default_factory=list)
    author_notes: Optional[str] = None
    editor_comments: Optional[str] = None
    revision_status: str = RevisionStatus.PENDING.value
    days_remaining: Optional[int] = None

    @property
    def status(self) -> Optional[RevisionStatus]:
        return _enum_or_none(RevisionStatus, self.revision_status)

    @property
    def is_open(self) -> bool:
        """Whether the author can still upload a file for this request."""
        return self.revision_status in (
            RevisionStatus.PENDING.value,
            RevisionStatus.REVISE_AGAIN.value,
        )


class FeeCategory(ApiModel):
    id: str
    label: str
    member_price: int
    non_member_price: int
    currency: str
    description: str = ""

    def price_for(self, is_member: bool) -> int:
        return self.member_price if is_member else self.non_member_price


class Registration(ApiModel):
    """An author's payment registration."""

    id: Optional[str] = _id_field()
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    paper_title: Optional[str] = None
    submission_id: Optional[str] = None
    country: Optional[str] = None
    institution: Optional[str] = None
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    payment_screenshot: Optional[str] = None
    registration_category: Optional[str] = None
    payment_status: str = PaymentStatus.PENDING.value
    registration_number: Optional[str] = None
    verification_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    registration_date: Optional[datetime] = None
    verified_at: Optional[datetime] = None

    @property
    def status(self) -> Optional[PaymentStatus]:
        return _enum_or_none(PaymentStatus, self.payment_status)

    @property
    def display_name(self) -> str:
        return self.author_name or ""

    @property
    def display_email(self) -> str:
        return self.author_email or ""


class ListenerRegistration(Registration):
    """A registration for an attendee without a paper."""

    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    is_scis_member: bool = False

    @property
    def display_name(self) -> str:
        return self.name or self.author_name or ""

    @property
    def display_email(self) -> str:
        return self.email or self.author_email or ""


class CommitteeLinks(ApiModel):
    email: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None


class CommitteeMember(ApiModel):
    id: Optional[str] = _id_field()
    name: str
    role: str
    affiliation: str = ""
    country: Optional[str] = None
    designation: Optional[str] = None
    image: Optional[str] = None
    links: CommitteeLinks = Field(default_factory=CommitteeLinks)
    order: int = 0
    active: bool = True


class CopyrightMessage(ApiModel):
    sender: str
    message: str
    timestamp: Optional[datetime] = None


class CopyrightRecord(ApiModel):
    id: Optional[str] = _id_field()
    submission_id: Optional[str] = None
    author_email: Optional[str] = None
    author_name: Optional[str] = None
    paper_title: Optional[str] = None
    copyright_form_url: Optional[str] = None
    status: str = CopyrightStatus.PENDING.value
    submitted_at: Optional[datetime] = None
    messages: List[CopyrightMessage] = Field(default_factory=list)


class SupportMessage(ApiModel):
    sender: Optional[str] = None
    sender_name: Optional[str] = None
    message: str = ""
    timestamp: Optional[datetime] = None


class SupportThread(ApiModel):
    id: Optional[str] = _id_field()
    author_id: Optional[str] = None
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    status: Optional[str] = None
    messages: List[SupportMessage] = Field(default_factory=list)
    last_message_at: Optional[datetime] = None

    @field_validator("author_id", mode="before")
    @classmethod
    def _flatten_author(cls, value):
        if isinstance(value, dict):
            return value.get("_id") or value.get("id")
        return value


class NonRespondingReviewer(ApiModel):
    id: Optional[str] = _id_field()
    submission_id: str = ""
    reviewer_id: str = ""
    reviewer_email: str = ""
    reviewer_name: Optional[str] = None
    paper_title: Optional[str] = None
    days_until_deadline: Optional[int] = None
    reminder_count: int = 0
    last_reminder_sent: Optional[datetime] = None

    def reminder_payload(self) -> dict:
        return {
            "submissionId": self.submission_id,
            "reviewerId": self.reviewer_id,
            "reviewerEmail": self.reviewer_email,
        }


class PdfAsset(ApiModel):
    public_id: str
    file_name: Optional[str] = None
    url: Optional[str] = None
    size: Optional[int] = None
    uploaded_at: Optional[datetime] = None


class PaperHistoryEvent(ApiModel):
    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    details: dict = Field(default_factory=dict)


class PaperHistory(ApiModel):
    """Timeline of everything that happened to one submission."""

    submission_id: Optional[str] = None
    paper_title: Optional[str] = None
    author_name: Optional[str] = None
    current_status: Optional[str] = None
    timeline: List[PaperHistoryEvent] = Field(default_factory=list)
