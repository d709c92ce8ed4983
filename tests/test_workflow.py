"""Unit tests for core/workflow.py."""

from datetime import datetime, timedelta, timezone

import pytest

from conference_portal.client.errors import FormValidationError
from conference_portal.core.models import PaperSubmission, ReviewForm, ReviewRecord
from conference_portal.core.workflow import (
    assignment_urgency,
    can_accept,
    dashboard_for_role,
    deadline_status,
    require_text,
    reviewers_with_status,
    validate_payment,
    validate_review_form,
)

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


class TestRouting:
    """Test post-login routing."""

    @pytest.mark.parametrize(
        "role, target",
        [("Reviewer", "/reviewer"), ("Author", "/dashboard"), ("Editor", "/dashboard"), ("Admin", "/dashboard"), (None, "/dashboard")],
    )
    def test_dashboard_for_role(self, role, target):
        """Test reviewers go to /reviewer and everyone else to /dashboard."""
        assert dashboard_for_role(role) == target


class TestDeadlines:
    """Test deadline labels and urgency buckets."""

    def test_overdue(self):
        """Test overdue deadlines."""
        status = deadline_status(NOW - timedelta(days=2, hours=1), NOW)
        assert status.status == "overdue"
        assert status.text == "Overdue by 2 day(s)"

    def test_due_today(self):
        """Test a deadline a few hours ago rounds up to today."""
        status = deadline_status(NOW - timedelta(hours=3), NOW)
        assert status.text == "Due today"

    def test_partial_day_rounds_up(self):
        """Test three hours left reads as one day."""
        status = deadline_status(NOW + timedelta(hours=3), NOW)
        assert status.status == "urgent"
        assert status.text == "Due in 1 day"

    def test_several_days(self):
        """Test plural days."""
        assert deadline_status(NOW + timedelta(days=5), NOW).text == "Due in 5 days"

    def test_naive_deadline(self):
        """Test naive datetimes are treated as UTC."""
        naive = (NOW + timedelta(days=3)).replace(tzinfo=None)
        assert deadline_status(naive, NOW).days_left == 3

    @pytest.mark.parametrize(
        "delta, bucket",
        [
            (timedelta(days=-1), "overdue"),
            (timedelta(hours=-1), "overdue"),
            (timedelta(hours=20), "urgent"),
            (timedelta(days=2, hours=23), "urgent"),
            (timedelta(days=3), "pending"),
        ],
    )
    def test_urgency(self, delta, bucket):
        """Test urgency buckets round days down."""
        assert assignment_urgency(NOW + delta, NOW) == bucket

    def test_no_deadline_is_pending(self):
        """Test papers without a deadline are pending."""
        assert assignment_urgency(None, NOW) == "pending"


class TestCanAccept:
    """Test the acceptance rule."""

    def test_three_submitted_reviews(self):
        """Test three finished reviews allow acceptance."""
        reviewers = [{"review": {"_id": "r1"}}, {"reviewStatus": "Submitted"}, {"review": {"_id": "r3"}}]
        assert can_accept("Review Received", reviewers)

    def test_missing_review(self):
        """Test one outstanding review blocks acceptance."""
        reviewers = [{"review": {"_id": "r1"}}, {"reviewStatus": "Pending"}, {"review": {"_id": "r3"}}]
        assert not can_accept("Under Review", reviewers)

    def test_too_few_reviewers(self):
        """Test fewer than three reviewers blocks acceptance."""
        assert not can_accept("Review Received", [{"review": {}}, {"reviewStatus": "Submitted"}])

    def test_revised_submission(self):
        """Test revised submissions can always be accepted."""
        assert can_accept("Revised Submitted", [])

    def test_empty_review_object_counts(self):
        """Test any attached review object counts, even one with no fields."""
        assert can_accept("Review Received", [{"review": {}}, {"review": {}}, {"review": {}}])

    def test_null_review_does_not_count(self):
        """Test an explicit null review is still outstanding."""
        reviewers = [{"review": None}, {"review": {"_id": "r2"}}, {"review": {"_id": "r3"}}]
        assert not can_accept("Review Received", reviewers)


class TestReviewersWithStatus:
    """Test assigned reviewers are joined with the reviews fetched for the paper."""

    @pytest.fixture
    def paper(self):
        # /api/editor/papers only populates username and email
        return PaperSubmission(
            id="p1",
            status="Review Received",
            assigned_reviewers=[
                {"_id": "u1", "username": "Bob", "email": "bob@x.org"},
                {"_id": "u2", "username": "Cy", "email": "cy@x.org"},
                {"_id": "u3", "username": "Di", "email": "di@x.org"},
            ],
        )

    @staticmethod
    def _review(reviewer_id, username):
        return ReviewRecord.model_validate(
            {
                "_id": f"rv-{reviewer_id}",
                "reviewer": {"_id": reviewer_id, "username": username, "email": f"{username}@x.org"},
                "recommendation": "Accept",
            }
        )

    def test_raw_paper_list_cannot_be_accepted(self, paper):
        """Test the unjoined reviewer list carries no review information."""
        assert not can_accept(paper.status, paper.assigned_reviewers)

    def test_all_reviews_in(self, paper):
        """Test three matched reviews mark everyone Submitted and allow acceptance."""
        reviews = [self._review("u1", "Bob"), self._review("u2", "Cy"), self._review("u3", "Di")]

        joined = reviewers_with_status(paper, reviews)

        assert [r["reviewStatus"] for r in joined] == ["Submitted"] * 3
        assert joined[0]["review"].id == "rv-u1"
        assert joined[0]["email"] == "bob@x.org"
        assert can_accept(paper.status, joined)

    def test_missing_review(self, paper):
        """Test a reviewer without a review stays Pending and blocks acceptance."""
        joined = reviewers_with_status(paper, [self._review("u1", "Bob"), self._review("u3", "Di")])

        assert [r["reviewStatus"] for r in joined] == ["Submitted", "Pending", "Submitted"]
        assert joined[1]["review"] is None
        assert not can_accept(paper.status, joined)

    def test_re_reviews_attached(self, paper):
        """Test re-reviews are matched by their reviewerId."""
        re_review = ReviewRecord.model_validate({"_id": "rr1", "reviewerId": {"_id": "u2"}})

        joined = reviewers_with_status(paper, [], [re_review])

        assert joined[1]["reReview"].id == "rr1"
        assert joined[0]["reReview"] is None


class TestFormChecks:
    """Test client-side form validation."""

    def test_review_form(self):
        """Test a complete review passes."""
        form = ReviewForm(comments="Fine", comments_to_editor="Accept")
        assert validate_review_form(form) is form

    def test_require_text(self):
        """Test text is trimmed and blanks are rejected."""
        assert require_text("name", "  Ada ", "Name is required") == "Ada"
        with pytest.raises(FormValidationError, match="Name is required"):
            require_text("name", None, "Name is required")

    def test_payment_valid_bank_transfer(self):
        """Test a complete bank transfer passes."""
        validate_payment("author", "bank-transfer", "bank-account", None, True, "India", "indian-faculty")

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"registration_type": "sponsor"}, "registrationType"),
            ({"country": ""}, "country"),
            ({"category": None}, "registrationCategory"),
            ({"payment_method": "cash"}, "paymentMethod"),
            ({"transaction_id": " "}, "transactionId"),
            ({"has_proof": False}, "paymentScreenshot"),
        ],
    )
    def test_payment_errors(self, kwargs, field):
        """Test each missing piece is reported against its field."""
        values = {
            "registration_type": "author",
            "payment_method": "paypal",
            "payment_sub_method": None,
            "transaction_id": "T-1",
            "has_proof": True,
            "country": "USA",
            "category": "foreign-author",
        }
        values.update(kwargs)
        with pytest.raises(FormValidationError) as exc_info:
            validate_payment(**values)
        assert exc_info.value.field == field
