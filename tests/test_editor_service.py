"""Unit tests for EditorService."""

from datetime import date

import pytest

from conference_portal.client.errors import FormValidationError
from conference_portal.core.models import NonRespondingReviewer, PaperSubmission, RevisionRequest


@pytest.fixture
def paper():
    return PaperSubmission(
        id="p1",
        submission_id="X-1",
        paper_title="Graphs",
        author_name="Ada",
        email="ada@example.com",
    )


class TestReviewerManagement:
    """Test reviewer accounts and assignments."""

    def test_reviewers(self, client, respond):
        """Test reviewer profiles are parsed with their workload figures."""
        respond(
            {
                "reviewers": [
                    {
                        "_id": "r1",
                        "name": "R1",
                        "email": "r1@example.com",
                        "username": "R1",
                        "assignedPapers": 4,
                        "completedReviews": 3,
                        "pendingReviews": 1,
                        "overdueReviews": 1,
                        "averageRating": 4.2,
                        "expertise": ["Law"],
                        "createdAt": "2026-01-05T10:00:00.000Z",
                    }
                ]
            }
        )

        reviewer = client.editor.reviewers()[0]
        assert reviewer.id == "r1"
        assert reviewer.assigned_papers == 4
        assert reviewer.overdue_reviews == 1
        assert reviewer.average_rating == 4.2
        assert reviewer.expertise == ["Law"]
        assert reviewer.status == "active"

    def test_assign_reviewers(self, client, respond, sent, paper):
        """Test reviewer ids and an ISO deadline are sent."""
        respond({"success": True})

        client.editor.assign_reviewers(paper, ["r1", "r2"], date(2026, 5, 1))

        assert sent()[1] == "http://api.test/api/editor/assign-reviewers"
        assert sent()[2]["json"] == {
            "paperId": "p1",
            "submissionId": "X-1",
            "reviewerIds": ["r1", "r2"],
            "deadline": "2026-05-01",
        }

    def test_assign_requires_reviewers(self, client, session, paper):
        """Test at least one reviewer must be chosen."""
        with pytest.raises(FormValidationError, match="at least one reviewer"):
            client.editor.assign_reviewers(paper, [], "2026-05-01")
        session.request.assert_not_called()

    def test_assign_requires_deadline(self, client, paper):
        """Test the deadline is mandatory."""
        with pytest.raises(FormValidationError, match="deadline"):
            client.editor.assign_reviewers(paper, ["r1"], "")

    def test_create_reviewer(self, client, respond, sent):
        """Test reviewer creation payload."""
        respond({"success": True})

        client.editor.create_reviewer("r@example.com", "Rev", "pw")
        assert sent()[2]["json"] == {"email": "r@example.com", "username": "Rev", "password": "pw"}


class TestDecisions:
    """Test editorial decisions."""

    def test_accept(self, client, respond, sent):
        """Test accepting a paper."""
        respond({"success": True})

        client.editor.accept_paper("p1")
        assert sent()[2]["json"] == {"paperId": "p1"}

    def test_reject_requires_reason(self, client, session):
        """Test rejection needs a reason."""
        with pytest.raises(FormValidationError):
            client.editor.reject_paper("p1", "  ")
        session.request.assert_not_called()

    def test_reject(self, client, respond, sent):
        """Test rejection reason and comments are sent to the paper's endpoint."""
        respond({"success": True})

        client.editor.reject_paper("p1", "Out of scope", "Try a journal")

        assert sent()[1] == "http://api.test/api/editor/reject-paper/p1"
        assert sent()[2]["json"] == {"rejectionReason": "Out of scope", "rejectionComments": "Try a journal"}

    def test_request_revision(self, client, respond, sent):
        """Test the revision message and deadline are sent."""
        respond({"success": True})

        client.editor.request_revision("p1", "Please extend the evaluation", date(2026, 6, 1))
        assert sent()[2]["json"]["revisionDeadline"] == "2026-06-01"

    def test_final_decision(self, client, respond, sent, paper):
        """Test the decision email is posted with the author details."""
        respond({"success": True})

        client.editor.send_final_decision(paper, "Accept", "Dear Ada, ...", "Great paper")

        method, url, kwargs = sent()
        assert url == "http://api.test/api/editor/papers/p1/final-decision"
        assert kwargs["json"]["authorEmail"] == "ada@example.com"
        assert kwargs["json"]["decision"] == "Accept"
        assert kwargs["json"]["emailContent"] == "Dear Ada, ..."

    def test_final_decision_unknown(self, client, paper):
        """Test decisions outside the fixed list are rejected."""
        with pytest.raises(FormValidationError, match="Decision must be one of"):
            client.editor.send_final_decision(paper, "Maybe", "text")

    def test_review_revision(self, client, respond, sent):
        """Test the revision decision payload."""
        respond({"success": True})
        revision = RevisionRequest(id="v1", paper_id="p1", submission_id="X-1", author_email="ada@example.com")

        client.editor.review_revision(revision, "revise-again", "More experiments")

        assert sent()[2]["json"] == {
            "revisionId": "v1",
            "paperId": "p1",
            "decision": "revise-again",
            "editorComments": "More experiments",
            "authorEmail": "ada@example.com",
        }

    def test_review_revision_unknown_decision(self, client):
        """Test revision decisions are validated."""
        with pytest.raises(FormValidationError):
            client.editor.review_revision(RevisionRequest(), "maybe")


class TestReviewsAndMessages:
    """Test reading reviews and messaging."""

    def test_paper_reviews(self, client, respond):
        """Test reviews are parsed and reviewer references flattened."""
        respond(
            {
                "reviews": [
                    {
                        "_id": "rv1",
                        "reviewer": {"_id": "r1", "username": "Bob", "email": "bob@example.com"},
                        "overallRating": 4,
                        "noveltyRating": 2,
                    }
                ]
            }
        )

        review = client.editor.paper_reviews("p1")[0]

        assert review.reviewer_id == "r1"
        assert review.reviewer_name == "Bob"
        assert review.reviewer_email == "bob@example.com"
        assert review.avg_rating == 3.0

    def test_re_reviews(self, client, respond):
        """Test re-reviews are read from their own key."""
        respond({"reReviews": [{"_id": "rr1", "recommendation": "Accept"}]})
        assert client.editor.paper_re_reviews("p1")[0].recommendation == "Accept"

    def test_thread_by_review(self, client, respond, sent):
        """Test the thread is looked up by review id when there is one."""
        respond({"messageThread": {"conversation": [{"message": "hi"}]}})

        messages = client.editor.message_thread("X-1", review_id="rv1")

        assert sent()[1] == "http://api.test/api/editor/messages/X-1/rv1"
        assert messages[0].message == "hi"

    def test_thread_by_reviewer(self, client, respond, sent):
        """Test the thread falls back to the reviewer id before a review exists."""
        respond({"messageThread": None})

        messages = client.editor.message_thread("X-1", reviewer_id="r1")

        assert sent()[1] == "http://api.test/api/editor/messages/X-1/null"
        assert sent()[2]["params"] == {"reviewerId": "r1"}
        assert messages == []

    def test_message_to_author(self, client, respond, sent, paper):
        """Test the author's details are included."""
        respond({"success": True})

        client.editor.send_message_to_author(paper, "Please fix the abstract")
        assert sent()[2]["json"]["authorName"] == "Ada"

    def test_re_review_emails(self, client, respond):
        """Test the number of emails sent is returned."""
        respond({"success": True, "emailsSent": 3})
        assert client.editor.send_re_review_emails("p1") == 3


class TestReminders:
    """Test reviewer reminders."""

    def test_non_responding(self, client, respond):
        """Test late reviewers are parsed."""
        respond(
            {
                "reviewers": [
                    {"submissionId": "X-1", "reviewerId": "r1", "reviewerEmail": "r1@example.com", "daysUntilDeadline": -2}
                ]
            }
        )

        reviewers = client.editor.non_responding_reviewers()
        assert reviewers[0].days_until_deadline == -2

    def test_bulk_reminders(self, client, respond, sent):
        """Test one reminder entry per selected reviewer."""
        respond({"success": True, "results": {"sent": 2, "failed": 0}})
        reviewers = [
            NonRespondingReviewer(submission_id="X-1", reviewer_id="r1", reviewer_email="r1@example.com"),
            NonRespondingReviewer(submission_id="X-2", reviewer_id="r2", reviewer_email="r2@example.com"),
        ]

        results = client.editor.send_bulk_reminders(reviewers)

        assert results == {"sent": 2, "failed": 0}
        assert len(sent()[2]["json"]["reminders"]) == 2
        assert sent()[2]["json"]["reminders"][1] == {
            "submissionId": "X-2",
            "reviewerId": "r2",
            "reviewerEmail": "r2@example.com",
        }

    def test_bulk_reminders_empty(self, client, session):
        """Test an empty selection is rejected."""
        with pytest.raises(FormValidationError):
            client.editor.send_bulk_reminders([])
        session.request.assert_not_called()


class TestPdfs:
    """Test stored PDF management."""

    def test_delete_pdfs(self, client, respond, session):
        """Test each PDF is deleted with its own request."""
        respond({"success": True}, {"success": True})

        assert client.editor.delete_pdfs(["pdfs/a", "pdfs/b"]) == 2

        calls = session.request.call_args_list
        assert [c.args[0] for c in calls] == ["DELETE", "DELETE"]
        assert calls[1].kwargs["json"] == {"publicId": "pdfs/b"}

    def test_pdfs(self, client, respond):
        """Test stored PDF metadata is parsed."""
        respond({"pdfs": [{"publicId": "pdfs/a", "fileName": "a.pdf", "size": 1024}]})
        assert client.editor.pdfs()[0].size == 1024
