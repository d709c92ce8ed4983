"""Unit tests for core/templates.py."""

from datetime import datetime

import pytest

from conference_portal.core.templates import (
    NOTES_SEPARATOR,
    TEMPLATES,
    compose_decision_email,
    render_template,
)

NOW = datetime(2026, 3, 10)


class TestRenderTemplate:
    """Test placeholder replacement."""

    def test_replaces_every_occurrence(self):
        """Test repeated placeholders are all replaced."""
        text = "{authorName}, thanks {authorName}!"
        assert render_template(text, {"authorName": "Ada"}) == "Ada, thanks Ada!"

    def test_braced_keys(self):
        """Test keys may be given with their braces."""
        assert render_template("ID {submissionId}", {"{submissionId}": "X-1"}) == "ID X-1"

    def test_unknown_placeholders_kept(self):
        """Test placeholders without a value are left alone."""
        assert render_template("{a} {b}", {"a": 1}) == "1 {b}"

    def test_none_becomes_empty(self):
        """Test None values render as empty text."""
        assert render_template("[{category}]", {"category": None}) == "[]"

    def test_all_templates_present(self):
        """Test the six editor templates exist."""
        assert set(TEMPLATES) == {
            "replyToReviewer",
            "replyToAuthor",
            "paperAccepted",
            "paperRejected",
            "majorRevision",
            "minorRevision",
        }


class TestComposeDecisionEmail:
    """Test decision email composition."""

    def test_accept(self):
        """Test the accept template is filled in with the camera-ready deadline."""
        subject, body = compose_decision_email("Accept", "X-1", "Graphs", "Ada", now=NOW)

        assert subject == "Paper Accepted - X-1: Graphs"
        assert "Dear Ada" in body
        assert "09/04/2026" in body
        assert "{" not in subject

    def test_notes_are_appended(self):
        """Test editor notes follow the separator."""
        _, body = compose_decision_email("Reject", "X-1", "Graphs", "Ada", notes="Consider a workshop.", now=NOW)
        assert body.endswith(NOTES_SEPARATOR + "Consider a workshop.")

    def test_blank_notes_not_appended(self):
        """Test whitespace notes add nothing."""
        _, body = compose_decision_email("Minor Revision", "X-1", "Graphs", "Ada", notes="  ", now=NOW)
        assert NOTES_SEPARATOR not in body

    def test_without_template(self):
        """Test the notes are the whole body when the template is off."""
        subject, body = compose_decision_email(
            "Major Revision", "X-1", "Graphs", "Ada", notes="Custom text", use_template=False
        )
        assert "X-1" in subject
        assert body == "Custom text"

    def test_unknown_decision(self):
        """Test unknown decisions are rejected."""
        with pytest.raises(ValueError, match="Unknown decision"):
            compose_decision_email("Maybe", "X-1", "Graphs", "Ada")
