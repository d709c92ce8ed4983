"""Unit tests for core/display.py."""

from datetime import datetime, timedelta, timezone

import pandas as pd
import pytest

from conference_portal.core.display import (
    Colors,
    committee_to_dataframe,
    display_table,
    fees_to_dataframe,
    format_status,
    papers_to_dataframe,
    print_table_with_format,
    registrations_to_dataframe,
    reminders_to_dataframe,
    save_to_csv,
    strip_colors,
)
from conference_portal.core.models import (
    AssignmentDetails,
    CommitteeMember,
    NonRespondingReviewer,
    PaperSubmission,
    Registration,
)

NOW = datetime(2026, 3, 10, tzinfo=timezone.utc)


class TestFormatStatus:
    """Test status coloring."""

    def test_colored(self):
        """Test known statuses get their color."""
        assert format_status("Accepted") == f"{Colors.GREEN}Accepted{Colors.END}"
        assert format_status("Rejected") == f"{Colors.RED}Rejected{Colors.END}"

    def test_plain(self):
        """Test plain output and missing statuses."""
        assert format_status("Accepted", colored=False) == "Accepted"
        assert format_status(None, colored=False) == "N/A"
        assert format_status("Unknown") == "Unknown"

    def test_strip_colors(self):
        """Test ANSI codes are removed."""
        assert strip_colors(format_status("Under Review")) == "Under Review"


class TestDataFrames:
    """Test table builders."""

    def test_empty(self):
        """Test empty input gives an empty DataFrame."""
        df = papers_to_dataframe([])
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 0

    def test_papers(self):
        """Test one row per paper with the deadline label."""
        paper = PaperSubmission(
            submission_id="X-1",
            paper_title="Graphs",
            author_name="Ada",
            status="Under Review",
            assignment_details=AssignmentDetails(deadline=NOW - timedelta(days=1)),
            assigned_reviewers=[{}, {}],
        )

        df = papers_to_dataframe([paper], colored=False, now=NOW)

        row = df.iloc[0]
        assert row["ID"] == "X-1"
        assert row["Status"] == "Under Review"
        assert row["Reviewers"] == 2
        assert row["Deadline"] == "Overdue by 1 day(s)"
        assert row["Submitted"] == "-"

    def test_overdue_is_red(self):
        """Test overdue deadlines are colored red."""
        paper = PaperSubmission(assignment_details=AssignmentDetails(deadline=NOW - timedelta(days=3)))
        df = papers_to_dataframe([paper], now=NOW)
        assert Colors.RED in df.iloc[0]["Deadline"]

    def test_registrations(self):
        """Test amounts are formatted with their currency."""
        reg = Registration(
            author_name="Ada",
            amount=5850,
            currency="INR",
            payment_status="verified",
            registration_number="REG-1",
        )

        row = registrations_to_dataframe([reg], colored=False).iloc[0]

        assert row["Amount"] == "5,850 INR"
        assert row["Status"] == "verified"
        assert row["Reg_No"] == "REG-1"

    def test_committee(self):
        """Test committee columns."""
        member = CommitteeMember(name="Ada", role="Advisory Board", affiliation="Uni", active=False)
        row = committee_to_dataframe([member]).iloc[0]
        assert row["Active"] == "no"
        assert row["Country"] == "-"

    def test_reminders(self):
        """Test reviewer names fall back to email."""
        reviewer = NonRespondingReviewer(submission_id="X-1", reviewer_email="r@example.com", days_until_deadline=-1)
        row = reminders_to_dataframe([reviewer]).iloc[0]
        assert row["Reviewer"] == "r@example.com"
        assert row["Days_Left"] == -1

    def test_fees(self):
        """Test the member column is used for members."""
        df = fees_to_dataframe("India", "listener", is_member=True)
        assert df.iloc[0]["You_Pay"] == "2,500 INR"


class TestOutput:
    """Test printing and CSV export."""

    def test_print_table(self, capsys):
        """Test the table is rendered with tabulate."""
        df = pd.DataFrame([{"ID": "X-1", "Title": "Graphs"}])
        print_table_with_format(df, "github")

        out = capsys.readouterr().out
        assert "| ID" in out
        assert "Graphs" in out

    def test_print_empty_table(self, capsys):
        """Test empty tables print a notice."""
        print_table_with_format(pd.DataFrame())
        assert "No records found." in capsys.readouterr().out

    def test_csv_has_no_colors(self, tmp_path, capsys):
        """Test CSV export strips ANSI codes."""
        df = pd.DataFrame([{"Status": format_status("Accepted"), "Count": 3}])
        path = tmp_path / "out.csv"

        save_to_csv(df, str(path))

        saved = pd.read_csv(path)
        assert saved.iloc[0]["Status"] == "Accepted"
        assert saved.iloc[0]["Count"] == 3
        assert f"Results saved to {path}" in capsys.readouterr().out

    @pytest.mark.parametrize("dtype", ["object", "string"])
    def test_csv_strips_colors_for_text_dtypes(self, tmp_path, dtype):
        """Test colors are stripped whichever dtype pandas picks for text columns."""
        df = pd.DataFrame(
            {"Status": [format_status("Rejected"), format_status("Accepted")], "Title": ["A", "B"]}
        ).astype({"Status": dtype})
        path = tmp_path / "out.csv"

        save_to_csv(df, str(path))

        assert "\x1b" not in path.read_text()
        assert list(pd.read_csv(path)["Status"]) == ["Rejected", "Accepted"]

    def test_display_table_with_output(self, tmp_path, capsys):
        """Test display_table prints and saves."""
        path = tmp_path / "committee.csv"
        display_table(pd.DataFrame([{"Name": "Ada"}]), "simple", str(path))

        assert path.exists()
        assert "Ada" in capsys.readouterr().out
