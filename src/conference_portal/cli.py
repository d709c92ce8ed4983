"""Command-line front end for the conference portal."""

import argparse
import getpass
import subprocess
import sys
from pathlib import Path
from typing import Optional

from conference_portal.client.api_client import ConferenceApiClient
from conference_portal.client.errors import ApiError, FormValidationError, user_message
from conference_portal.config.constants import PAPER_CATEGORIES, REGISTRATION_TYPES, TABLE_FORMATS
from conference_portal.config.portal_config import get_portal_config
from conference_portal.core.display import (
    committee_to_dataframe,
    display_table,
    fees_to_dataframe,
    format_status,
    papers_to_dataframe,
    registrations_to_dataframe,
)
from conference_portal.core.filters import (
    ALL,
    SORT_OPTIONS,
    filter_members,
    filter_papers,
    filter_registrations,
)
from conference_portal.core.workflow import dashboard_for_role
from conference_portal.utils.logging_config import configure_logger, get_logger

logger = get_logger(__name__)

STREAMLIT_APP = Path(__file__).parent / "ui" / "streamlit_app.py"


def _add_paper_filters(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--search", default="", help="Match title, author, submission id or email")
    parser.add_argument(
        "--status",
        default=ALL,
        choices=[ALL, "overdue", "urgent", "pending"],
        help="Deadline urgency",
    )
    parser.add_argument("--category", default=ALL, help="Paper category")
    parser.add_argument("--sort", default="deadline", choices=SORT_OPTIONS, help="Sort order")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Conference management portal client")
    parser.add_argument("--output", type=str, help="Save results to CSV file")
    parser.add_argument(
        "--format",
        choices=TABLE_FORMATS,
        default="grid",
        help="Table format for display",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (defaults to PORTAL_LOG_LEVEL)",
    )
    parser.add_argument("--env-file", type=str, help="Load settings from this .env file")

    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Log in and store the session")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="Prompted for when omitted")

    commands.add_parser("logout", help="Forget the stored session")
    commands.add_parser("whoami", help="Show the logged-in user")

    submit = commands.add_parser("submit-paper", help="Submit a new paper")
    submit.add_argument("--title", required=True)
    submit.add_argument("--author", required=True)
    submit.add_argument("--email", required=True)
    submit.add_argument("--category", required=True, choices=list(PAPER_CATEGORIES))
    submit.add_argument("--pdf", required=True, help="Manuscript (PDF, DOC or DOCX, max 3 MB)")

    commands.add_parser("my-submission", help="Show your submission and its status")

    reviewer = commands.add_parser("reviewer-papers", help="Papers assigned to you for review")
    _add_paper_filters(reviewer)

    editor = commands.add_parser("editor-papers", help="All papers (editor)")
    _add_paper_filters(editor)

    registrations = commands.add_parser("registrations", help="List registrations (admin)")
    registrations.add_argument(
        "--status", default=ALL, choices=[ALL, "pending", "verified", "rejected"]
    )
    registrations.add_argument("--search", default="")
    registrations.add_argument(
        "--listeners", action="store_true", help="List listener registrations instead of authors"
    )

    verify = commands.add_parser("verify-registration", help="Verify a payment (admin)")
    verify.add_argument("registration_id")
    verify.add_argument("--notes", default="")

    reject = commands.add_parser("reject-registration", help="Reject a payment (admin)")
    reject.add_argument("registration_id")
    reject.add_argument("--reason", required=True)

    committee = commands.add_parser("committee", help="Committee directory")
    committee.add_argument("--role", default=ALL)
    committee.add_argument("--search", default="")
    committee.add_argument(
        "--all", action="store_true", help="Include inactive members (admin)"
    )

    reorder = commands.add_parser("reorder-committee", help="Move a committee member (admin)")
    reorder.add_argument("--from", dest="from_index", type=int, required=True, help="Current position (0-based)")
    reorder.add_argument("--to", dest="to_index", type=int, required=True, help="New position (0-based)")

    fees = commands.add_parser("fees", help="Registration fee table")
    fees.add_argument("--country", required=True)
    fees.add_argument("--type", dest="registration_type", default="author", choices=REGISTRATION_TYPES)
    fees.add_argument("--member", action="store_true", help="Show member pricing in the last column")

    commands.add_parser("ui", help="Launch the Streamlit web portal")

    return parser.parse_args(argv)


def cmd_login(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    password = args.password or getpass.getpass("Password: ")
    session = client.auth.login(args.email, password)
    print(f"Logged in as {session.email} ({session.role or 'Author'})")
    print(f"Dashboard: {dashboard_for_role(session.role)}")


def cmd_logout(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    client.auth.logout()
    print("Logged out")


def cmd_whoami(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    user = client.auth.current_user()
    print(f"Email:    {user.email}")
    print(f"Username: {user.username or '-'}")
    print(f"Role:     {user.role or '-'}")
    print(f"Country:  {user.country or '-'}")


def cmd_submit_paper(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    submission_id = client.papers.submit_paper(
        args.title, args.author, args.email, args.category, args.pdf
    )
    print(f"Paper submitted. Submission ID: {submission_id}")


def cmd_my_submission(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    paper = client.papers.my_submission()
    if paper is None:
        print("You have not submitted a paper yet.")
        return
    display_table(papers_to_dataframe([paper], colored=not args.output), args.format, args.output)


def cmd_reviewer_papers(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    papers = filter_papers(
        client.reviewer.assigned_papers(), args.search, args.status, args.category, args.sort
    )
    display_table(papers_to_dataframe(papers), args.format, args.output)


def cmd_editor_papers(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    papers = filter_papers(
        client.editor.papers(), args.search, args.status, args.category, args.sort
    )
    display_table(papers_to_dataframe(papers), args.format, args.output)


def cmd_registrations(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    status = None if args.status == ALL else args.status
    if args.listeners:
        registrations = client.registration.listeners(status, args.search)
    else:
        registrations = filter_registrations(
            client.registration.all_registrations(status), args.search
        )
    display_table(registrations_to_dataframe(registrations), args.format, args.output)


def cmd_verify_registration(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    number = client.registration.verify(args.registration_id, args.notes)
    print(f"Registration {format_status('verified')}. Registration number: {number or '-'}")


def cmd_reject_registration(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    client.registration.reject(args.registration_id, args.reason)
    print(f"Registration {args.registration_id} {format_status('rejected')}")


def cmd_committee(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    members = client.committee.all_members() if args.all else client.committee.members()
    members = filter_members(members, args.search, args.role)
    display_table(committee_to_dataframe(members), args.format, args.output)


def cmd_reorder_committee(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    members = client.committee.all_members()
    reordered = client.committee.reorder(members, args.from_index, args.to_index)
    display_table(committee_to_dataframe(reordered), args.format, args.output)


def cmd_fees(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    display_table(
        fees_to_dataframe(args.country, args.registration_type, args.member),
        args.format,
        args.output,
    )


def cmd_ui(client: ConferenceApiClient, args: argparse.Namespace) -> None:
    print("Launching Streamlit web portal...")
    print("Open your browser and go to: http://localhost:8501")
    print("Press Ctrl+C to stop the server")
    subprocess.run([sys.executable, "-m", "streamlit", "run", str(STREAMLIT_APP)])


COMMANDS = {
    "login": cmd_login,
    "logout": cmd_logout,
    "whoami": cmd_whoami,
    "submit-paper": cmd_submit_paper,
    "my-submission": cmd_my_submission,
    "reviewer-papers": cmd_reviewer_papers,
    "editor-papers": cmd_editor_papers,
    "registrations": cmd_registrations,
    "verify-registration": cmd_verify_registration,
    "reject-registration": cmd_reject_registration,
    "committee": cmd_committee,
    "reorder-committee": cmd_reorder_committee,
    "fees": cmd_fees,
    "ui": cmd_ui,
}


def error_message(error: Exception) -> str:
    if isinstance(error, IndexError):
        return f"Invalid position: {error}"
    return user_message(error)


def main(argv: Optional[list[str]] = None) -> None:
    """Run one portal command."""
    args = parse_args(argv)
    config = get_portal_config(args.env_file)

    # Configure logging first
    configure_logger(log_level=args.log_level or config.log_level)
    logger.debug("Running command", command=args.command, api_url=config.api_url)

    with ConferenceApiClient(config) as client:
        try:
            COMMANDS[args.command](client, args)
        except (ApiError, FormValidationError, IndexError, ValueError) as e:
            logger.debug("Command failed", command=args.command, error=str(e))
            print(error_message(e), file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
