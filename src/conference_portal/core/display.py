"""Printing and display utilities for portal records."""

import re
from datetime import datetime
from typing import Iterable, Optional

import pandas as pd
from tabulate import tabulate

from conference_portal.core.fees import registration_categories
from conference_portal.core.models import (
    CommitteeMember,
    NonRespondingReviewer,
    PaperSubmission,
    Registration,
)
from conference_portal.core.workflow import deadline_status


# ANSI color codes for terminal output
class Colors:
    GREEN = "\033[92m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    END = "\033[0m"


ANSI_PATTERN = re.compile(r"\033\[[0-9;]*m")

STATUS_COLORS = {
    "Submitted": Colors.BLUE,
    "Editor Assigned": Colors.MAGENTA,
    "Under Review": Colors.YELLOW,
    "Review Received": Colors.CYAN,
    "Revision Required": Colors.YELLOW,
    "Revised Submitted": Colors.CYAN,
    "Conditionally Accept": Colors.CYAN,
    "Accepted": Colors.GREEN,
    "Published": Colors.GREEN,
    "Rejected": Colors.RED,
    "pending": Colors.YELLOW,
    "verified": Colors.GREEN,
    "rejected": Colors.RED,
}


def strip_colors(text: str) -> str:
    return ANSI_PATTERN.sub("", text)


def format_status(status: Optional[str], colored: bool = True) -> str:
    """Status text, colored for the terminal when ``colored`` is set."""
    if not status:
        return f"{Colors.YELLOW}N/A{Colors.END}" if colored else "N/A"
    color = STATUS_COLORS.get(status)
    if colored and color:
        return f"{color}{status}{Colors.END}"
    return status


def _date(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d") if value else "-"


def papers_to_dataframe(
    papers: Iterable[PaperSubmission], colored: bool = True, now: Optional[datetime] = None
) -> pd.DataFrame:
    """One row per paper, with the deadline label when the paper has an assignment."""
    data = []
    for idx, paper in enumerate(papers):
        deadline = "-"
        if paper.deadline:
            label = deadline_status(paper.deadline, now)
            deadline = label.text
            if colored and label.status in ("overdue", "today", "urgent"):
                color = Colors.RED if label.status == "overdue" else Colors.YELLOW
                deadline = f"{color}{deadline}{Colors.END}"
        data.append(
            {
                "#": idx + 1,
                "ID": paper.submission_id,
                "Title": paper.paper_title,
                "Author": paper.author_name,
                "Category": paper.category or "-",
                "Status": format_status(paper.status, colored),
                "Reviewers": paper.reviewer_count,
                "Deadline": deadline,
                "Submitted": _date(paper.created_at),
            }
        )
    return pd.DataFrame(data)


def registrations_to_dataframe(
    registrations: Iterable[Registration], colored: bool = True
) -> pd.DataFrame:
    data = []
    for idx, reg in enumerate(registrations):
        amount = "-" if reg.amount is None else f"{reg.amount:,.0f} {reg.currency or ''}".strip()
        data.append(
            {
                "#": idx + 1,
                "ID": reg.id,
                "Name": reg.display_name,
                "Email": reg.display_email,
                "Category": reg.registration_category or "-",
                "Method": reg.payment_method or "-",
                "Transaction": reg.transaction_id or "-",
                "Amount": amount,
                "Status": format_status(reg.payment_status, colored),
                "Reg_No": reg.registration_number or "-",
            }
        )
    return pd.DataFrame(data)


def committee_to_dataframe(members: Iterable[CommitteeMember]) -> pd.DataFrame:
    data = []
    for member in members:
        data.append(
            {
                "Order": member.order,
                "Name": member.name,
                "Role": member.role,
                "Affiliation": member.affiliation,
                "Country": member.country or "-",
                "Active": "yes" if member.active else "no",
                "ID": member.id,
            }
        )
    return pd.DataFrame(data)


def reminders_to_dataframe(reviewers: Iterable[NonRespondingReviewer]) -> pd.DataFrame:
    data = []
    for reviewer in reviewers:
        days = reviewer.days_until_deadline
        data.append(
            {
                "Paper": reviewer.submission_id,
                "Title": reviewer.paper_title or "-",
                "Reviewer": reviewer.reviewer_name or reviewer.reviewer_email,
                "Email": reviewer.reviewer_email,
                "Days_Left": "-" if days is None else days,
                "Reminders": reviewer.reminder_count,
            }
        )
    return pd.DataFrame(data)


def fees_to_dataframe(country: str, registration_type: str, is_member: bool = False) -> pd.DataFrame:
    data = []
    for category in registration_categories(country, registration_type):
        data.append(
            {
                "ID": category.id,
                "Category": category.label,
                "Member": f"{category.member_price:,} {category.currency}",
                "Non_Member": f"{category.non_member_price:,} {category.currency}",
                "You_Pay": f"{category.price_for(is_member):,} {category.currency}",
            }
        )
    return pd.DataFrame(data)


def print_table_with_format(df: pd.DataFrame, table_format: str = "grid") -> None:
    """Print DataFrame with specified format."""
    if df.empty:
        print("No records found.")
        print()
        return
    table_str = tabulate(df, headers="keys", tablefmt=table_format, showindex=False)
    print(table_str)
    print()


def save_to_csv(df: pd.DataFrame, filename: str) -> None:
    """Save a table to CSV without color codes."""
    # Cell-wise, whatever dtype pandas gave the text columns
    clean = df.map(lambda v: strip_colors(v) if isinstance(v, str) else v)
    clean.to_csv(filename, index=False)
    print(f"Results saved to {filename}")


def display_table(df: pd.DataFrame, table_format: str = "grid", output: Optional[str] = None) -> None:
    """Print a table and optionally save it to CSV."""
    print_table_with_format(df, table_format)
    if output:
        save_to_csv(df, output)
