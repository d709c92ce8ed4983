"""Search, filter and sort helpers over lists already fetched from the server."""

from datetime import datetime
from typing import Iterable, Optional

from conference_portal.config.constants import COMMITTEE_ROLES
from conference_portal.core.models import (
    CommitteeMember,
    PaperSubmission,
    Registration,
    ReviewerProfile,
)
from conference_portal.core.workflow import assignment_urgency

ALL = "all"
SORT_OPTIONS = ["deadline", "status", "title", "author"]
URGENCY_ORDER = {"overdue": 0, "urgent": 1, "pending": 2}

REVIEWER_STATUSES = [ALL, "active", "inactive", "overdue", "high-performers"]
REVIEWER_SORT_OPTIONS = ["name", "assigned", "completed", "pending", "rating", "recent"]
HIGH_PERFORMER_RATING = 4.5
HIGH_PERFORMER_MIN_REVIEWS = 5


def _matches(needle: str, *haystack: Optional[str]) -> bool:
    return any(needle in (value or "").lower() for value in haystack)


def paper_categories(papers: Iterable[PaperSubmission]) -> list[str]:
    """Distinct, non-empty categories in sorted order."""
    return sorted({p.category for p in papers if p.category})


def filter_papers(
    papers: Iterable[PaperSubmission],
    search: str = "",
    status: str = ALL,
    category: str = ALL,
    sort_by: str = "deadline",
    now: Optional[datetime] = None,
) -> list[PaperSubmission]:
    """Filter and sort a reviewer's or editor's paper list.

    Args:
        papers: Papers as returned by the server
        search: Case-insensitive text matched against title, author, submission id and email
        status: Urgency bucket ('overdue', 'urgent', 'pending') or 'all'
        category: Exact category or 'all'
        sort_by: One of 'deadline', 'status', 'title', 'author'
        now: Reference time for urgency (defaults to the current time)
    """
    if sort_by not in SORT_OPTIONS:
        raise ValueError(f"Unknown sort option '{sort_by}'. Available: {', '.join(SORT_OPTIONS)}")

    result = list(papers)

    needle = search.strip().lower()
    if needle:
        result = [
            p
            for p in result
            if _matches(needle, p.paper_title, p.author_name, p.submission_id, p.email)
        ]

    if status != ALL:
        result = [p for p in result if assignment_urgency(p.deadline, now) == status]

    if category != ALL:
        result = [p for p in result if p.category == category]

    if sort_by == "deadline":
        # Papers without a deadline go last
        result.sort(key=lambda p: (p.deadline is None, p.deadline.timestamp() if p.deadline else 0))
    elif sort_by == "status":
        result.sort(key=lambda p: URGENCY_ORDER[assignment_urgency(p.deadline, now)])
    elif sort_by == "title":
        result.sort(key=lambda p: p.paper_title.lower())
    elif sort_by == "author":
        result.sort(key=lambda p: p.author_name.lower())

    return result


def reviewer_expertise(reviewers: Iterable[ReviewerProfile]) -> list[str]:
    return sorted({area for r in reviewers for area in r.expertise})


def filter_reviewers(
    reviewers: Iterable[ReviewerProfile],
    search: str = "",
    status: str = ALL,
    min_rating: float = 0,
    expertise: Iterable[str] = (),
    sort_by: str = "assigned",
) -> list[ReviewerProfile]:
    """Filter and sort the editor's reviewer pool.

    Args:
        reviewers: Reviewer profiles with workload figures
        search: Case-insensitive text matched against name, email and expertise areas
        status: One of REVIEWER_STATUSES. 'high-performers' means an average rating of
            at least 4.5 over 5 or more completed reviews
        min_rating: Minimum average rating, ignored when 0
        expertise: Keep reviewers with any of these areas
        sort_by: One of REVIEWER_SORT_OPTIONS. Counts and rating sort highest first,
            'recent' sorts newest account first
    """
    if status not in REVIEWER_STATUSES:
        raise ValueError(
            f"Unknown reviewer status '{status}'. Available: {', '.join(REVIEWER_STATUSES)}"
        )
    if sort_by not in REVIEWER_SORT_OPTIONS:
        raise ValueError(
            f"Unknown sort option '{sort_by}'. Available: {', '.join(REVIEWER_SORT_OPTIONS)}"
        )

    result = list(reviewers)

    needle = search.strip().lower()
    if needle:
        result = [r for r in result if _matches(needle, r.display_name, r.email, *r.expertise)]

    if status in ("active", "inactive"):
        result = [r for r in result if r.status == status]
    elif status == "overdue":
        result = [r for r in result if r.overdue_reviews > 0]
    elif status == "high-performers":
        result = [
            r
            for r in result
            if r.average_rating >= HIGH_PERFORMER_RATING
            and r.completed_reviews >= HIGH_PERFORMER_MIN_REVIEWS
        ]

    if min_rating > 0:
        result = [r for r in result if r.average_rating >= min_rating]

    wanted = set(expertise)
    if wanted:
        result = [r for r in result if wanted.intersection(r.expertise)]

    if sort_by == "name":
        result.sort(key=lambda r: r.display_name.lower())
    elif sort_by == "assigned":
        result.sort(key=lambda r: r.assigned_papers, reverse=True)
    elif sort_by == "completed":
        result.sort(key=lambda r: r.completed_reviews, reverse=True)
    elif sort_by == "pending":
        result.sort(key=lambda r: r.pending_reviews, reverse=True)
    elif sort_by == "rating":
        result.sort(key=lambda r: r.average_rating, reverse=True)
    elif sort_by == "recent":
        # Accounts without a creation date go last
        result.sort(
            key=lambda r: (r.created_at is not None, r.created_at.timestamp() if r.created_at else 0),
            reverse=True,
        )

    return result


def reviewer_stats(reviewers: Iterable[ReviewerProfile]) -> dict:
    """Headline counts for the reviewer pool, before any filtering."""
    reviewers = list(reviewers)
    return {
        "total": len(reviewers),
        "active": sum(1 for r in reviewers if r.status == "active"),
        "overdue": sum(1 for r in reviewers if r.overdue_reviews > 0),
        "top_performers": sum(1 for r in reviewers if r.average_rating >= HIGH_PERFORMER_RATING),
        "total_reviews": sum(r.completed_reviews for r in reviewers),
    }


def filter_registrations(
    registrations: Iterable[Registration],
    search: str = "",
    status: str = ALL,
) -> list[Registration]:
    """Filter registrations by payment status and free text (name, email, paper, transaction)."""
    result = list(registrations)
    if status != ALL:
        result = [r for r in result if r.payment_status == status]
    needle = search.strip().lower()
    if needle:
        result = [
            r
            for r in result
            if _matches(
                needle,
                r.display_name,
                r.display_email,
                r.paper_title,
                r.submission_id,
                r.transaction_id,
            )
        ]
    return result


def filter_members(
    members: Iterable[CommitteeMember],
    search: str = "",
    role: str = ALL,
    active_only: bool = False,
) -> list[CommitteeMember]:
    result = [m for m in members if m.active or not active_only]
    if role != ALL:
        result = [m for m in result if m.role == role]
    needle = search.strip().lower()
    if needle:
        result = [
            m for m in result if _matches(needle, m.name, m.affiliation, m.role, m.country)
        ]
    return sorted(result, key=lambda m: m.order)


def group_members_by_role(members: Iterable[CommitteeMember]) -> dict[str, list[CommitteeMember]]:
    """Group members under each role, roles in their canonical order, members by ``order``."""
    groups = {}
    members = sorted(members, key=lambda m: m.order)
    for role in COMMITTEE_ROLES:
        in_role = [m for m in members if m.role == role]
        if in_role:
            groups[role] = in_role
    # Roles the server knows about but this client doesn't
    for member in members:
        if member.role not in COMMITTEE_ROLES:
            groups.setdefault(member.role, []).append(member)
    return groups
