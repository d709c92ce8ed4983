"""Email templates used by the editor for replies and decisions."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from conference_portal.config.constants import (
    CAMERA_READY_DAYS,
    CONFERENCE_NAME,
    REVISION_WINDOW_DAYS,
)

NOTES_SEPARATOR = "\n\n--- Additional Notes from Editor ---\n"


@dataclass(frozen=True)
class EmailTemplate:
    subject: str
    body: str


REPLY_TO_REVIEWER = EmailTemplate(
    subject="Re: Your Review - Paper {submissionId}",
    body="""Dear {reviewerName},

Thank you for your thorough review of the paper "{paperTitle}".

We appreciate your valuable feedback and insights. Your comments have been carefully reviewed.

{userMessage}

Best regards,
{editorName}
Editorial Team""",
)

REPLY_TO_AUTHOR = EmailTemplate(
    subject="Regarding Your Submission - {submissionId}",
    body=f"""Dear {{authorName}},

Thank you for submitting your paper "{{paperTitle}}" to {CONFERENCE_NAME}.

We have reviewed your paper and would like to share the following feedback:

{{userMessage}}

We look forward to your response.

Best regards,
{{editorName}}
Editorial Team""",
)

PAPER_ACCEPTED = EmailTemplate(
    subject="Paper Accepted - {submissionId}: {paperTitle}",
    body=f"""Dear {{authorName}},

Congratulations! We are pleased to inform you that your paper "{{paperTitle}}" (Submission ID: {{submissionId}}) has been **ACCEPTED** for presentation at {CONFERENCE_NAME}.

**Paper Details:**
- Submission ID: {{submissionId}}
- Title: {{paperTitle}}
- Category: {{category}}

Your paper will be featured in the conference proceedings. Please proceed with the final submission and registration.

**Next Steps:**
1. Complete final registration
2. Prepare your presentation slides
3. Submit camera-ready version by {{deadline}}

Congratulations on your acceptance!

Best regards,
{{editorName}}
Editorial Team
{CONFERENCE_NAME}""",
)

PAPER_REJECTED = EmailTemplate(
    subject="Paper Decision - {submissionId}: {paperTitle}",
    body=f"""Dear {{authorName}},

Thank you for submitting your paper "{{paperTitle}}" (Submission ID: {{submissionId}}) to {CONFERENCE_NAME}.

After careful review by our expert committee, we regret to inform you that your paper has not been accepted for presentation at this time.

**Reviewer Feedback:**
{{reviewerComments}}

We encourage you to revise your paper based on the feedback and consider submitting to future conferences or journals.

Best regards,
{{editorName}}
Editorial Team
{CONFERENCE_NAME}""",
)

MAJOR_REVISION = EmailTemplate(
    subject="Major Revision Required - {submissionId}: {paperTitle}",
    body=f"""Dear {{authorName}},

Thank you for submitting your paper "{{paperTitle}}" (Submission ID: {{submissionId}}) to {CONFERENCE_NAME}.

After review by our experts, your paper shows promise but requires **major revisions** before acceptance.

**Reviewer Feedback:**
{{reviewerComments}}

**Action Required:**
Please revise your paper addressing all comments and resubmit within {{revisedDeadline}} days.

We look forward to receiving your revised submission.

Best regards,
{{editorName}}
Editorial Team
{CONFERENCE_NAME}""",
)

MINOR_REVISION = EmailTemplate(
    subject="Minor Revision Required - {submissionId}: {paperTitle}",
    body=f"""Dear {{authorName}},

Thank you for submitting your paper "{{paperTitle}}" (Submission ID: {{submissionId}}) to {CONFERENCE_NAME}.

Your paper shows good quality and requires only **minor revisions** for acceptance.

**Reviewer Feedback:**
{{reviewerComments}}

**Action Required:**
Please revise your paper addressing the minor issues and resubmit within {{revisedDeadline}} days.

Best regards,
{{editorName}}
Editorial Team
{CONFERENCE_NAME}""",
)

TEMPLATES = {
    "replyToReviewer": REPLY_TO_REVIEWER,
    "replyToAuthor": REPLY_TO_AUTHOR,
    "paperAccepted": PAPER_ACCEPTED,
    "paperRejected": PAPER_REJECTED,
    "majorRevision": MAJOR_REVISION,
    "minorRevision": MINOR_REVISION,
}

DECISION_TEMPLATES = {
    "Accept": PAPER_ACCEPTED,
    "Reject": PAPER_REJECTED,
    "Major Revision": MAJOR_REVISION,
    "Minor Revision": MINOR_REVISION,
}

TEMPLATE_VARIABLES = {
    "{submissionId}": "Paper Submission ID",
    "{paperTitle}": "Paper Title",
    "{authorName}": "Author Name",
    "{reviewerName}": "Reviewer Name",
    "{category}": "Paper Category",
    "{editorName}": "Your Name",
    "{userMessage}": "Your custom message",
    "{reviewerComments}": "Reviewer feedback/comments",
    "{deadline}": "Deadline date",
    "{revisedDeadline}": "Revision deadline (days)",
}


def render_template(text: str, values: dict) -> str:
    """Replace every ``{name}`` placeholder that has a value. Unknown placeholders are left as-is."""
    result = text
    for name, value in values.items():
        placeholder = name if name.startswith("{") else "{" + name + "}"
        result = result.replace(placeholder, "" if value is None else str(value))
    return result


def compose_decision_email(
    decision: str,
    submission_id: str,
    paper_title: str,
    author_name: str,
    category: str = "",
    editor_name: str = "Editor",
    reviewer_comments: str = "",
    notes: str = "",
    use_template: bool = True,
    now: Optional[datetime] = None,
) -> tuple[str, str]:
    """Build the (subject, body) of a final-decision email.

    With ``use_template`` the decision template is filled in and any notes are
    appended under a separator. Without it the notes are the whole body.
    """
    if decision not in DECISION_TEMPLATES:
        raise ValueError(
            f"Unknown decision '{decision}'. Available: {', '.join(DECISION_TEMPLATES)}"
        )
    template = DECISION_TEMPLATES[decision]
    now = now or datetime.now()
    values = {
        "submissionId": submission_id,
        "paperTitle": paper_title,
        "authorName": author_name,
        "category": category,
        "editorName": editor_name,
        "reviewerComments": reviewer_comments,
        "deadline": (now + timedelta(days=CAMERA_READY_DAYS)).strftime("%d/%m/%Y"),
        "revisedDeadline": str(REVISION_WINDOW_DAYS),
    }
    subject = render_template(template.subject, values)

    if not use_template:
        return subject, notes
    body = render_template(template.body, values)
    if notes.strip():
        body += NOTES_SEPARATOR + notes
    return subject, body
