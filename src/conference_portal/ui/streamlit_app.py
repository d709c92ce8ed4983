"""Streamlit web portal for authors, reviewers, editors and admins."""

from datetime import date, timedelta
from typing import Optional

import pandas as pd
import streamlit as st

from conference_portal.client.api_client import ConferenceApiClient
from conference_portal.client.credentials import CredentialStore
from conference_portal.client.errors import (
    ApiError,
    AuthenticationError,
    EmailNotVerifiedError,
    FormValidationError,
    PortalError,
    user_message,
)
from conference_portal.config.constants import (
    BANK_TRANSFER_SUB_METHODS,
    COMMITTEE_ROLES,
    CONFERENCE_NAME,
    DEFAULT_COMMITTEE_ROLE,
    FINAL_DECISIONS,
    PAPER_CATEGORIES,
    PAYMENT_METHODS,
    RATING_RANGE,
    REVIEW_RECOMMENDATIONS,
    REVISION_DECISIONS,
    Role,
)
from conference_portal.config.portal_config import get_portal_config
from conference_portal.core.display import (
    committee_to_dataframe,
    fees_to_dataframe,
    papers_to_dataframe,
    registrations_to_dataframe,
    reminders_to_dataframe,
)
from conference_portal.core.fees import default_category, registration_categories
from conference_portal.core.filters import (
    ALL,
    REVIEWER_SORT_OPTIONS,
    REVIEWER_STATUSES,
    SORT_OPTIONS,
    filter_members,
    filter_papers,
    filter_registrations,
    filter_reviewers,
    group_members_by_role,
    paper_categories,
    reviewer_expertise,
    reviewer_stats,
)
from conference_portal.core.models import CommitteeLinks, CommitteeMember, ReviewForm
from conference_portal.core.templates import compose_decision_email
from conference_portal.core.workflow import can_accept, deadline_status, reviewers_with_status
from conference_portal.utils.logging_config import configure_logger, get_logger
from conference_portal.utils.utils import temporary_upload

logger = get_logger(__name__)

# Page configuration
st.set_page_config(
    page_title=f"{CONFERENCE_NAME} Portal",
    page_icon="📄",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown(
    """
<style>
.status-badge {
    border-radius: 0.5rem;
    padding: 0.2rem 0.6rem;
    background-color: #f0f2f6;
    font-weight: bold;
}
.deadline-overdue {
    color: #dc3545;
    font-weight: bold;
}
.stDataFrame {
    width: 100%;
}
</style>
""",
    unsafe_allow_html=True,
)


@st.cache_resource
def get_config():
    """Load the portal configuration once per server process."""
    config = get_portal_config()
    configure_logger(config.log_level)
    return config


def get_client() -> ConferenceApiClient:
    # One client per browser session, each with its own in-memory credentials
    if "client" not in st.session_state:
        st.session_state.client = ConferenceApiClient(get_config(), store=CredentialStore())
    return st.session_state.client


def show_error(error: Exception) -> None:
    if isinstance(error, FormValidationError):
        st.warning(user_message(error))
    else:
        st.error(user_message(error))
    if isinstance(error, AuthenticationError) and not isinstance(error, EmailNotVerifiedError):
        st.info("Please log in again.")


def run_action(func, *args, success: Optional[str] = None, **kwargs):
    """Call a client operation and report failures in the page instead of crashing it."""
    try:
        result = func(*args, **kwargs)
    except PortalError as e:
        logger.debug("Portal action failed", action=getattr(func, "__name__", str(func)), error=str(e))
        show_error(e)
        return None
    if success:
        st.success(success)
    return result


def save_upload(uploaded):
    """Temp file holding a Streamlit upload, removed when the block exits."""
    if uploaded is None:
        return temporary_upload(None, None)
    return temporary_upload(uploaded.name, bytes(uploaded.getbuffer()))


def format_date(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "-"


# Public pages


def login_page(client: ConferenceApiClient) -> None:
    st.title(f"📄 {CONFERENCE_NAME}")
    login_tab, signup_tab, reset_tab = st.tabs(["Login", "Sign up", "Forgot password"])

    with login_tab:
        with st.form("login"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Login", type="primary")
        if submitted:
            try:
                client.auth.login(email, password)
            except EmailNotVerifiedError as e:
                show_error(e)
                st.session_state.unverified_email = e.email
            except PortalError as e:
                show_error(e)
            else:
                st.rerun()
        if st.session_state.get("unverified_email"):
            if st.button("Resend verification email"):
                run_action(
                    client.auth.resend_verification,
                    st.session_state.unverified_email,
                    success="Verification email sent",
                )

    with signup_tab:
        with st.form("signup"):
            username = st.text_input("Name")
            email = st.text_input("Email", key="signup_email")
            password = st.text_input("Password", type="password", key="signup_password")
            confirm = st.text_input("Confirm password", type="password")
            submitted = st.form_submit_button("Create account")
        if submitted:
            if password != confirm:
                st.warning("Passwords do not match")
            else:
                run_action(
                    client.auth.signup,
                    email,
                    password,
                    username,
                    success="Account created. Check your email to verify it before logging in.",
                )

    with reset_tab:
        email = st.text_input("Email", key="reset_email")
        if st.button("Send OTP"):
            run_action(client.auth.forgot_password, email, success="OTP sent to your email")
        with st.form("reset"):
            otp = st.text_input("OTP")
            new_password = st.text_input("New password", type="password")
            submitted = st.form_submit_button("Reset password")
        if submitted:
            run_action(
                client.auth.reset_password, email, otp, new_password, success="Password updated"
            )


def committee_page(client: ConferenceApiClient) -> None:
    st.header("👥 Conference Committee")
    members = run_action(client.committee.members) or []
    search = st.text_input("Search by name, affiliation or country")
    members = filter_members(members, search)
    if not members:
        st.info("No committee members found.")
        return
    for role, in_role in group_members_by_role(members).items():
        st.subheader(role)
        for member in in_role:
            line = f"**{member.name}**"
            if member.designation:
                line += f", {member.designation}"
            line += f"  \n{member.affiliation}"
            if member.country:
                line += f", {member.country}"
            st.markdown(line)


def status_lookup_page(client: ConferenceApiClient) -> None:
    st.header("🔎 Paper Status")
    submission_id = st.text_input("Submission ID")
    if st.button("Check status") and submission_id:
        paper = run_action(client.papers.status, submission_id.strip())
        if paper:
            st.markdown(f"**{paper.paper_title}** by {paper.author_name}")
            st.markdown(f"Status: <span class='status-badge'>{paper.status}</span>", unsafe_allow_html=True)


# Author pages


def author_submission_page(client: ConferenceApiClient) -> None:
    st.header("📄 My Submission")
    paper = run_action(client.papers.my_submission)
    if paper is None:
        st.info("You have not submitted a paper yet. Use 'Submit Paper' to get started.")
        return

    col1, col2, col3 = st.columns(3)
    col1.metric("Submission ID", paper.submission_id)
    col2.metric("Status", paper.status or "-")
    col3.metric("Category", paper.category or "-")
    st.markdown(f"**{paper.paper_title}**")
    if paper.pdf_url:
        st.markdown(f"[View manuscript]({paper.pdf_url})")

    history = run_action(client.papers.history, paper.submission_id)
    if history and history.timeline:
        st.subheader("Timeline")
        for event in history.timeline:
            st.markdown(f"- **{format_date(event.date)}** {event.title or event.type}: {event.description or ''}")

    if paper.status in ("Accepted", "Conditionally Accept"):
        st.subheader("Camera-ready document")
        uploaded = st.file_uploader("Final document", type=["doc", "docx", "pdf"], key="final_doc")
        if st.button("Upload final document") and uploaded:
            with save_upload(uploaded) as path:
                run_action(
                    client.papers.upload_final_document,
                    paper.submission_id,
                    path,
                    success="Final document uploaded",
                )


def submit_paper_page(client: ConferenceApiClient) -> None:
    st.header("📤 Submit Paper")
    user = client.store.user
    with st.form("submit_paper"):
        title = st.text_input("Paper title")
        author = st.text_input("Author name", value=user.get("username") or "")
        email = st.text_input("Email", value=user.get("email") or "")
        category = st.selectbox("Category", list(PAPER_CATEGORIES))
        uploaded = st.file_uploader("Manuscript (PDF, DOC or DOCX, max 3 MB)", type=["pdf", "doc", "docx"])
        submitted = st.form_submit_button("Submit", type="primary")
    if category:
        st.caption("Topics: " + ", ".join(PAPER_CATEGORIES[category]))
    if submitted:
        if uploaded is None:
            st.warning("Please attach your manuscript")
            return
        with save_upload(uploaded) as path:
            submission_id = run_action(client.papers.submit_paper, title, author, email, category, path)
        if submission_id:
            st.success(f"Paper submitted. Your submission ID is {submission_id}")


def revisions_page(client: ConferenceApiClient) -> None:
    st.header("📝 Revisions")
    revisions = run_action(client.papers.revision_requests) or []
    if not revisions:
        st.info("No revision requests.")
        return
    for revision in revisions:
        with st.expander(f"{revision.submission_id}: {revision.paper_title or ''} ({revision.revision_status})"):
            if revision.editor_comments:
                st.markdown(f"**Editor comments:** {revision.editor_comments}")
            if revision.deadline:
                st.write(deadline_status(revision.deadline).text)
            if not revision.is_open:
                continue
            uploaded = st.file_uploader("Revised PDF (max 10 MB)", type=["pdf"], key=f"rev_{revision.id}")
            notes = st.text_area("Notes to the editor", key=f"notes_{revision.id}")
            if st.button("Submit revision", key=f"submit_{revision.id}") and uploaded:
                with save_upload(uploaded) as path:
                    run_action(
                        client.papers.submit_revision_file,
                        revision,
                        path,
                        notes,
                        success="Revision submitted",
                    )


def registration_page(client: ConferenceApiClient) -> None:
    st.header("💳 Registration")
    registration = run_action(client.registration.my_registration)
    if registration is None:
        registration = run_action(client.registration.my_listener_registration)
    if registration is not None:
        st.metric("Payment status", registration.payment_status)
        if registration.registration_number:
            st.success(f"Registration number: {registration.registration_number}")
        if registration.rejection_reason:
            st.error(f"Rejected: {registration.rejection_reason}")
        return

    paper = run_action(client.registration.my_paper_details)
    registration_type = "author" if paper else "listener"
    st.write(f"Registering as **{registration_type}**")

    country = st.text_input("Country", value=client.store.get("country") or "")
    if country and country != client.store.get("country"):
        run_action(client.auth.update_country, country)
    is_member = run_action(client.registration.check_membership) or False
    if not country:
        st.info("Enter your country to see the fee table.")
        return

    st.dataframe(fees_to_dataframe(country, registration_type, is_member), hide_index=True)
    categories = registration_categories(country, registration_type)
    default = default_category(country, registration_type, client.store.user.get("userType"))
    labels = [c.label for c in categories]
    index = labels.index(default.label) if default else 0
    label = st.selectbox("Registration category", labels, index=index)
    category = categories[labels.index(label)]
    amount = category.price_for(is_member)
    st.write(f"Amount due: **{amount:,} {category.currency}**")

    method = st.selectbox("Payment method", PAYMENT_METHODS)
    sub_method = None
    if method == "bank-transfer":
        sub_method = st.radio("Transfer via", BANK_TRANSFER_SUB_METHODS, horizontal=True)
    transaction_id = st.text_input("Transaction ID")
    institution = address = None
    if registration_type == "listener":
        institution = st.text_input("Institution")
        address = st.text_area("Address")
    proof = st.file_uploader("Payment screenshot", type=["png", "jpg", "jpeg", "gif", "webp", "bmp", "pdf"])

    if st.button("Submit registration", type="primary"):
        with save_upload(proof) as path:
            run_action(
                client.registration.submit,
                registration_type,
                method,
                amount,
                category.id,
                country,
                path or "",
                payment_sub_method=sub_method,
                transaction_id=transaction_id,
                institution=institution,
                address=address,
                success="Registration submitted. An admin will verify your payment.",
            )


def copyright_page(client: ConferenceApiClient) -> None:
    st.header("©️ Copyright")
    dashboard = run_action(client.copyright.dashboard)
    if dashboard is None:
        return
    if not dashboard.has_paper:
        st.info("The copyright form becomes available once you have an accepted paper.")
        return
    record = dashboard.copyright
    if record:
        st.metric("Form status", record.status)
        if record.copyright_form_url:
            st.markdown(f"[Uploaded form]({record.copyright_form_url})")
    uploaded = st.file_uploader("Signed copyright form", type=["pdf", "doc", "docx", "png", "jpg", "jpeg"])
    if st.button("Upload form") and uploaded:
        with save_upload(uploaded) as path:
            run_action(client.copyright.upload_form, path, success="Form uploaded")

    if record and record.id:
        st.subheader("Messages")
        for message in record.messages:
            with st.chat_message("user" if message.sender == "author" else "assistant"):
                st.write(message.message)
        text = st.chat_input("Message the admin")
        if text:
            run_action(client.copyright.send_message, record.id, text)
            st.rerun()


def support_page(client: ConferenceApiClient) -> None:
    st.header("💬 Support")
    thread = run_action(client.support.my_messages)
    if thread:
        for message in thread.messages:
            with st.chat_message("user" if message.sender == "author" else "assistant"):
                st.write(message.message)
    else:
        st.info("Ask the conference team anything.")
    text = st.chat_input("Type your message")
    if text:
        run_action(client.support.send, text)
        st.rerun()


# Reviewer pages


def paper_filters(papers, key: str):
    col1, col2, col3, col4 = st.columns(4)
    search = col1.text_input("Search", key=f"{key}_search")
    status = col2.selectbox("Urgency", [ALL, "overdue", "urgent", "pending"], key=f"{key}_status")
    category = col3.selectbox("Category", [ALL] + paper_categories(papers), key=f"{key}_category")
    sort_by = col4.selectbox("Sort by", SORT_OPTIONS, key=f"{key}_sort")
    return filter_papers(papers, search, status, category, sort_by)


def reviewer_filters(reviewers):
    """Reviewer pool summary plus search, status, rating and expertise filters."""
    stats = reviewer_stats(reviewers)
    cols = st.columns(5)
    cols[0].metric("Reviewers", stats["total"])
    cols[1].metric("Active", stats["active"])
    cols[2].metric("With overdue", stats["overdue"])
    cols[3].metric("Top rated", stats["top_performers"])
    cols[4].metric("Reviews done", stats["total_reviews"])

    col1, col2, col3 = st.columns(3)
    search = col1.text_input("Search reviewers", placeholder="Name, email or expertise", key="rev_search")
    status = col2.selectbox("Reviewer status", REVIEWER_STATUSES, key="rev_status")
    sort_by = col3.selectbox("Sort reviewers by", REVIEWER_SORT_OPTIONS, key="rev_sort")
    col4, col5 = st.columns(2)
    min_rating = col4.slider("Minimum rating", 0.0, 5.0, 0.0, 0.5, key="rev_rating")
    expertise = col5.multiselect("Expertise", reviewer_expertise(reviewers), key="rev_expertise")
    return filter_reviewers(reviewers, search, status, min_rating, expertise, sort_by)


def select_paper(papers, key: str):
    """Show papers as a selectable table and return the chosen one."""
    df = papers_to_dataframe(papers, colored=False)
    event = st.dataframe(
        df.drop(columns=["#"]),
        width="stretch",
        hide_index=True,
        on_select="rerun",
        selection_mode="single-row",
        key=key,
    )
    if event.selection.rows:
        return papers[event.selection.rows[0]]
    return None


def reviewer_page(client: ConferenceApiClient) -> None:
    st.header("🧐 Reviewer Dashboard")
    stats = run_action(client.reviewer.dashboard_stats) or {}
    if stats:
        cols = st.columns(len(stats))
        for col, (name, value) in zip(cols, stats.items()):
            col.metric(name, value)

    papers = run_action(client.reviewer.assigned_papers) or []
    if not papers:
        st.info("No papers assigned to you yet.")
        return
    papers = paper_filters(papers, "reviewer")
    paper = select_paper(papers, "reviewer_table")
    if paper is None:
        return

    st.divider()
    st.subheader(paper.paper_title)
    if paper.pdf_url:
        st.markdown(f"[Open manuscript]({paper.pdf_url})")
    review_tab, messages_tab = st.tabs(["Review", "Messages"])

    with review_tab:
        draft = run_action(client.reviewer.draft, paper.submission_id) or ReviewForm()
        low, high = RATING_RANGE
        with st.form(f"review_{paper.submission_id}"):
            comments = st.text_area("Comments to the author", value=draft.comments)
            to_editor = st.text_area("Confidential comments to the editor", value=draft.comments_to_editor)
            strengths = st.text_area("Strengths", value=draft.strengths)
            weaknesses = st.text_area("Weaknesses", value=draft.weaknesses)
            col1, col2, col3, col4 = st.columns(4)
            overall = col1.slider("Overall", low, high, draft.overall_rating)
            novelty = col2.slider("Novelty", low, high, draft.novelty_rating)
            quality = col3.slider("Quality", low, high, draft.quality_rating)
            clarity = col4.slider("Clarity", low, high, draft.clarity_rating)
            recommendation = st.selectbox(
                "Recommendation",
                REVIEW_RECOMMENDATIONS,
                index=REVIEW_RECOMMENDATIONS.index(draft.recommendation),
            )
            submitted = st.form_submit_button("Submit review", type="primary")
        if submitted:
            form = ReviewForm(
                comments=comments,
                comments_to_editor=to_editor,
                strengths=strengths,
                weaknesses=weaknesses,
                overall_rating=overall,
                novelty_rating=novelty,
                quality_rating=quality,
                clarity_rating=clarity,
                recommendation=recommendation,
            )
            run_action(client.reviewer.submit_review, paper.submission_id, form, success="Review submitted")

    with messages_tab:
        for message in run_action(client.reviewer.messages, paper.submission_id) or []:
            with st.chat_message("user" if message.sender_type == "reviewer" else "assistant"):
                st.caption(f"{message.sender_name or message.sender_type} · {format_date(message.timestamp)}")
                st.write(message.message)
        text = st.chat_input("Message the editor")
        if text:
            run_action(client.reviewer.send_message, paper.submission_id, text)
            st.rerun()


# Editor pages


def editor_papers_page(client: ConferenceApiClient) -> None:
    st.header("🗂️ Editor Dashboard")
    papers = run_action(client.editor.papers) or []
    if not papers:
        st.info("No papers yet.")
        return
    papers = paper_filters(papers, "editor")
    paper = select_paper(papers, "editor_table")
    if paper is None:
        return

    st.divider()
    st.subheader(f"{paper.submission_id}: {paper.paper_title}")
    reviews_tab, assign_tab, decision_tab, message_tab = st.tabs(
        ["Reviews", "Assign reviewers", "Decision", "Message author"]
    )

    with reviews_tab:
        reviews = run_action(client.editor.paper_reviews, paper.id) or []
        if not reviews:
            st.info("No reviews submitted yet.")
        for review in reviews:
            with st.expander(f"{review.reviewer_name or review.reviewer_email}: {review.recommendation} (avg {review.avg_rating:.1f})"):
                st.markdown(f"**To author:** {review.comments or '-'}")
                st.markdown(f"**To editor:** {review.comments_to_editor or '-'}")
        re_reviews = run_action(client.editor.paper_re_reviews, paper.id) or []
        if re_reviews:
            st.subheader("Re-reviews")
            for review in re_reviews:
                st.markdown(f"- {review.reviewer_name or review.reviewer_email}: {review.recommendation}")

    with assign_tab:
        reviewers = run_action(client.editor.reviewers) or []
        reviewers = reviewer_filters(reviewers)
        options = {f"{r.display_name} <{r.email}>": r.id for r in reviewers}
        chosen = st.multiselect("Reviewers", list(options))
        deadline = st.date_input("Review deadline", value=date.today() + timedelta(days=14))
        if st.button("Assign"):
            run_action(
                client.editor.assign_reviewers,
                paper,
                [options[c] for c in chosen],
                deadline,
                success="Reviewers assigned",
            )

    with decision_tab:
        assigned = reviewers_with_status(paper, reviews, re_reviews)
        for reviewer in assigned:
            st.markdown(f"- {reviewer.get('username') or reviewer.get('email')}: {reviewer['reviewStatus']}")
        if can_accept(paper.status, assigned) and st.button("Accept paper"):
            run_action(client.editor.accept_paper, paper.id, success="Paper accepted")
        decision = st.selectbox("Decision", FINAL_DECISIONS)
        use_template = st.checkbox("Use template", value=True)
        notes = st.text_area("Additional notes")
        reviewer_comments = st.text_area("Reviewer comments to include")
        subject, body = compose_decision_email(
            decision,
            paper.submission_id,
            paper.paper_title,
            paper.author_name,
            category=paper.category or "",
            editor_name=client.store.user.get("username") or "Editor",
            reviewer_comments=reviewer_comments,
            notes=notes,
            use_template=use_template,
        )
        st.text_input("Subject", value=subject, disabled=True)
        content = st.text_area("Email", value=body, height=300)
        if st.button("Send decision", type="primary"):
            run_action(
                client.editor.send_final_decision,
                paper,
                decision,
                content,
                reviewer_comments,
                success="Decision sent",
            )

    with message_tab:
        text = st.text_area("Message", key="author_message")
        if st.button("Send to author"):
            run_action(client.editor.send_message_to_author, paper, text, success="Message sent")


def reminders_page(client: ConferenceApiClient) -> None:
    st.header("⏰ Reviewer Reminders")
    reviewers = run_action(client.editor.non_responding_reviewers) or []
    if not reviewers:
        st.info("Every reviewer is on track.")
        return
    df = reminders_to_dataframe(reviewers)
    event = st.dataframe(
        df, width="stretch", hide_index=True, on_select="rerun", selection_mode="multi-row"
    )
    selected = [reviewers[i] for i in event.selection.rows]
    if st.button(f"Send reminders ({len(selected)})", disabled=not selected):
        results = run_action(client.editor.send_bulk_reminders, selected)
        if results is not None:
            st.success(f"Reminders sent: {results}")


def revision_review_page(client: ConferenceApiClient) -> None:
    st.header("🔁 Submitted Revisions")
    revisions = run_action(client.editor.revision_submissions) or []
    if not revisions:
        st.info("No revisions waiting.")
        return
    for revision in revisions:
        with st.expander(f"{revision.submission_id}: {revision.paper_title or ''}"):
            for file in revision.revision_files:
                st.markdown(f"- [{file.get('fileName', 'file')}]({file.get('url', '')})")
            if revision.author_notes:
                st.markdown(f"**Author notes:** {revision.author_notes}")
            decision = st.selectbox("Decision", REVISION_DECISIONS, key=f"dec_{revision.id}")
            comments = st.text_area("Comments", key=f"com_{revision.id}")
            if st.button("Save", key=f"save_{revision.id}"):
                run_action(client.editor.review_revision, revision, decision, comments, success="Saved")


# Admin pages


def payments_page(client: ConferenceApiClient) -> None:
    st.header("💰 Payment Verification")
    authors_tab, listeners_tab = st.tabs(["Authors", "Listeners"])

    with authors_tab:
        status = st.selectbox("Status", [ALL, "pending", "verified", "rejected"])
        search = st.text_input("Search", key="reg_search")
        registrations = run_action(client.registration.all_registrations, status) or []
        registrations = filter_registrations(registrations, search)
        st.dataframe(registrations_to_dataframe(registrations, colored=False), hide_index=True)
        pending = [r for r in registrations if r.payment_status == "pending"]
        if pending:
            ids = {f"{r.display_name} ({r.transaction_id or r.id})": r for r in pending}
            choice = ids[st.selectbox("Registration", list(ids))]
            if choice.payment_screenshot:
                st.image(choice.payment_screenshot, width=400)
            notes = st.text_input("Verification notes")
            reason = st.text_input("Rejection reason")
            col1, col2 = st.columns(2)
            if col1.button("Verify", type="primary"):
                number = run_action(client.registration.verify, choice.id, notes)
                if number:
                    st.success(f"Verified. Registration number {number}")
            if col2.button("Reject"):
                run_action(client.registration.reject, choice.id, reason, success="Registration rejected")

    with listeners_tab:
        status = st.selectbox("Status", [ALL, "pending", "verified", "rejected"], key="listener_status")
        search = st.text_input("Search", key="listener_search")
        listeners = run_action(
            client.registration.listeners, None if status == ALL else status, search
        ) or []
        st.dataframe(registrations_to_dataframe(listeners, colored=False), hide_index=True)
        pending = [r for r in listeners if r.payment_status == "pending"]
        if pending:
            ids = {f"{r.display_name} ({r.display_email})": r for r in pending}
            choice = ids[st.selectbox("Listener", list(ids))]
            reason = st.text_input("Rejection reason", key="listener_reason")
            col1, col2 = st.columns(2)
            if col1.button("Verify listener"):
                run_action(client.registration.set_listener_status, choice.id, "verified", success="Verified")
            if col2.button("Reject listener"):
                run_action(
                    client.registration.set_listener_status, choice.id, "rejected", reason, success="Rejected"
                )


def member_form(member: Optional[CommitteeMember], key: str) -> Optional[CommitteeMember]:
    member = member or CommitteeMember(name="", role=DEFAULT_COMMITTEE_ROLE)
    with st.form(key):
        name = st.text_input("Name", value=member.name)
        role = st.selectbox("Role", COMMITTEE_ROLES, index=COMMITTEE_ROLES.index(member.role) if member.role in COMMITTEE_ROLES else 0)
        designation = st.text_input("Designation", value=member.designation or "")
        affiliation = st.text_input("Affiliation", value=member.affiliation)
        country = st.text_input("Country", value=member.country or "")
        email = st.text_input("Email", value=member.links.email or "")
        website = st.text_input("Website", value=member.links.website or "")
        submitted = st.form_submit_button("Save")
    if not submitted:
        return None
    return member.model_copy(
        update={
            "name": name,
            "role": role,
            "designation": designation or None,
            "affiliation": affiliation,
            "country": country or None,
            "links": CommitteeLinks(email=email or None, website=website or None),
        }
    )


def committee_admin_page(client: ConferenceApiClient) -> None:
    st.header("🏛️ Committee Management")
    members = run_action(client.committee.all_members) or []
    role = st.selectbox("Role", [ALL] + COMMITTEE_ROLES)
    shown = filter_members(members, role=role)
    st.dataframe(committee_to_dataframe(shown), hide_index=True)

    if members:
        labels = [f"{i}. {m.name} ({m.role})" for i, m in enumerate(members)]
        index = labels.index(st.selectbox("Member", labels))
        member = members[index]
        col1, col2, col3, col4 = st.columns(4)
        if col1.button("Move up", disabled=index == 0):
            run_action(client.committee.reorder, members, index, index - 1)
            st.rerun()
        if col2.button("Move down", disabled=index == len(members) - 1):
            run_action(client.committee.reorder, members, index, index + 1)
            st.rerun()
        if col3.button("Activate" if not member.active else "Deactivate"):
            run_action(client.committee.toggle_active, member.id)
            st.rerun()
        if col4.button("Delete"):
            run_action(client.committee.delete, member.id, success="Member deleted")

        st.subheader("Edit member")
        edited = member_form(member, f"edit_{member.id}")
        if edited:
            run_action(client.committee.save, edited, success="Member saved")

    st.subheader("Add member")
    new_member = member_form(None, "new_member")
    if new_member:
        new_member.order = len(members)
        run_action(client.committee.create, new_member, success="Member added")


def copyright_admin_page(client: ConferenceApiClient) -> None:
    st.header("©️ Copyright Forms")
    forms = run_action(client.copyright.list_forms) or []
    if not forms:
        st.info("No copyright forms submitted.")
        return
    df = pd.DataFrame(
        [
            {
                "Submission": r.submission_id,
                "Author": r.author_name,
                "Title": r.paper_title,
                "Status": r.status,
                "Submitted": format_date(r.submitted_at),
            }
            for r in forms
        ]
    )
    st.dataframe(df, hide_index=True)
    labels = {f"{r.submission_id} ({r.status})": r for r in forms}
    record = labels[st.selectbox("Form", list(labels))]
    if record.copyright_form_url:
        st.markdown(f"[Open form]({record.copyright_form_url})")
    comment = st.text_input("Comment")
    col1, col2 = st.columns(2)
    if col1.button("Approve"):
        run_action(client.copyright.review, record.id, "Approved", comment, success="Form approved")
    if col2.button("Reject form"):
        run_action(client.copyright.review, record.id, "Rejected", comment, success="Form rejected")


def support_admin_page(client: ConferenceApiClient) -> None:
    st.header("💬 Support Threads")
    threads = run_action(client.support.all_threads) or []
    if not threads:
        st.info("No support messages.")
        return
    labels = {f"{t.author_name or t.author_email} ({len(t.messages)})": t for t in threads}
    thread = labels[st.selectbox("Thread", list(labels))]
    for message in thread.messages:
        with st.chat_message("assistant" if message.sender == "admin" else "user"):
            st.write(message.message)
    text = st.chat_input("Reply")
    if text:
        run_action(client.support.send, text, thread.author_id)
        st.rerun()


PAGES = {
    Role.AUTHOR.value: {
        "My Submission": author_submission_page,
        "Submit Paper": submit_paper_page,
        "Revisions": revisions_page,
        "Registration": registration_page,
        "Copyright": copyright_page,
        "Support": support_page,
        "Committee": committee_page,
    },
    Role.REVIEWER.value: {
        "Assigned Papers": reviewer_page,
        "Committee": committee_page,
    },
    Role.EDITOR.value: {
        "Papers": editor_papers_page,
        "Reminders": reminders_page,
        "Revisions": revision_review_page,
        "Committee": committee_page,
    },
    Role.ADMIN.value: {
        "Payments": payments_page,
        "Committee Management": committee_admin_page,
        "Copyright Forms": copyright_admin_page,
        "Support Threads": support_admin_page,
        "Papers": editor_papers_page,
        "Committee": committee_page,
    },
}

PUBLIC_PAGES = {
    "Login": login_page,
    "Committee": committee_page,
    "Paper Status": status_lookup_page,
}


def main():
    """Main Streamlit application."""
    client = get_client()

    with st.sidebar:
        st.header(CONFERENCE_NAME)
        if client.store.is_authenticated:
            user = client.store.user
            st.write(f"Signed in as **{user.get('email')}**")
            st.caption(client.store.role or Role.AUTHOR.value)
            pages = PAGES.get(client.store.role, PAGES[Role.AUTHOR.value])
            if st.button("Logout"):
                client.auth.logout()
                st.rerun()
        else:
            pages = PUBLIC_PAGES
        page = st.radio("Navigate", list(pages))

    try:
        pages[page](client)
    except ApiError as e:
        show_error(e)


main()
