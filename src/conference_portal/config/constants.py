"""Shared constants for the conference portal."""

from enum import Enum

CONFERENCE_NAME = "ICMBNT 2026"


class PaperStatus(str, Enum):
    SUBMITTED = "Submitted"
    EDITOR_ASSIGNED = "Editor Assigned"
    UNDER_REVIEW = "Under Review"
    REVIEW_RECEIVED = "Review Received"
    REVISION_REQUIRED = "Revision Required"
    REVISED_SUBMITTED = "Revised Submitted"
    CONDITIONALLY_ACCEPT = "Conditionally Accept"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    PUBLISHED = "Published"


class RevisionStatus(str, Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under-review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    REVISE_AGAIN = "revise-again"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class CopyrightStatus(str, Enum):
    PENDING = "Pending"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class AssignmentStatus(str, Enum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    REVIEW_SUBMITTED = "Review Submitted"


class Role(str, Enum):
    AUTHOR = "Author"
    REVIEWER = "Reviewer"
    EDITOR = "Editor"
    ADMIN = "Admin"


REVIEW_RECOMMENDATIONS = [
    "Accept",
    "Conditional Accept",
    "Minor Revision",
    "Major Revision",
    "Reject",
]
DEFAULT_RECOMMENDATION = "Major Revision"
DEFAULT_RATING = 3
RATING_RANGE = (1, 5)

# Decisions an editor can send with the final-decision email
FINAL_DECISIONS = ["Accept", "Reject", "Major Revision", "Minor Revision"]

# Editor decisions on a submitted revision
REVISION_DECISIONS = ["accepted", "rejected", "revise-again"]

# Minimum number of completed reviews before a paper can be accepted
MIN_REVIEWS_FOR_ACCEPTANCE = 3

COMMITTEE_ROLES = [
    "Conference Chair",
    "Conference Co-Chair",
    "Organizing Chair",
    "Technical Program Chair",
    "Publication Chair",
    "Publicity Chair",
    "Local Arrangement Chair",
    "Advisory Board",
    "Conference Coordinators",
    "Committee Members",
]
DEFAULT_COMMITTEE_ROLE = "Committee Members"

PAPER_CATEGORIES = {
    "Engineering and Technology": [
        "Aeronautical", "AI", "Architecture", "Artificial Intelligence",
        "Aviation Technology", "Big Data", "Bioinformatics", "Biomedical Engineering",
        "Bionuclear Engineering", "Biotechnology", "Civil Engineering", "Computer Science",
        "Computing", "Control Automation", "Cybersecurity", "Design", "Electrical",
        "Electronics", "Energy", "Engineering", "Image Processing", "Industrial Engineering",
        "Information Technology", "IOT", "Manufacturing", "Marine Engineering",
        "Material Science",
    ],
    "Medical And Health Science": [
        "Cardiology", "Dentistry", "Dermatology", "Healthcare", "Medicine", "Nursing", "Pharmacy",
    ],
    "Business and Economics": [
        "Accounting", "Banking", "Economics", "Finance", "Management", "Marketing",
    ],
    "Education": [
        "Curriculum", "E-Learning", "Educational Technology", "Pedagogy", "Teaching Methods",
    ],
    "Social Sciences and Humanities": [
        "Anthropology", "History", "Linguistics", "Philosophy", "Psychology", "Sociology",
    ],
    "Sports Science": [
        "Exercise Physiology", "Sports Medicine", "Sports Psychology", "Training",
    ],
    "Physical and life sciences": ["Biology", "Chemistry", "Physics", "Zoology"],
    "Agriculture": ["Agricultural Engineering", "Agronomy", "Forestry", "Horticulture"],
    "Mathematics and statistics": [
        "Algebra", "Calculus", "Data Analysis", "Probability", "Statistics",
    ],
    "Law": ["Constitutional Law", "Criminal Law", "International Law", "Legal Studies"],
    "Interdisciplinary": ["Environmental Studies", "Gender Studies", "Sustainability"],
}

# Payment methods and the sub-methods of a bank transfer
PAYMENT_METHODS = ["bank-transfer", "paypal", "external"]
BANK_TRANSFER_SUB_METHODS = ["upi", "bank-account"]

REGISTRATION_TYPES = ["author", "listener"]

# File limits
MB = 1024 * 1024
PAPER_MAX_BYTES = 3 * MB
PAPER_EXTENSIONS = {".pdf", ".doc", ".docx"}
REVISION_MAX_BYTES = 10 * MB
REVISION_EXTENSIONS = {".pdf"}
FINAL_DOC_EXTENSIONS = {".doc", ".docx", ".pdf"}
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp"}

# Payment screenshots are shrunk before upload
SCREENSHOT_MAX_SIZE = (800, 800)
SCREENSHOT_JPEG_QUALITY = 70

# Days added to "now" for the camera-ready deadline in acceptance emails
CAMERA_READY_DAYS = 30
REVISION_WINDOW_DAYS = 30

TABLE_FORMATS = ["grid", "pipe", "simple", "github"]
