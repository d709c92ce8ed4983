"""One service object per API area, all sharing a ConferenceApiClient."""

from conference_portal.client.services.admin import AdminService
from conference_portal.client.services.auth import AuthService
from conference_portal.client.services.committee import CommitteeService
from conference_portal.client.services.copyright import CopyrightService
from conference_portal.client.services.editor import EditorService
from conference_portal.client.services.papers import PaperService
from conference_portal.client.services.registration import RegistrationService
from conference_portal.client.services.reviewer import ReviewerService
from conference_portal.client.services.support import SupportService

__all__ = [
    "AdminService",
    "AuthService",
    "CommitteeService",
    "CopyrightService",
    "EditorService",
    "PaperService",
    "RegistrationService",
    "ReviewerService",
    "SupportService",
]
