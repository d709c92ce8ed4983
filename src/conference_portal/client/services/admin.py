"""Admin account management, editor assignment and selected-user notifications."""

from typing import Optional

from conference_portal.client.services.base import BaseService
from conference_portal.core.models import PdfAsset, UserProfile
from conference_portal.core.workflow import require_text
from conference_portal.utils.logging_config import get_logger

logger = get_logger(__name__)


class AdminService(BaseService):
    def dashboard_stats(self) -> dict:
        body = self.client.get("/api/admin/dashboard-stats")
        return body.get("stats", body)

    def users(self, role: Optional[str] = None, search: str = "") -> list[UserProfile]:
        body = self.client.get("/api/admin/users", params={"role": role, "search": search})
        return [UserProfile.model_validate(u) for u in body.get("users", [])]

    def delete_user(self, user_id: str) -> dict:
        body = self.client.delete(f"/api/admin/users/{user_id}")
        logger.info("User deleted", user_id=user_id)
        return body

    def editors(self) -> list[UserProfile]:
        body = self.client.get("/api/admin/editors")
        return [UserProfile.model_validate(e) for e in body.get("editors", [])]

    def create_editor(self, email: str, username: str, password: str) -> dict:
        payload = {
            "email": require_text("email", email, "Email is required"),
            "username": require_text("username", username, "Username is required"),
            "password": require_text("password", password, "Password is required"),
        }
        body = self.client.post("/api/admin/editors", json=payload)
        logger.info("Editor created", email=email)
        return body

    def assign_editor(self, paper_id: str, editor_id: str) -> dict:
        return self.client.post(
            "/api/admin/assign-editor", json={"paperId": paper_id, "editorId": editor_id}
        )

    def reassign_editor(self, paper_id: str, new_editor_id: str) -> dict:
        return self.client.post(
            "/api/admin/reassign-editor",
            json={"paperId": paper_id, "newEditorId": new_editor_id},
        )

    def selected_users(self) -> list[dict]:
        """Authors selected for the conference, with their paper and payment details."""
        return self.client.get("/api/admin/selected-users").get("users", [])

    def send_selection_email(self, submission_id: str) -> dict:
        body = self.client.post(
            "/api/admin/selected-users/send-email", json={"submissionId": submission_id}
        )
        logger.info("Selection email sent", submission_id=submission_id)
        return body

    def pdfs(self) -> list[PdfAsset]:
        body = self.client.get("/api/admin/pdfs")
        return [PdfAsset.model_validate(p) for p in body.get("pdfs", [])]

    def delete_pdf(self, public_id: str) -> dict:
        return self.client.delete("/api/admin/pdfs", json={"publicId": public_id})
