"""Committee directory: public listing and admin maintenance."""

from typing import Optional

from tqdm import tqdm

from conference_portal.client.errors import FormValidationError
from conference_portal.client.services.base import BaseService
from conference_portal.config.constants import COMMITTEE_ROLES
from conference_portal.core.committee import move_member
from conference_portal.core.models import CommitteeMember
from conference_portal.utils.logging_config import get_logger

logger = get_logger(__name__)


class CommitteeService(BaseService):
    def members(self, role: Optional[str] = None) -> list[CommitteeMember]:
        """Active members, optionally for a single role, in display order."""
        body = self.client.get(
            "/api/committee",
            params={"role": role if role and role != "all" else None},
            authenticated=False,
        )
        members = [CommitteeMember.model_validate(m) for m in body.get("members", [])]
        return sorted(members, key=lambda m: m.order)

    def member(self, member_id: str) -> CommitteeMember:
        body = self.client.get(f"/api/committee/{member_id}", authenticated=False)
        return CommitteeMember.model_validate(body.get("member") or {})

    def all_members(self) -> list[CommitteeMember]:
        """Every member including inactive ones (admin only)."""
        body = self.client.get("/api/committee/admin/all")
        members = [CommitteeMember.model_validate(m) for m in body.get("members", [])]
        return sorted(members, key=lambda m: m.order)

    @staticmethod
    def _check(member: CommitteeMember) -> None:
        if not member.name.strip():
            raise FormValidationError("name", "Name is required")
        if member.role not in COMMITTEE_ROLES:
            raise FormValidationError("role", f"Unknown committee role '{member.role}'")
        if not member.affiliation.strip():
            raise FormValidationError("affiliation", "Affiliation is required")

    def create(self, member: CommitteeMember) -> CommitteeMember:
        self._check(member)
        payload = member.to_payload()
        payload.pop("id", None)
        body = self.client.post("/api/committee", json=payload)
        created = CommitteeMember.model_validate(body.get("member") or payload)
        logger.info("Committee member created", name=created.name, role=created.role)
        return created

    def update(self, member_id: str, fields: dict) -> CommitteeMember:
        body = self.client.put(f"/api/committee/{member_id}", json=fields)
        return CommitteeMember.model_validate(body.get("member") or {})

    def save(self, member: CommitteeMember) -> CommitteeMember:
        """Write every editable field of an existing member."""
        self._check(member)
        payload = member.to_payload()
        payload.pop("id", None)
        return self.update(member.id, payload)

    def delete(self, member_id: str) -> dict:
        body = self.client.delete(f"/api/committee/{member_id}")
        logger.info("Committee member deleted", member_id=member_id)
        return body

    def toggle_active(self, member_id: str) -> CommitteeMember:
        body = self.client.patch(f"/api/committee/{member_id}/toggle-active")
        member = CommitteeMember.model_validate(body.get("member") or {})
        logger.info("Committee member toggled", member_id=member_id, active=member.active)
        return member

    def reorder(
        self, members: list[CommitteeMember], from_index: int, to_index: int
    ) -> list[CommitteeMember]:
        """Move a member and save the new ``order`` of every member that shifted.

        There is no bulk endpoint, so each changed member is one PUT. Concurrent
        edits are not reconciled; the last write wins.
        """
        reordered, changed = move_member(members, from_index, to_index)
        for member in tqdm(changed, desc="Saving order", disable=len(changed) < 5):
            self.client.put(f"/api/committee/{member.id}", json={"order": member.order})
        logger.info("Committee reordered", moved_from=from_index, moved_to=to_index, updated=len(changed))
        return reordered
