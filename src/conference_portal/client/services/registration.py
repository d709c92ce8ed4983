"""Conference registration and payment verification."""

from typing import Optional

from conference_portal.client.errors import ApiError, FormValidationError, NotFoundError
from conference_portal.client.services.base import BaseService
from conference_portal.config.constants import PaymentStatus
from conference_portal.core.models import ListenerRegistration, Registration
from conference_portal.core.workflow import require_text, validate_payment
from conference_portal.utils.logging_config import get_logger
from conference_portal.utils.utils import encode_payment_proof, validate_upload

logger = get_logger(__name__)

PROOF_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp", ".pdf"}
PROOF_MAX_BYTES = 10 * 1024 * 1024


class RegistrationService(BaseService):
    def my_paper_details(self) -> Optional[dict]:
        """Details of the user's paper, or None when they have no paper (and register as a listener)."""
        try:
            body = self.client.get("/api/registration/my-paper-details")
        except NotFoundError:
            return None
        return body.get("paperDetails")

    def my_registration(self) -> Optional[Registration]:
        try:
            body = self.client.get("/api/registration/my-registration")
        except NotFoundError:
            return None
        registration = body.get("registration")
        return Registration.model_validate(registration) if registration else None

    def my_listener_registration(self) -> Optional[ListenerRegistration]:
        try:
            body = self.client.get("/api/listener/my-listener-registration")
        except NotFoundError:
            return None
        registration = body.get("registration")
        return ListenerRegistration.model_validate(registration) if registration else None

    def check_membership(self) -> bool:
        """Whether the user holds a society membership (member pricing).

        Failures are logged and treated as non-member, so registration can continue.
        """
        try:
            body = self.client.get("/api/membership/check-membership")
        except ApiError as e:
            logger.warning("Membership check failed, assuming non-member", error=str(e))
            return False
        return bool(body.get("isMember"))

    def submit(
        self,
        registration_type: str,
        payment_method: str,
        amount: float,
        category: str,
        country: str,
        payment_proof: str,
        payment_sub_method: Optional[str] = None,
        transaction_id: Optional[str] = None,
        institution: Optional[str] = None,
        address: Optional[str] = None,
    ) -> dict:
        """Submit an author or listener registration with its payment proof.

        Image screenshots are compressed before upload. Listeners post to a
        separate endpoint and must also give an institution and address.
        """
        validate_payment(
            registration_type,
            payment_method,
            payment_sub_method,
            transaction_id,
            bool(payment_proof),
            country,
            category,
            institution,
            address,
        )
        if amount is None or amount <= 0:
            raise FormValidationError("amount", "Registration amount must be positive")
        proof_path = validate_upload(
            payment_proof, PROOF_EXTENSIONS, PROOF_MAX_BYTES, field="paymentScreenshot"
        )

        payload = {
            "paymentMethod": payment_method,
            "paymentSubMethod": payment_sub_method,
            "transactionId": (transaction_id or "").strip(),
            "amount": amount,
            "paymentScreenshot": encode_payment_proof(proof_path),
            "registrationCategory": category,
            "country": country,
        }
        if registration_type == "listener":
            payload["institution"] = institution.strip()
            payload["address"] = address.strip()
            path = "/api/listener/submit-listener"
        else:
            path = "/api/registration/submit"

        body = self.client.post(path, json=payload)
        logger.info(
            "Registration submitted",
            registration_type=registration_type,
            category=category,
            payment_method=payment_method,
        )
        return body

    # Admin: author registrations

    def pending(self) -> list[Registration]:
        body = self.client.get("/api/registration/admin/pending")
        return [Registration.model_validate(r) for r in body.get("registrations", [])]

    def all_registrations(self, status: Optional[str] = None) -> list[Registration]:
        if status == "all":
            status = None
        body = self.client.get("/api/registration/admin/all", params={"status": status})
        return [Registration.model_validate(r) for r in body.get("registrations", [])]

    def verify(self, registration_id: str, notes: str = "") -> Optional[str]:
        """Mark a payment as verified. Returns the issued registration number."""
        body = self.client.put(
            f"/api/registration/admin/{registration_id}/verify",
            json={"verificationNotes": notes},
        )
        final_user = body.get("finalUser") or {}
        number = final_user.get("registrationNumber") or body.get("registrationNumber")
        logger.info("Registration verified", registration_id=registration_id, registration_number=number)
        return number

    def reject(self, registration_id: str, reason: str) -> dict:
        reason = require_text("rejectionReason", reason, "Please provide a rejection reason")
        body = self.client.put(
            f"/api/registration/admin/{registration_id}/reject",
            json={"rejectionReason": reason},
        )
        logger.info("Registration rejected", registration_id=registration_id)
        return body

    # Admin: listeners

    def listeners(self, status: Optional[str] = None, search: str = "") -> list[ListenerRegistration]:
        body = self.client.get(
            "/api/listener/admin/all-listeners",
            params={"status": status, "search": search},
        )
        return [ListenerRegistration.model_validate(r) for r in body.get("registrations", [])]

    def set_listener_status(
        self,
        registration_id: str,
        status: str,
        rejection_reason: str = "",
        notes: str = "",
    ) -> ListenerRegistration:
        if status not in (PaymentStatus.VERIFIED.value, PaymentStatus.REJECTED.value):
            raise FormValidationError("status", "Status must be 'verified' or 'rejected'")
        if status == PaymentStatus.REJECTED.value:
            rejection_reason = require_text(
                "rejectionReason", rejection_reason, "Please provide a rejection reason"
            )
        body = self.client.put(
            f"/api/listener/admin/verify-listener/{registration_id}",
            json={"status": status, "rejectionReason": rejection_reason, "notes": notes},
        )
        logger.info("Listener registration updated", registration_id=registration_id, status=status)
        return ListenerRegistration.model_validate(body.get("registration") or {})
