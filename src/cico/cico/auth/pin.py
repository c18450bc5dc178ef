from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError, BackendError, ValidationError
from .model import PinIdentity
from .repository import AuthRepository

logger = logging.getLogger(__name__)


class PinAuthService:
    """Use case: kiosk PIN authentication.

    PINs are only unique within a company, so the identity returned by the
    backend is always cross-checked against the employee picked in the UI.
    """

    def __init__(self, auth: AuthRepository):
        self._auth = auth

    def verify_pin(self, *, company_id: str, pin: str, client_ip: str = "unknown") -> PinIdentity:
        company_id = require_non_empty(company_id, "company_id")
        pin = require_non_empty(pin, "pin")

        try:
            matches = self._auth.authenticate_pin(company_id, pin)
        except BackendError:
            logger.warning("[AUDIT] Failed PIN attempt: company=%s, ip=%s, error=db_error", company_id, client_ip)
            raise AuthenticationError("Authentication failed")

        if not matches:
            logger.warning("[AUDIT] Failed PIN attempt: company=%s, ip=%s, error=invalid_pin", company_id, client_ip)
            raise AuthenticationError("Invalid PIN")

        identity = matches[0]
        logger.info(
            "[AUDIT] Successful PIN auth: company=%s, profile=%s, ip=%s",
            company_id,
            identity.profile_id,
            client_ip,
        )
        return identity

    def authenticate_pin(self, *, company_id: str, employee_id: str, pin: str) -> bool:
        """True only if the PIN verifies AND resolves to `employee_id`."""

        if not company_id or not employee_id:
            return False
        try:
            identity = self.verify_pin(company_id=company_id, pin=pin)
        except (AuthenticationError, ValidationError) as e:
            logger.info("PIN authentication rejected for %s: %s", employee_id, e)
            return False
        return identity.profile_id == employee_id
