from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

import requests

from ..core.constants import DEFAULT_REPORT_SENDER, HTTP_TIMEOUT_SECONDS, RESEND_API_URL
from ..core.exceptions import DeliveryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes

    def to_payload(self) -> Dict[str, str]:
        return {"filename": self.filename, "content": base64.b64encode(self.content).decode("ascii")}


class Mailer(Protocol):
    def send(
        self,
        *,
        to: Sequence[str],
        subject: str,
        html: str,
        attachments: Sequence[Attachment] = (),
        idempotency_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        raise NotImplementedError


class ResendMailer(Mailer):
    """Resend REST client; one request per message to the whole recipient list."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        sender: str = DEFAULT_REPORT_SENDER,
        api_url: str = RESEND_API_URL,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._sender = sender
        self._api_url = api_url
        self._session = session or requests.Session()

    def send(
        self,
        *,
        to: Sequence[str],
        subject: str,
        html: str,
        attachments: Sequence[Attachment] = (),
        idempotency_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not self._api_key:
            raise DeliveryError("RESEND_API_KEY is not configured")

        headers = {"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"}
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key

        payload: Dict[str, Any] = {"from": self._sender, "to": list(to), "subject": subject, "html": html}
        if attachments:
            payload["attachments"] = [a.to_payload() for a in attachments]

        try:
            resp = self._session.post(self._api_url, json=payload, headers=headers, timeout=HTTP_TIMEOUT_SECONDS)
        except requests.RequestException as e:
            logger.error("Email dispatch failed: %s", e)
            raise DeliveryError(f"Email dispatch failed: {e}") from e

        if not resp.ok:
            message = _error_message(resp)
            logger.error("Email provider rejected message (%s): %s", resp.status_code, message)
            raise DeliveryError(message)

        body = resp.json() if resp.content else {}
        logger.info("Email sent to %d recipient(s): id=%s", len(to), body.get("id"))
        return body


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {resp.status_code}"


def recipient_list(emails: Sequence[str]) -> List[str]:
    """Recipients without blanks or duplicates, in their original order."""

    seen: set[str] = set()
    out = []
    for e in emails:
        e = (e or "").strip()
        if e and e.lower() not in seen:
            seen.add(e.lower())
            out.append(e)
    return out
