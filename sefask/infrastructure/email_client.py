"""Resend Email Client — EmailSender implementation over the Resend REST API.

Invariants:
    - Every failure (transport, timeout, non-2xx) raised as EmailDeliveryError
    - API key sent only in the Authorization header, never logged
    - No retries here: resend is a user-initiated action

Design Decisions:
    - httpx.AsyncClient per send: no long-lived connection state to manage in lifespan
    - Message body rendered by core/format_email.py; this module only transports it
"""

import logging
from datetime import timedelta

import httpx

from sefask.core.domain_types import VERIFICATION_CODE_TTL
from sefask.core.errors import EmailDeliveryError
from sefask.core.format_email import render_verification_email

logger = logging.getLogger(__name__)


class ResendEmailSender:
    """Sends verification emails through Resend."""

    def __init__(
        self,
        api_key: str,
        from_email: str,
        base_url: str = "https://api.resend.com",
        timeout_seconds: float = 10.0,
        code_ttl: timedelta = VERIFICATION_CODE_TTL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.code_ttl = code_ttl
        self._transport = transport

    async def send_verification_code(
        self, to_email: str, first_name: str, code: str,
    ) -> None:
        email = render_verification_email(first_name, code, self.code_ttl)
        payload = {
            "from": self.from_email,
            "to": [to_email],
            "subject": email.subject,
            "html": email.html,
            "text": email.text,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    "/emails",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.TimeoutException:
            raise EmailDeliveryError("provider timed out")
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"transport error ({type(e).__name__})")

        if response.is_error:
            raise EmailDeliveryError(f"provider returned {response.status_code}")

        try:
            message_id = response.json().get("id")
        except ValueError:
            message_id = None
        logger.info(f"Verification email accepted by provider (id={message_id})")
