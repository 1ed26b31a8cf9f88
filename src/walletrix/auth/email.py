"""OTP email delivery.

Backends:
- dryrun (default): log the OTP instead of sending it
- http: POST to a transactional email API
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from walletrix.config import Settings, get_settings
from walletrix.errors import EmailDeliveryError

logger = logging.getLogger(__name__)

OTP_SUBJECT = "Your verification code"


def render_otp_message(otp: str, expiry_minutes: int) -> str:
    return (
        f"Your verification code is {otp}.\n"
        f"It expires in {expiry_minutes} minutes. "
        "If you did not request this code, you can ignore this email."
    )


class EmailSender(ABC):
    """Abstract base class for OTP email backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name."""
        pass

    @abstractmethod
    async def send_otp(self, email: str, otp: str, expiry_minutes: int) -> None:
        """Send an OTP to an address.

        Raises:
            EmailDeliveryError: If the message could not be sent
        """
        pass

    async def aclose(self) -> None:
        """Release backend resources."""
        return None


class DryRunEmailSender(EmailSender):
    """Logs OTP emails instead of sending them. For development only."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "dryrun"

    async def send_otp(self, email: str, otp: str, expiry_minutes: int) -> None:
        self.sent.append((email, otp))
        logger.info(f"[DRY RUN] OTP for {email}: {otp} (expires in {expiry_minutes} min)")


class HttpEmailSender(EmailSender):
    """Sends OTP emails through an HTTP email API."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        sender: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.sender = sender
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}"},
            transport=transport,
        )

    @property
    def name(self) -> str:
        return "http"

    async def send_otp(self, email: str, otp: str, expiry_minutes: int) -> None:
        payload = {
            "from": self.sender,
            "to": email,
            "subject": OTP_SUBJECT,
            "text": render_otp_message(otp, expiry_minutes),
        }
        try:
            response = await self._client.post(self.api_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to send OTP email to {email}: {e}")
            raise EmailDeliveryError("Failed to send OTP email") from e

        logger.info(f"OTP email sent to {email}")

    async def aclose(self) -> None:
        await self._client.aclose()


def get_email_sender(settings: Optional[Settings] = None) -> EmailSender:
    """Build the configured email backend.

    Falls back to dry-run when the http backend has no API URL.
    """
    settings = settings or get_settings()
    backend = settings.email_backend.lower()

    if backend == "http":
        if not settings.email_api_url:
            logger.warning("EMAIL_API_URL not configured - using dry-run email sender")
            return DryRunEmailSender()
        return HttpEmailSender(
            api_url=settings.email_api_url,
            api_key=settings.email_api_key,
            sender=settings.email_sender,
            timeout=settings.rpc_timeout,
        )

    return DryRunEmailSender()
