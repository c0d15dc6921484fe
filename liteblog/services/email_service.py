"""Outgoing email.

Only the ``log`` provider exists: messages are written to the application
log instead of being delivered, which is what local development and tests
need. The verification link travels in the record's ``extra`` fields so the
secret filter does not mask it in the message text.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from ..core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    text: str
    sender: str


def verification_url(token: str) -> str:
    return f"{settings.frontend_url.rstrip('/')}/verify-email?token={token}"


class EmailService:
    def __init__(self, db: Optional[Session] = None):
        self.db = db

    def _site_name(self) -> str:
        if self.db is None:
            return "Lite Blog"
        from .setting_service import get_site_settings
        return get_site_settings(self.db).site_name

    def build_verification_email(self, email: str, token: str) -> EmailMessage:
        site_name = self._site_name()
        verify_url = verification_url(token)
        text = (
            f"Welcome to {site_name}!\n\n"
            "Thanks for signing up. Open the link below to verify your email address:\n\n"
            f"{verify_url}\n\n"
            f"The link expires in {settings.verification_token_minutes} minutes. "
            "If you did not create an account, ignore this email.\n"
        )
        return EmailMessage(
            to=email,
            subject=f"Verify your email - {site_name}",
            text=text,
            sender=settings.email_from,
        )

    def send(self, message: EmailMessage, **extra) -> None:
        logger.info(
            "Email to %s: %s", message.to, message.subject,
            extra={"email_to": message.to, "email_from": message.sender, **extra},
        )

    def send_verification_email(self, email: str, token: str) -> EmailMessage:
        message = self.build_verification_email(email, token)
        self.send(message, verify_url=verification_url(token))
        return message
