"""
Outbound mail channel for contact form submissions.

Provides an SMTP implementation (STARTTLS on the submission port) and an
in-memory double for tests/local runs.
"""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass, field
from email.errors import MessageError
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Protocol

from portfolio_relay.schemas import ContactSubmission

logger = logging.getLogger(__name__)

CONTACT_SUBJECT = "Contact Form Submission - Portfolio"

# Errors raised while talking to the server or serialising the message.
DELIVERY_ERRORS = (smtplib.SMTPException, OSError, MessageError, UnicodeError)


class MailDeliveryError(Exception):
    pass


def render_contact_html(submission: ContactSubmission) -> str:
    # Fields are embedded as-is, matching what the contact form has always sent.
    return (
        f"<p><strong>Name:</strong> {submission.name}</p>\n"
        f"<p><strong>Email:</strong> {submission.email}</p>\n"
        f"<p><strong>Phone:</strong> {submission.phone}</p>\n"
        f"<p><strong>Message:</strong><br>{submission.message}</p>\n"
    )


def _display_name(name: str) -> str:
    # Line breaks would start a new header.
    return " ".join(name.splitlines()).strip()


def build_contact_message(submission: ContactSubmission, account: str) -> MIMEText:
    """
    Build the email for a submission, addressed to the relay's own account.

    Args:
        submission: The contact form payload.
        account: The configured mail account, used as sender and recipient.

    Returns:
        MIMEText: An HTML message ready to hand to an SMTP connection.
    """
    msg = MIMEText(render_contact_html(submission), "html", "utf-8")
    msg["Subject"] = CONTACT_SUBJECT
    msg["From"] = formataddr((_display_name(submission.name), account))
    msg["To"] = account
    return msg


class Mailer(Protocol):
    """Operations the contact route needs from the mail channel."""

    def verify(self) -> bool:
        ...

    def send_contact(self, submission: ContactSubmission) -> None:
        ...


@dataclass
class SmtpMailer:
    """SMTP mail channel authenticated with the configured account."""

    host: str
    port: int
    user: str
    password: str

    def connect(self) -> smtplib.SMTP:
        server = smtplib.SMTP(self.host, self.port)
        try:
            server.starttls()
            server.login(self.user, self.password)
        except Exception:
            server.close()
            raise
        return server

    def verify(self) -> bool:
        """
        Check connectivity and credentials once. Failures are logged, not raised.
        """
        try:
            server = self.connect()
            server.quit()
        except DELIVERY_ERRORS as exc:
            logger.error("Mailer error: %s", exc)
            return False
        logger.info("Mailer ready (%s:%s)", self.host, self.port)
        return True

    def send_contact(self, submission: ContactSubmission) -> None:
        try:
            msg = build_contact_message(submission, self.user)
            server = self.connect()
            try:
                server.send_message(msg)
            finally:
                server.quit()
        except DELIVERY_ERRORS as exc:
            raise MailDeliveryError(str(exc)) from exc


@dataclass
class InMemoryMailer:
    """Test double that records messages instead of sending them."""

    account: str = "relay@example.test"
    fail: bool = False
    sent: list[MIMEText] = field(default_factory=list)

    def verify(self) -> bool:
        return not self.fail

    def send_contact(self, submission: ContactSubmission) -> None:
        if self.fail:
            raise MailDeliveryError("mail channel unavailable")
        self.sent.append(build_contact_message(submission, self.account))
