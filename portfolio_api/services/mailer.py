from __future__ import annotations

import html
import logging
import smtplib
from email.message import EmailMessage
from typing import List, Tuple

from portfolio_api.core.settings import Settings
from portfolio_api.entities import ContactRequest

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "not specified"


def _qualification(contact: ContactRequest) -> List[Tuple[str, str]]:
    return [
        ("Budget", contact.budget_range or NOT_SPECIFIED),
        ("Timeline", contact.timeline or NOT_SPECIFIED),
        ("Project type", contact.project_type or NOT_SPECIFIED),
        ("Source", contact.source or NOT_SPECIFIED),
    ]


def build_contact_email(contact: ContactRequest, *, sender: str, recipient: str) -> EmailMessage:
    fields = _qualification(contact)

    msg = EmailMessage()
    msg["Subject"] = f"[Portfolio Contact] {contact.subject}"
    msg["From"] = sender
    msg["To"] = recipient
    msg["Reply-To"] = contact.email

    text_lines = [f"Name: {contact.name}", f"Email: {contact.email}", ""]
    text_lines += [f"{label}: {value}" for label, value in fields]
    text_lines += ["", "Message:", contact.message]
    msg.set_content("\n".join(text_lines))

    esc = html.escape
    html_lines = [
        "<h2>New Contact Form Submission</h2>",
        f"<p><strong>Name:</strong> {esc(contact.name)}</p>",
        f"<p><strong>Email:</strong> {esc(contact.email)}</p>",
        f"<p><strong>Subject:</strong> {esc(contact.subject)}</p>",
    ]
    html_lines += [f"<p><strong>{label}:</strong> {esc(value)}</p>" for label, value in fields]
    html_lines += ["<h3>Message</h3>", f"<p>{esc(contact.message).replace(chr(10), '<br>')}</p>"]
    msg.add_alternative("\n".join(html_lines), subtype="html")
    return msg


class ContactNotifier:
    """Best-effort SMTP notification for new contact requests."""

    def __init__(self, settings: Settings, *, timeout_s: float = 10.0) -> None:
        self._settings = settings
        self._timeout_s = timeout_s

    @property
    def configured(self) -> bool:
        s = self._settings
        return bool(s.smtp_host and s.smtp_user and s.smtp_pass)

    def notify_contact_request(self, contact: ContactRequest) -> bool:
        if not self.configured:
            return False

        s = self._settings
        msg = build_contact_email(contact, sender=s.smtp_user, recipient=s.contact_email)
        try:
            if s.smtp_secure:
                with smtplib.SMTP_SSL(s.smtp_host, s.smtp_port, timeout=self._timeout_s) as smtp:
                    smtp.login(s.smtp_user, s.smtp_pass)
                    smtp.send_message(msg)
            else:
                with smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=self._timeout_s) as smtp:
                    smtp.starttls()
                    smtp.login(s.smtp_user, s.smtp_pass)
                    smtp.send_message(msg)
        except (smtplib.SMTPException, OSError):
            logger.warning("Failed to send contact notification email for request %s", contact.id, exc_info=True)
            return False

        logger.info("Sent contact notification for request %s", contact.id)
        return True
