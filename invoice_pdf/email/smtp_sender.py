# invoice_pdf/email/smtp_sender.py
from __future__ import annotations

import os
import re
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional, Sequence, Tuple

DEFAULT_FROM_NAME = "Invoices"


@dataclass
class EmailAttachment:
    filename: str
    content_type: str  # e.g. "application/pdf"
    data: bytes


@dataclass(frozen=True)
class SmtpSettings:
    host: str
    port: int
    user: str
    password: str
    email_from: str
    reply_to: Optional[str] = None

    @classmethod
    def from_env(cls) -> "SmtpSettings":
        """
        Required env:
          SMTP_HOST, SMTP_USER, SMTP_PASSWORD, EMAIL_FROM
        Optional env:
          SMTP_PORT (587), EMAIL_REPLY_TO
        """
        return cls(
            host=os.environ["SMTP_HOST"],
            port=int(os.getenv("SMTP_PORT", "587")),
            user=os.environ["SMTP_USER"],
            password=os.environ["SMTP_PASSWORD"],
            email_from=os.environ["EMAIL_FROM"],
            reply_to=os.getenv("EMAIL_REPLY_TO") or None,
        )


def parse_email_from(value: str, default_name: str = DEFAULT_FROM_NAME) -> Tuple[str, str]:
    """
    Accepts either:
      - 'My Store <billing@mystore.com>'
      - 'billing@mystore.com'
    Returns (display_name, email_address)

    Tolerant of a missing trailing '>' in env values.
    """
    v = (value or "").strip().strip('"')

    m = re.match(r"^(.*)<([^>]+)>?$", v)
    if m:
        name = (m.group(1) or "").strip().strip('"')
        email = (m.group(2) or "").strip().rstrip(">")
        return (name or default_name, email)

    return (default_name, v)


def build_message(
    cfg: SmtpSettings,
    *,
    to_email: str,
    subject: str,
    html_body: str,
    text_body: str,
    from_name: Optional[str] = None,
    attachments: Sequence[EmailAttachment] = (),
) -> Tuple[EmailMessage, str]:
    """Returns (message, envelope_from)."""
    parsed_name, from_email = parse_email_from(cfg.email_from)

    # Reply-To should be a real mailbox (no trailing dot)
    reply_to = (cfg.reply_to or from_email).strip().rstrip(".")

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = f"{from_name or parsed_name} <{from_email}>"
    msg["To"] = to_email
    if reply_to:
        msg["Reply-To"] = reply_to

    msg.set_content(text_body or "")
    msg.add_alternative(html_body or "", subtype="html")

    for att in attachments:
        if not att.content_type or "/" not in att.content_type:
            maintype, subtype = "application", "octet-stream"
        else:
            maintype, subtype = att.content_type.split("/", 1)
        msg.add_attachment(att.data, maintype=maintype, subtype=subtype, filename=att.filename)

    return msg, from_email


def send_email_smtp(
    *,
    to_email: str,
    subject: str,
    html_body: str,
    text_body: str,
    from_name: Optional[str] = None,
    attachments: Sequence[EmailAttachment] = (),
    settings: SmtpSettings | None = None,
) -> None:
    cfg = settings or SmtpSettings.from_env()
    msg, envelope_from = build_message(
        cfg,
        to_email=to_email,
        subject=subject,
        html_body=html_body,
        text_body=text_body,
        from_name=from_name,
        attachments=attachments,
    )

    context = ssl.create_default_context()
    with smtplib.SMTP(cfg.host, cfg.port, timeout=30) as server:
        server.ehlo()
        server.starttls(context=context)
        server.ehlo()
        server.login(cfg.user, cfg.password)

        # Envelope-from must be a bare address
        server.send_message(msg, from_addr=envelope_from, to_addrs=[to_email])
