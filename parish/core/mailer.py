"""
Email adapter for the parish site.

The default implementation uses SMTP, reading credentials from Settings.
Form submissions (contact, prayer requests, venue enquiries) are forwarded
to the parish office through ``send_email``.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import logging
import smtplib
import ssl

from .config import get_settings

logger = logging.getLogger(__name__)


def smtp_configured() -> bool:
    settings = get_settings()
    return bool(
        settings.smtp_host
        and settings.smtp_user
        and settings.smtp_password
        and settings.smtp_from
        and settings.smtp_port
    )


def send_email(
    subject: str,
    to_email: str,
    html_body: str,
    text_body: str | None = None,
    reply_to: str | None = None,
) -> bool:
    """
    Send an e-mail with the SMTP credentials from the environment.
    Returns False without sending when SMTP is not configured.
    """
    settings = get_settings()
    if not smtp_configured():
        logger.warning("SMTP not configured; skipping e-mail %r to %s", subject, to_email)
        return False
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.smtp_from
    msg["To"] = to_email
    if reply_to:
        msg["Reply-To"] = reply_to
    plain = text_body or html_body
    msg.attach(MIMEText(plain, "plain", "utf-8"))
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    port = settings.smtp_port or 465
    try:
        if port == 465:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(settings.smtp_host, port, context=context) as server:
                server.login(settings.smtp_user, settings.smtp_password)
                server.sendmail(settings.smtp_from, [to_email], msg.as_string())
        else:
            with smtplib.SMTP(settings.smtp_host, port) as server:
                server.ehlo()
                server.starttls(context=ssl.create_default_context())
                server.login(settings.smtp_user, settings.smtp_password)
                server.sendmail(settings.smtp_from, [to_email], msg.as_string())
        return True
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("Failed to send e-mail to %s: %s", to_email, exc)
        return False
