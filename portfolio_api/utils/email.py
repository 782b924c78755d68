import logging
import smtplib
from email.message import EmailMessage
from typing import Optional
from portfolio_api.core.config import settings
from portfolio_api.core.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


def smtp_configured() -> bool:
    return bool(settings.SMTP_HOST and settings.EMAILS_FROM_EMAIL)


def _send_email_smtp(msg: EmailMessage) -> None:
    """
    Send an email message over SMTP.
    Called from Celery workers, and by send_email_now when the caller must see the outcome.
    """
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as server:
        server.ehlo()
        server.starttls()
        server.ehlo()
        if settings.SMTP_USER and settings.SMTP_PASSWORD:
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        server.send_message(msg)


def send_email_async(to_email: str, subject: str, body: str, html: Optional[str] = None) -> None:
    """
    Queue email for asynchronous sending via Celery.

    Failures to reach the broker are logged and swallowed; the request that
    triggered the email has already succeeded.
    """
    try:
        from portfolio_api.tasks.email_tasks import send_email_task

        result = send_email_task.delay(to_email, subject, body, html)

        logger.info(
            "Email queued for sending",
            extra={
                "to": to_email,
                "subject": subject,
                "task_id": result.id
            }
        )

    except Exception as exc:
        logger.exception(
            "Failed to queue email task",
            extra={
                "to": to_email,
                "subject": subject,
                "error": str(exc)
            }
        )


def send_contact_notification(message) -> None:
    """Notify the site owner about a new contact-form message (non-blocking via Celery)."""
    if not settings.ADMIN_EMAIL or not smtp_configured():
        logger.warning(
            "Skipping contact notification: email not configured",
            extra={"message_id": getattr(message, "id", None)}
        )
        return

    from portfolio_api.utils.email_templates import contact_notification_template

    subject = f"Portfolio Message: {message.subject or 'No Subject'}"
    body = f"New message from {message.name} <{message.email}>:\n\n{message.message}"
    send_email_async(settings.ADMIN_EMAIL, subject, body, contact_notification_template(message))


def send_email_now(to_email: str, subject: str, body: str, html: Optional[str] = None) -> None:
    """
    Send an email over SMTP inside the request and report failures.

    Used where the caller needs to know the email went out, such as an
    admin replying to a contact message.
    """
    if not smtp_configured():
        raise UpstreamFailure("Email service not configured")

    from portfolio_api.tasks.email_tasks import build_email

    msg = build_email(to=to_email, subject=subject, text=body, html=html)
    try:
        _send_email_smtp(msg)
    except (smtplib.SMTPException, OSError) as exc:
        logger.error(
            "Failed to send email",
            extra={"to": to_email, "subject": subject, "error": str(exc)}
        )
        raise UpstreamFailure(f"Failed to send email: {exc}") from exc

    logger.info("Email sent", extra={"to": to_email, "subject": subject})
