from celery import Task
from celery.utils.log import get_task_logger
from email.message import EmailMessage
from typing import Optional

from portfolio_api.core.celery_app import celery_app
from portfolio_api.core.config import settings
from portfolio_api.utils.email import _send_email_smtp

logger = get_task_logger(__name__)


class EmailTask(Task):
    """
    Base email task with retries and backoff.
    Prevents email loss on temporary SMTP failures.
    """
    autoretry_for = (Exception,)
    retry_kwargs = {"max_retries": 3}
    retry_backoff = True
    retry_backoff_max = 600  # 10 minutes
    retry_jitter = True
    acks_late = True  # retry if worker crashes


def build_email(
    *,
    to: str,
    subject: str,
    text: str,
    html: Optional[str] = None,
    from_email: Optional[str] = None,
) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = from_email or f"{settings.EMAILS_FROM_NAME} <{settings.EMAILS_FROM_EMAIL}>"
    msg["To"] = to
    msg.set_content(text)

    if html:
        msg.add_alternative(html, subtype="html")

    return msg


@celery_app.task(base=EmailTask, bind=True)
def send_email_task(self, to_email: str, subject: str, body: str, html: Optional[str] = None):
    try:
        msg = build_email(to=to_email, subject=subject, text=body, html=html)
        _send_email_smtp(msg)
        logger.info("email_sent to=%s subject=%s", to_email, subject)
    except Exception as exc:
        logger.exception("email_send_error to=%s", to_email)
        raise self.retry(exc=exc)
