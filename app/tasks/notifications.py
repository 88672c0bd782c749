import logging
from celery import shared_task
from flask import has_app_context
from app.services.mailer import EmailMessage, send_email

logger = logging.getLogger(__name__)


def _deliver(message: EmailMessage) -> str:
    if has_app_context():
        return send_email(message)
    from app import create_app

    with create_app().app_context():
        return send_email(message)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def send_email_task(self, to: str, subject: str, html: str) -> str:
    """Deliver an email through the app mailer, retrying on failure."""
    try:
        return _deliver(EmailMessage(to=to, subject=subject, html=html))
    except Exception as exc:
        logger.error("Email to %s failed: %s", to, exc)
        raise self.retry(exc=exc)


def enqueue_email(message: EmailMessage) -> None:
    """Queue ``message``; delivery problems are logged, never raised."""
    try:
        send_email_task.delay(message.to, message.subject, message.html)
    except Exception as exc:
        logger.error("Could not queue email to %s: %s", message.to, exc)
