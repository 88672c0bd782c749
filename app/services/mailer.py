"""Transactional email.

``init_mailer`` attaches a mailer to the app the same way other external
clients are attached; handlers reach it through ``current_app.mailer``.
"""
import logging
from dataclasses import dataclass
from html import escape

import requests
from flask import current_app

from app.exceptions import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html: str


class ResendMailer:
    def __init__(self, api_key, sender, api_url, timeout=10):
        self.api_key = api_key
        self.sender = sender
        self.api_url = api_url
        self.timeout = timeout

    def send(self, message: EmailMessage) -> str:
        try:
            resp = requests.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={
                    "from": self.sender,
                    "to": [message.to],
                    "subject": message.subject,
                    "html": message.html,
                },
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise UpstreamError(f"Email delivery failed: {e}") from e
        return (resp.json() or {}).get("id", "")


class LoggingMailer:
    """Used when no provider key is configured."""

    def send(self, message: EmailMessage) -> str:
        logger.info("[Email disabled] to=%s subject=%s", message.to, message.subject)
        return ""


def init_mailer(app):
    api_key = app.config.get("RESEND_API_KEY")
    if api_key:
        app.mailer = ResendMailer(
            api_key,
            app.config["MAIL_FROM"],
            app.config["RESEND_API_URL"],
            timeout=app.config.get("MAIL_TIMEOUT_SECONDS", 10),
        )
    else:
        logging.warning("RESEND_API_KEY missing; emails will only be logged")
        app.mailer = LoggingMailer()


def send_email(message: EmailMessage) -> str:
    return current_app.mailer.send(message)


# --- Templates ---

def admin_new_request_email(access_request) -> EmailMessage:
    cfg = current_app.config
    created = access_request.created_at.strftime("%Y-%m-%d %H:%M UTC") if access_request.created_at else ""
    return EmailMessage(
        to=cfg["ADMIN_EMAIL"],
        subject="New Access Request - Order Desk",
        html=(
            "<h2>New Access Request</h2>"
            f"<p><strong>Name:</strong> {escape(access_request.full_name)}</p>"
            f"<p><strong>Email:</strong> {escape(access_request.email)}</p>"
            f"<p><strong>Reason:</strong> {escape(access_request.reason or 'Not provided')}</p>"
            f"<p><strong>Request Date:</strong> {created}</p>"
            "<p>Please review and approve/reject this request in the admin panel.</p>"
        ),
    )


def approval_email(access_request, temporary_password: str) -> EmailMessage:
    login_url = f"{current_app.config['APP_URL'].rstrip('/')}/login"
    return EmailMessage(
        to=access_request.email,
        subject="Welcome to Order Desk - Account Approved",
        html=(
            "<h2>Welcome to Order Desk!</h2>"
            f"<p>Hello {escape(access_request.full_name)},</p>"
            "<p>Your access request has been approved.</p>"
            "<p><strong>Your login credentials:</strong></p>"
            f"<p>Email: {escape(access_request.email)}</p>"
            f"<p>Temporary Password: {escape(temporary_password)}</p>"
            "<p><strong>Important:</strong> Please change your password after your first login.</p>"
            f'<p>You can log in at: <a href="{escape(login_url)}">Login Page</a></p>'
        ),
    )


def rejection_email(access_request, admin_notes: str = None) -> EmailMessage:
    notes = f"<p><strong>Admin Notes:</strong> {escape(admin_notes)}</p>" if admin_notes else ""
    return EmailMessage(
        to=access_request.email,
        subject="Access Request Update - Order Desk",
        html=(
            "<h2>Access Request Update</h2>"
            f"<p>Hello {escape(access_request.full_name)},</p>"
            "<p>We regret to inform you that your access request has been declined.</p>"
            f"{notes}"
            "<p>If you believe this is an error, please contact the administrator.</p>"
        ),
    )
