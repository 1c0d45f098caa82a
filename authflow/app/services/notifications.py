"""
Auth Notifications

Message builders for the auth emails and a best-effort send wrapper.
Mail is never on the request's critical path: callers schedule
send_best_effort after the response and it never raises MailFailure.
"""

import logging
from dataclasses import dataclass

from authflow.app.services.mailer import IMailer
from authflow.domain.exceptions import MailFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailContent:
    subject: str
    html: str


def reset_link(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/reset/{token}"


def reset_password_email(base_url: str, token: str) -> MailContent:
    link = reset_link(base_url, token)
    return MailContent(
        subject="Password Reset",
        html=(
            "<p>You requested a password reset</p>"
            f'<p>Click this <a href="{link}">link</a> to set a new password.</p>'
            "<p>The link expires in one hour.</p>"
        ),
    )


def welcome_email() -> MailContent:
    return MailContent(
        subject="Signup succeeded!",
        html="<h1>You successfully signed up!</h1>",
    )


async def send_best_effort(mailer: IMailer, to: str, content: MailContent) -> bool:
    """Send one message; delivery failures are logged and reported as False"""
    try:
        message_id = await mailer.send(to, content.subject, content.html)
    except MailFailure as exc:
        logger.error(f"Mail '{content.subject}' to {to} failed: {exc}")
        return False

    logger.info(f"Mail '{content.subject}' sent to {to}, id={message_id}")
    return True
