"""
SMTP Mailer

Delivers transactional mail through an SMTP relay. smtplib blocks, so each
send runs in a worker thread bounded by a timeout.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Optional

from authflow.app.services.mailer import IMailer
from authflow.domain.exceptions import MailFailure

logger = logging.getLogger(__name__)


class SmtpMailer(IMailer):
    """SMTP implementation of IMailer"""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()
        message.set_content("This message requires an HTML capable mail client.")
        message.add_alternative(html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password or "")
            server.send_message(message)

    async def send(self, to: str, subject: str, html: str) -> str:
        message = self._build_message(to, subject, html)
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._deliver, message), timeout=self.timeout
            )
        except asyncio.TimeoutError as exc:
            raise MailFailure(f"SMTP send to {to} timed out after {self.timeout}s") from exc
        except (smtplib.SMTPException, OSError) as exc:
            raise MailFailure(f"SMTP send to {to} failed: {exc}") from exc

        logger.debug(f"SMTP accepted message {message['Message-ID']} for {to}")
        return message["Message-ID"]
