"""
Outbound mail.

Two backends: ``console`` logs the message and reports success (local and
test runs), ``smtp`` delivers it. ``send`` never raises; callers get a bool.
"""

import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from ableconnect.core.config import settings

logger = logging.getLogger("email")


class Mailer:
    """Best-effort mail delivery."""

    def __init__(
        self,
        backend: str = "console",
        host: str = "",
        port: int = 587,
        user: str = "",
        password: str = "",
        from_name: str = "AbleConnect Job Portal",
        timeout: float = 10.0,
    ):
        self.backend = backend
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.from_name = from_name
        self.timeout = timeout

    @property
    def sender(self) -> str:
        address = self.user or "no-reply@ableconnect.local"
        return f'"{self.from_name}" <{address}>'

    def build_message(
        self, to: str, subject: str, html: Optional[str] = None, text: Optional[str] = None
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        if html:
            message.set_content(text or "This message requires an HTML-capable mail client.")
            message.add_alternative(html, subtype="html")
        else:
            message.set_content(text or "")
        return message

    def send(
        self, to: str, subject: str, html: Optional[str] = None, text: Optional[str] = None
    ) -> bool:
        """Send one message. Returns False instead of raising on failure."""
        logger.info(f"Sending email to {to}: {subject}")

        if self.backend == "console":
            logger.info(f"[EMAIL SIMULATION] To: {to}\n{html or text}")
            return True

        try:
            message = self.build_message(to, subject, html=html, text=text)
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.starttls()
                if self.user:
                    smtp.login(self.user, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending email to {to}: {str(e)}")
            return False

        logger.info(f"Email sent successfully to {to}")
        return True


def build_mailer() -> Mailer:
    return Mailer(
        backend=settings.EMAIL_BACKEND,
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        user=settings.EMAIL_USER,
        password=settings.EMAIL_PASS,
        from_name=settings.EMAIL_FROM_NAME,
    )
