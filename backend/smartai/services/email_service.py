"""
SmartAI Backend - Email Transport Check
=======================================

What:  Verifies that the configured SMTP server accepts a connection (and
       the credentials, when given). Nothing is ever sent from here.
Who:   GET /api/debug/test-nodemailer, used after deploys to confirm the
       mail settings of the environment.
How:   smtplib is blocking, so the check runs in a worker thread.

Connection modes:
    SMTP_SECURE=true   → implicit TLS (SMTPS, usually port 465)
    SMTP_SECURE=false  → plain connect, upgraded with STARTTLS when offered
"""

import asyncio
import logging
import smtplib
import ssl
from typing import Optional

from smartai.config import Settings
from smartai.exceptions import EmailServiceError

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        secure: bool = False,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.secure = secure
        self.timeout = timeout

    def _open(self) -> smtplib.SMTP:
        if self.secure:
            return smtplib.SMTP_SSL(
                self.host, self.port, timeout=self.timeout, context=ssl.create_default_context()
            )
        return smtplib.SMTP(self.host, self.port, timeout=self.timeout)

    def _verify_blocking(self) -> bool:
        with self._open() as smtp:
            smtp.ehlo()
            if not self.secure and smtp.has_extn("starttls"):
                smtp.starttls(context=ssl.create_default_context())
                smtp.ehlo()
            if self.username:
                smtp.login(self.username, self.password or "")
            smtp.noop()
        return True

    async def verify_connection(self) -> bool:
        """
        Returns True when the server accepted the connection and login.

        Raises:
            EmailServiceError: connect, TLS or authentication failed
        """
        try:
            ok = await asyncio.to_thread(self._verify_blocking)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP verification against %s:%d failed: %s", self.host, self.port, e)
            raise EmailServiceError(
                message=f"SMTP verification failed: {e}",
                context={"host": self.host, "port": self.port, "error_type": type(e).__name__},
            )
        logger.info("SMTP connection to %s:%d verified", self.host, self.port)
        return ok


def build_email_service(settings: Settings) -> Optional[EmailService]:
    """EmailService from settings, or None when SMTP_HOST is not set."""
    if not settings.smtp_host:
        logger.warning("Email service not configured (SMTP_HOST is not set)")
        return None
    logger.info("Email service configured for %s:%d", settings.smtp_host, settings.smtp_port)
    return EmailService(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=settings.smtp_password.get_secret_value() or None,
        secure=settings.smtp_secure,
        timeout=settings.smtp_timeout,
    )
