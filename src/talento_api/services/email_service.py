"""Email service for sending notifications over SMTP."""

import asyncio
import logging
import re
import smtplib
import ssl
from concurrent.futures import ThreadPoolExecutor
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid
from functools import partial

from jinja2 import Environment, PackageLoader, select_autoescape

from talento_api.config import Settings, get_settings
from talento_api.utils.secure_logging import log_error, log_warning

logger = logging.getLogger(__name__)

# Thread pool for non-blocking SMTP operations
_smtp_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="smtp")

_email_templates = Environment(
    loader=PackageLoader("talento_api", "templates/email"),
    autoescape=select_autoescape(["html"]),
)


class EmailService:
    """Send transactional email. Failures are logged and reported as False."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @property
    def is_configured(self) -> bool:
        """Whether SMTP credentials are present."""
        return self.settings.smtp_configured

    def _get_smtp_connection(self) -> smtplib.SMTP:
        """Open an authenticated STARTTLS connection."""
        context = ssl.create_default_context()
        smtp = smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=30)
        smtp.ehlo()
        smtp.starttls(context=context)
        # EHLO again after STARTTLS as required by RFC 3207
        smtp.ehlo()
        smtp.login(self.settings.smtp_username, self.settings.smtp_password)
        return smtp

    def _create_message(self, to_email: str, subject: str, html_body: str) -> MIMEMultipart:
        """Create a multipart message with a plain-text fallback."""
        from_email = self.settings.smtp_from_email or self.settings.smtp_username
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self.settings.smtp_from_name} <{from_email}>"
        msg["To"] = to_email
        msg["Message-ID"] = make_msgid(domain=from_email.split("@")[-1] or None)
        msg["Date"] = formatdate(localtime=True)

        plain = re.sub(r"<style.*?</style>", "", html_body, flags=re.DOTALL)
        plain = re.sub(r"<[^>]+>", "", plain)
        plain = re.sub(r"\s+", " ", plain).strip()
        msg.attach(MIMEText(plain, "plain", "utf-8"))
        msg.attach(MIMEText(html_body, "html", "utf-8"))
        return msg

    def _send_email_sync(self, to_email: str, msg: MIMEMultipart) -> None:
        """Synchronous send (runs in thread pool)."""
        smtp = self._get_smtp_connection()
        try:
            from_email = self.settings.smtp_from_email or self.settings.smtp_username
            smtp.sendmail(from_email, to_email, msg.as_string())
        finally:
            try:
                smtp.quit()
            except smtplib.SMTPException:
                pass

    async def send_email(self, to_email: str, subject: str, html_body: str) -> bool:
        """Send an HTML email via SMTP without blocking the event loop.

        Args:
            to_email: Recipient email address
            subject: Email subject
            html_body: HTML email body

        Returns:
            True if sent successfully, False otherwise
        """
        if not self.is_configured:
            log_warning(logger, "SMTP not configured, email not sent")
            return False

        try:
            msg = self._create_message(to_email, subject, html_body)
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                _smtp_executor,
                partial(self._send_email_sync, to_email, msg),
            )
        except (smtplib.SMTPException, OSError) as e:
            log_error(logger, "SMTP error sending email", e)
            return False

        logger.info("Email sent successfully")
        return True

    async def send_welcome_email(self, to_email: str, full_name: str) -> bool:
        """Send the registration welcome email.

        Args:
            to_email: New employee's email
            full_name: New employee's full name

        Returns:
            True if sent successfully, False otherwise
        """
        html_body = _email_templates.get_template("welcome.html").render(
            full_name=full_name,
            company_name=self.settings.company_name,
        )
        return await self.send_email(
            to_email,
            f"¡Bienvenido a {self.settings.company_name}!",
            html_body,
        )
