"""
SMTP Email Gateway implementation.

Delivers emails via SMTP. For local development, we use Mailhog
(SMTP testing server with web UI).

Decision: This adapter can be swapped with any other email service
(SendGrid HTTP API, AWS SES, etc.) without changing application logic,
as long as it provides send_email().
"""

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

logger = logging.getLogger(__name__)


class SmtpEmailGateway:
    """
    Email gateway that sends emails via SMTP.

    One SMTP connection is opened per email; the gateway keeps no
    connection or per-request state and is shared by all requests.

    For local development, we use Mailhog:
    - SMTP server on port 1025
    - Web UI at http://localhost:8025
    """

    def __init__(
        self,
        smtp_host: str,
        smtp_port: int,
        from_email: str,
        smtp_username: str | None = None,
        smtp_password: str | None = None,
        use_tls: bool = False,
        timeout_seconds: float = 10.0,
    ):
        """
        Initialize the SMTP email gateway.

        Args:
            smtp_host: SMTP server hostname
            smtp_port: SMTP server port
            from_email: Sender email address
            smtp_username: SMTP authentication username (optional for Mailhog)
            smtp_password: SMTP authentication password (optional for Mailhog)
            use_tls: Connect with implicit TLS
            timeout_seconds: Connection and command timeout
        """
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.from_email = from_email
        self.smtp_username = smtp_username
        self.smtp_password = smtp_password
        self.use_tls = use_tls
        self.timeout_seconds = timeout_seconds

        logger.info(
            f"SMTP Email Gateway initialized: {smtp_host}:{smtp_port} "
            f"(auth: {'yes' if smtp_username else 'no'}, tls: {'yes' if use_tls else 'no'})"
        )

    def _build_message(
        self, recipient: str, subject: str, html_content: str, text_content: str
    ) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = self.from_email
        message["To"] = recipient

        # Plain text first: clients display the last part they support
        message.attach(MIMEText(text_content, "plain", _charset="utf-8"))
        message.attach(MIMEText(html_content, "html", _charset="utf-8"))
        return message

    async def send_email(
        self,
        recipient: str,
        subject: str,
        html_content: str,
        text_content: str,
    ) -> None:
        """
        Send one email via SMTP.

        A single delivery attempt: no retry on failure.

        Args:
            recipient: Recipient email
            subject: Email subject
            html_content: HTML body
            text_content: Plain text body

        Raises:
            EmailGatewayError: If the email could not be delivered
        """
        message = self._build_message(recipient, subject, html_content, text_content)

        try:
            logger.info(f"Sending '{subject}' to {recipient} via SMTP")

            async with aiosmtplib.SMTP(
                hostname=self.smtp_host,
                port=self.smtp_port,
                use_tls=self.use_tls,
                timeout=self.timeout_seconds,
            ) as smtp:
                # Authenticate if credentials provided (not needed for Mailhog)
                if self.smtp_username and self.smtp_password:
                    await smtp.login(self.smtp_username, self.smtp_password)

                await smtp.send_message(message)

            logger.info(f"Email sent successfully to {recipient}")

        except Exception as e:
            logger.error(f"Failed to send email to {recipient}: {e}")
            raise EmailGatewayError(f"Failed to send email to {recipient}: {e}") from e


class EmailGatewayError(Exception):
    """Raised when email sending fails."""

    pass
