"""
Email ports.

Defines the contracts for sending and rendering emails.
The infrastructure layer provides the adapters; tests provide in-memory doubles.
"""

from dataclasses import dataclass
from typing import Protocol


class EmailGateway(Protocol):
    """
    Capability to deliver one email.

    Each call is a single, independent delivery attempt. Implementations
    hold no per-request state and are shared by all requests.
    """

    async def send_email(
        self,
        recipient: str,
        subject: str,
        html_content: str,
        text_content: str,
    ) -> None:
        """
        Send an email with an HTML body and a plain text alternative.

        Args:
            recipient: Recipient email address
            subject: Email subject
            html_content: HTML body
            text_content: Plain text body

        Raises:
            Exception: If delivery fails
        """
        ...


@dataclass(frozen=True)
class RenderedEmail:
    """Subject and bodies of an email ready to be sent."""

    subject: str
    html_content: str
    text_content: str


class EmailRenderer(Protocol):
    """Builds the content of the emails the service sends on its own behalf."""

    def render_confirmation_email(self, subscriber_name: str, confirmation_link: str) -> RenderedEmail:
        """Render the email asking a new subscriber to confirm their address."""
        ...
