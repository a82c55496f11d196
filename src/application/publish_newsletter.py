"""
Publish Newsletter use case.

Sends one newsletter issue to every confirmed subscriber.
Authentication happens before this use case runs.
"""

import logging

from src.application.email_service import EmailGateway
from src.application.exceptions import UnexpectedError
from src.domain.exceptions import InvalidSubscriberEmailError
from src.domain.subscriber import SubscriberEmail
from src.domain.subscriber_repository import SubscriberRepository

logger = logging.getLogger(__name__)


class PublishNewsletterUseCase:
    """
    Use case for broadcasting a newsletter issue.

    Decision: Two failure policies on purpose.
    - A stored email that no longer parses is skipped with a warning:
      one corrupted row must not block every other recipient.
    - A delivery failure aborts the whole broadcast: the email
      infrastructure is down and the operator has to know now.
    No record is kept of who already received the issue.
    """

    def __init__(self, subscriber_repository: SubscriberRepository, email_gateway: EmailGateway):
        """
        Initialize the use case.

        Args:
            subscriber_repository: Repository for subscriber persistence
            email_gateway: Gateway used to deliver the issue
        """
        self.subscriber_repository = subscriber_repository
        self.email_gateway = email_gateway

    async def execute(self, title: str, html_content: str, text_content: str) -> int:
        """
        Execute the broadcast.

        Args:
            title: Issue title, used as the email subject
            html_content: HTML body
            text_content: Plain text body

        Returns:
            Number of emails sent

        Raises:
            UnexpectedError: If confirmed subscribers cannot be fetched or
                a delivery fails
        """
        try:
            stored_emails = await self.subscriber_repository.list_confirmed_emails()
        except Exception as e:
            raise UnexpectedError("Failed to fetch confirmed subscribers") from e

        sent = 0
        for stored_email in stored_emails:
            try:
                recipient = SubscriberEmail.parse(stored_email)
            except InvalidSubscriberEmailError as e:
                logger.warning(f"Skipping a confirmed subscriber. Their stored contact details are invalid: {e}")
                continue

            try:
                await self.email_gateway.send_email(
                    recipient=recipient.value,
                    subject=title,
                    html_content=html_content,
                    text_content=text_content,
                )
            except Exception as e:
                raise UnexpectedError(f"Failed to send newsletter issue to {recipient}") from e

            sent += 1

        logger.info(f"Newsletter issue '{title}' sent to {sent} subscribers")
        return sent
