"""
Register Subscriber use case.

Orchestrates a new subscription:
1. Validating the submitted name and email
2. Persisting the subscriber and its confirmation token atomically
3. Emailing the confirmation link

This use case coordinates between domain entities and infrastructure services.
"""

import logging
from uuid import UUID

from src.application.email_service import EmailGateway, EmailRenderer
from src.application.exceptions import UnexpectedError
from src.domain.subscriber import Subscriber
from src.domain.subscriber_repository import SubscriberRepository
from src.domain.subscription_token import SubscriptionToken

logger = logging.getLogger(__name__)


class RegisterSubscriberUseCase:
    """
    Use case for subscribing to the newsletter.

    Decision: We use dependency injection for all external dependencies
    (repository, email gateway, renderer) to maintain testability.
    """

    CONFIRMATION_PATH = "/subscriptions/confirm"

    def __init__(
        self,
        subscriber_repository: SubscriberRepository,
        email_gateway: EmailGateway,
        email_renderer: EmailRenderer,
        base_url: str,
    ):
        """
        Initialize the use case.

        Args:
            subscriber_repository: Repository for subscriber persistence
            email_gateway: Gateway used to deliver the confirmation email
            email_renderer: Renders the confirmation email bodies
            base_url: Public base URL of the application, used in links
        """
        self.subscriber_repository = subscriber_repository
        self.email_gateway = email_gateway
        self.email_renderer = email_renderer
        self.base_url = base_url.rstrip("/")

    def confirmation_link(self, token: SubscriptionToken) -> str:
        """Build the link a subscriber follows to confirm their address."""
        return f"{self.base_url}{self.CONFIRMATION_PATH}?subscription_token={token}"

    async def execute(self, name: str, email: str) -> UUID:
        """
        Execute the subscription use case.

        Process:
        1. Validate name and email (no I/O before this succeeds)
        2. Store subscriber + token in one transaction
        3. Send the confirmation email, only after the commit

        Args:
            name: Submitted name
            email: Submitted email address

        Returns:
            The id of the stored subscriber

        Raises:
            InvalidSubscriberNameError: If the name is invalid
            InvalidSubscriberEmailError: If the email is invalid
            UnexpectedError: If storing the subscription or sending the email fails

        Decision: A failed send is reported as an error but does not undo the
        registration. The subscriber stays pending and can subscribe again to
        get a fresh link.
        """
        subscriber = Subscriber.create(name=name, email=email)
        token = SubscriptionToken.generate()

        try:
            subscriber_id = await self.subscriber_repository.add_pending(subscriber, token)
        except Exception as e:
            raise UnexpectedError("Failed to store the new subscriber") from e

        if subscriber_id != subscriber.id:
            logger.info(f"Issued a new confirmation token for existing subscriber {subscriber_id}")

        rendered = self.email_renderer.render_confirmation_email(
            subscriber_name=subscriber.name.value,
            confirmation_link=self.confirmation_link(token),
        )

        try:
            await self.email_gateway.send_email(
                recipient=subscriber.email.value,
                subject=rendered.subject,
                html_content=rendered.html_content,
                text_content=rendered.text_content,
            )
        except Exception as e:
            raise UnexpectedError("Failed to send a confirmation email") from e

        logger.info(f"Subscriber {subscriber_id} registered, confirmation email sent")
        return subscriber_id
