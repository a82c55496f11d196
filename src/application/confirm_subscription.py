"""
Confirm Subscription use case.

Resolves the token from a confirmation link and marks the subscriber as confirmed.
"""

import logging

from src.application.exceptions import UnexpectedError
from src.domain.exceptions import SubscriberNotFoundError, SubscriptionTokenNotFoundError
from src.domain.subscriber_repository import SubscriberRepository
from src.domain.subscription_token import SubscriptionToken

logger = logging.getLogger(__name__)


class ConfirmSubscriptionUseCase:
    """
    Use case for confirming a pending subscription.

    Decision: Tokens are never consumed. Following the same link twice
    succeeds twice; the second call rewrites the same status.
    """

    def __init__(self, subscriber_repository: SubscriberRepository):
        """
        Initialize the use case.

        Args:
            subscriber_repository: Repository for subscriber persistence
        """
        self.subscriber_repository = subscriber_repository

    async def execute(self, subscription_token: str) -> None:
        """
        Execute the confirmation use case.

        Args:
            subscription_token: Raw token from the confirmation link

        Raises:
            SubscriptionTokenNotFoundError: If the token is malformed or unknown
            UnexpectedError: If the database fails or the token references
                a subscriber that does not exist
        """
        token = SubscriptionToken.parse(subscription_token)

        try:
            subscriber_id = await self.subscriber_repository.find_subscriber_id_by_token(token)
        except Exception as e:
            raise UnexpectedError("Failed to fetch the subscriber id for the token") from e

        if subscriber_id is None:
            raise SubscriptionTokenNotFoundError()

        try:
            subscriber = await self.subscriber_repository.find_by_id(subscriber_id)
            if subscriber is None:
                raise SubscriberNotFoundError(subscriber_id)

            subscriber.confirm()
            await self.subscriber_repository.update_status(subscriber)
        except Exception as e:
            raise UnexpectedError("Failed to mark the subscriber as confirmed") from e

        logger.info(f"Subscriber {subscriber_id} confirmed")
