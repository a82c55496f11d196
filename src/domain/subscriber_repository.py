"""
Subscriber repository interface (Port).

This interface defines the contract for subscriber and token persistence.
Following Hexagonal Architecture, the domain defines the interface,
and the infrastructure layer provides the implementation.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from src.domain.subscriber import Subscriber
from src.domain.subscription_token import SubscriptionToken


class SubscriberRepository(ABC):
    """
    Abstract repository interface for subscribers and their confirmation tokens.

    This is a "port" in Hexagonal Architecture terminology.
    """

    @abstractmethod
    async def add_pending(self, subscriber: Subscriber, token: SubscriptionToken) -> UUID:
        """
        Persist a new subscriber together with its confirmation token.

        Both rows are written in a single transaction: either both are
        committed or neither is. If a subscriber with the same email already
        exists, it is kept unchanged and the token is attached to it.

        Args:
            subscriber: The pending subscriber to store
            token: The confirmation token to store

        Returns:
            The id of the stored subscriber the token now references

        Raises:
            Exception: If persistence fails (the transaction is rolled back)
        """
        pass

    @abstractmethod
    async def find_subscriber_id_by_token(self, token: SubscriptionToken) -> UUID | None:
        """
        Resolve a confirmation token to the subscriber it references.

        Returns:
            The subscriber id, or None if the token is unknown
        """
        pass

    @abstractmethod
    async def find_by_id(self, subscriber_id: UUID) -> Subscriber | None:
        """
        Find a subscriber by id.

        Returns:
            The Subscriber if found, None otherwise
        """
        pass

    @abstractmethod
    async def update_status(self, subscriber: Subscriber) -> None:
        """Persist the subscriber's current status."""
        pass

    @abstractmethod
    async def list_confirmed_emails(self) -> list[str]:
        """
        List the raw stored email of every confirmed subscriber.

        Values are returned as stored, without validation: callers re-parse
        them and decide what to do with corrupted rows.
        """
        pass
