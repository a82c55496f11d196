"""
PostgreSQL implementation of SubscriberRepository.

This is the concrete adapter for subscriber and token persistence using raw SQL with asyncpg.
"""

import logging
from uuid import UUID

from src.domain.subscriber import (
    Subscriber,
    SubscriberEmail,
    SubscriberName,
    SubscriptionStatus,
)
from src.domain.subscriber_repository import SubscriberRepository
from src.domain.subscription_token import SubscriptionToken
from src.infrastructure.database.connection import DatabaseConnection

logger = logging.getLogger(__name__)


class PostgresSubscriberRepository(SubscriberRepository):
    """
    PostgreSQL implementation of the SubscriberRepository interface.

    This adapter translates between the Subscriber entity and the
    subscriptions / subscription_tokens tables.
    """

    def __init__(self, db_connection: DatabaseConnection):
        """
        Initialize the repository.

        Args:
            db_connection: Database connection manager
        """
        self.db = db_connection

    async def add_pending(self, subscriber: Subscriber, token: SubscriptionToken) -> UUID:
        """
        Insert the subscriber and its token in one transaction.

        Decision: ON CONFLICT (email) turns a re-subscription into a no-op
        update that still RETURNs the existing id, so the new token can be
        attached to the subscriber already on file. Name, subscribed_at and
        status of that row are left untouched.
        """
        insert_subscriber = """
        INSERT INTO subscriptions (id, email, name, subscribed_at, status)
        VALUES ($1, $2, $3, $4, $5)
        ON CONFLICT (email) DO UPDATE SET email = EXCLUDED.email
        RETURNING id
        """
        insert_token = """
        INSERT INTO subscription_tokens (subscription_token, subscriber_id)
        VALUES ($1, $2)
        """

        try:
            async with self.db.transaction() as conn:
                stored_id = await conn.fetchval(
                    insert_subscriber,
                    subscriber.id,
                    subscriber.email.value,
                    subscriber.name.value,
                    subscriber.subscribed_at,
                    subscriber.status.value,
                )
                await conn.execute(insert_token, token.value, stored_id)
        except Exception as e:
            logger.error(f"Failed to store pending subscriber {subscriber.id}: {e}")
            raise

        logger.debug(f"Stored pending subscriber {stored_id}")
        return self._to_uuid(stored_id)

    async def find_subscriber_id_by_token(self, token: SubscriptionToken) -> UUID | None:
        query = """
        SELECT subscriber_id
        FROM subscription_tokens
        WHERE subscription_token = $1
        """

        try:
            result = await self.db.execute(query, token.value, fetchone=True)
        except Exception as e:
            logger.error(f"Failed to look up subscription token: {e}")
            raise

        if not result:
            return None

        assert isinstance(result, dict)
        return self._to_uuid(result["subscriber_id"])

    async def find_by_id(self, subscriber_id: UUID) -> Subscriber | None:
        query = """
        SELECT id, email, name, subscribed_at, status
        FROM subscriptions
        WHERE id = $1
        """

        try:
            result = await self.db.execute(query, subscriber_id, fetchone=True)
        except Exception as e:
            logger.error(f"Failed to find subscriber by id {subscriber_id}: {e}")
            raise

        if not result:
            return None

        assert isinstance(result, dict)
        return self._map_to_entity(result)

    async def update_status(self, subscriber: Subscriber) -> None:
        query = "UPDATE subscriptions SET status = $1 WHERE id = $2"

        try:
            await self.db.execute(query, subscriber.status.value, subscriber.id)
            logger.debug(f"Subscriber {subscriber.id} status set to {subscriber.status.value}")
        except Exception as e:
            logger.error(f"Failed to update status of subscriber {subscriber.id}: {e}")
            raise

    async def list_confirmed_emails(self) -> list[str]:
        query = "SELECT email FROM subscriptions WHERE status = $1"

        try:
            rows = await self.db.execute(query, SubscriptionStatus.CONFIRMED.value, fetch=True)
        except Exception as e:
            logger.error(f"Failed to list confirmed subscribers: {e}")
            raise

        assert isinstance(rows, list)
        return [row["email"] for row in rows]

    @staticmethod
    def _to_uuid(value: object) -> UUID:
        return value if type(value) is UUID else UUID(str(value))

    def _map_to_entity(self, row: dict) -> Subscriber:
        """
        Map a database row to a Subscriber entity.

        Decision: Stored values are trusted here and not re-validated, so a
        corrupted row can still be loaded and confirmed.
        """
        return Subscriber(
            id=self._to_uuid(row["id"]),
            email=SubscriberEmail(row["email"]),
            name=SubscriberName(row["name"]),
            subscribed_at=row["subscribed_at"],
            status=SubscriptionStatus(row["status"]),
        )
