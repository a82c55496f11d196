"""
PostgreSQL implementation of CredentialRepository.
"""

import logging
from uuid import UUID

from src.domain.credential_repository import CredentialRepository
from src.domain.credentials import Credentials
from src.infrastructure.database.connection import DatabaseConnection

logger = logging.getLogger(__name__)


class PostgresCredentialRepository(CredentialRepository):
    """Reads operator credentials from the users table."""

    def __init__(self, db_connection: DatabaseConnection):
        self.db = db_connection

    async def find_by_username(self, username: str) -> Credentials | None:
        query = """
        SELECT user_id, username, password_hash
        FROM users
        WHERE username = $1
        """

        try:
            result = await self.db.execute(query, username, fetchone=True)
        except Exception as e:
            logger.error(f"Failed to retrieve stored credentials: {e}")
            raise

        if not result:
            return None

        assert isinstance(result, dict)
        user_id = result["user_id"]
        return Credentials(
            user_id=user_id if type(user_id) is UUID else UUID(str(user_id)),
            username=result["username"],
            password_hash=result["password_hash"],
        )

    async def add(self, credentials: Credentials) -> None:
        """
        Store operator credentials.

        Not reachable over HTTP; operators are provisioned out of band.
        """
        query = "INSERT INTO users (user_id, username, password_hash) VALUES ($1, $2, $3)"

        try:
            await self.db.execute(
                query, credentials.user_id, credentials.username, credentials.password_hash
            )
        except Exception as e:
            logger.error(f"Failed to store credentials for {credentials.username}: {e}")
            raise
