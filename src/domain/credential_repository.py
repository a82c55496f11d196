"""
Credential repository interface (Port).

Read-only access to operator credentials. Provisioning is out of scope.
"""

from abc import ABC, abstractmethod

from src.domain.credentials import Credentials


class CredentialRepository(ABC):
    """Abstract repository interface for operator credentials."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Credentials | None:
        """
        Find stored credentials by username.

        Args:
            username: The username to search for

        Returns:
            The Credentials if found, None otherwise

        Raises:
            Exception: If query fails
        """
        pass
