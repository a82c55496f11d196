"""
Validate Credentials use case.

Checks a username/password pair against the stored argon2 hashes,
without revealing through response time whether the username exists.
"""

import logging
from uuid import UUID

from fastapi.concurrency import run_in_threadpool

from src.application.exceptions import UnexpectedError
from src.domain.credential_repository import CredentialRepository
from src.domain.credentials import DUMMY_PASSWORD_HASH, verify_password_hash
from src.domain.exceptions import InvalidCredentialsError, InvalidPasswordHashError

logger = logging.getLogger(__name__)


class ValidateCredentialsUseCase:
    """
    Use case for authenticating an operator.

    Decision: The password is always verified, against a dummy hash when
    the username is unknown. Skipping verification for unknown users would
    make them answer tens of milliseconds faster, which is enough to
    enumerate valid usernames.
    """

    def __init__(self, credential_repository: CredentialRepository):
        """
        Initialize the use case.

        Args:
            credential_repository: Repository for operator credentials
        """
        self.credential_repository = credential_repository

    async def execute(self, username: str, password: str) -> UUID:
        """
        Execute the credential validation.

        Args:
            username: Submitted username
            password: Submitted password

        Returns:
            The id of the authenticated user

        Raises:
            InvalidCredentialsError: If the username is unknown or the password is wrong
            UnexpectedError: If the lookup fails or the stored hash is malformed
        """
        try:
            credentials = await self.credential_repository.find_by_username(username)
        except Exception as e:
            raise UnexpectedError("Failed to retrieve stored credentials") from e

        user_id = None
        expected_password_hash = DUMMY_PASSWORD_HASH
        if credentials is not None:
            user_id = credentials.user_id
            expected_password_hash = credentials.password_hash

        # argon2 is CPU-bound: keep it off the event loop
        try:
            is_valid = await run_in_threadpool(
                verify_password_hash, expected_password_hash, password
            )
        except InvalidPasswordHashError as e:
            raise UnexpectedError("Failed to parse the stored password hash") from e

        if user_id is None:
            logger.warning("Authentication failed: unknown username")
            raise InvalidCredentialsError()

        if not is_valid:
            logger.warning(f"Authentication failed: invalid password for user {user_id}")
            raise InvalidCredentialsError()

        return user_id
