"""
Credentials entity.

Holds an operator's username and PHC-format password hash, and the
argon2 verification logic used for HTTP Basic authentication.
"""

import uuid

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from src.domain.exceptions import InvalidPasswordHashError

# Argon2id parameters: 15 MiB of memory, 2 iterations, 1 degree of parallelism.
# DUMMY_PASSWORD_HASH must be produced with the same parameters, otherwise
# the two verification paths would take measurably different time.
ARGON2_TIME_COST = 2
ARGON2_MEMORY_COST = 15000
ARGON2_PARALLELISM = 1

# Verified against when the username is unknown, so that a lookup miss costs
# as much as a wrong password.
DUMMY_PASSWORD_HASH = (
    "$argon2id$v=19$m=15000,t=2,p=1$"
    "gZiV/M1gPc22ElAH/Jh1Hw$CWOrkoo7oJBQ/iyh7uJ0LO2aLEfrHwTWllSAxT0zRno"
)

password_hasher = PasswordHasher(
    time_cost=ARGON2_TIME_COST,
    memory_cost=ARGON2_MEMORY_COST,
    parallelism=ARGON2_PARALLELISM,
)


def hash_password(password: str) -> str:
    """Hash a password into an argon2id PHC string."""
    return password_hasher.hash(password)


def verify_password_hash(expected_password_hash: str, password_candidate: str) -> bool:
    """
    Verify a password candidate against a PHC-format hash.

    This is CPU-bound (tens of milliseconds by design) and must not run on
    the event loop; callers dispatch it to a worker thread.

    Args:
        expected_password_hash: Stored PHC string
        password_candidate: Plain text password to verify

    Returns:
        True if the password matches, False otherwise

    Raises:
        InvalidPasswordHashError: If the stored hash cannot be parsed
    """
    try:
        return password_hasher.verify(expected_password_hash, password_candidate)
    except InvalidHashError as e:
        raise InvalidPasswordHashError() from e
    except VerificationError:
        return False


class Credentials:
    """
    Operator credentials used to authenticate newsletter publication.

    Attributes:
        user_id: Unique identifier of the operator
        username: Login name (unique)
        password_hash: argon2id hash in PHC string format
    """

    def __init__(self, user_id: uuid.UUID, username: str, password_hash: str):
        self.user_id = user_id
        self.username = username
        self.password_hash = password_hash

    @classmethod
    def create(cls, username: str, password: str) -> "Credentials":
        """
        Create credentials with a freshly hashed password.

        Provisioning operators is not exposed over HTTP; this factory backs
        out-of-band provisioning and tests.
        """
        return cls(user_id=uuid.uuid4(), username=username, password_hash=hash_password(password))

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return verify_password_hash(self.password_hash, password)

    def __repr__(self) -> str:
        return f"Credentials(user_id={self.user_id!r}, username={self.username!r})"
