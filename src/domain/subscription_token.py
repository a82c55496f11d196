"""
SubscriptionToken value object.

Represents the opaque token emailed to a new subscriber to confirm the subscription.
This is a value object in DDD terms - immutable and defined by its value.
"""

import secrets
import string

from src.domain.exceptions import SubscriptionTokenNotFoundError


class SubscriptionToken:
    """
    Value object representing a 25-character alphanumeric confirmation token.

    Tokens carry no expiry and are never revoked. The only property that
    matters is that they cannot be guessed, so generation draws from the
    operating system CSPRNG. Uniqueness is left to the store's primary key.
    """

    TOKEN_LENGTH = 25
    ALPHABET = string.ascii_letters + string.digits

    def __init__(self, value: str):
        """
        Initialize a SubscriptionToken.

        Args:
            value: The raw token string

        Raises:
            SubscriptionTokenNotFoundError: If the token does not have the expected shape
        """
        if not self._is_valid_format(value):
            raise SubscriptionTokenNotFoundError()

        self._value = value

    @classmethod
    def _is_valid_format(cls, value: str) -> bool:
        return len(value) == cls.TOKEN_LENGTH and all(c in cls.ALPHABET for c in value)

    @classmethod
    def generate(cls) -> "SubscriptionToken":
        """
        Generate a new random token.

        Decision: secrets.choice instead of random.choice. A predictable
        token would let anyone confirm an address they do not control.
        """
        return cls("".join(secrets.choice(cls.ALPHABET) for _ in range(cls.TOKEN_LENGTH)))

    @classmethod
    def parse(cls, value: str) -> "SubscriptionToken":
        """Parse an untrusted token, e.g. from a confirmation link."""
        return cls(value)

    @property
    def value(self) -> str:
        """Get the token string."""
        return self._value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return "SubscriptionToken(***)"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubscriptionToken):
            return False
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)
