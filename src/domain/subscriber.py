"""
Subscriber entity.

Represents a newsletter subscriber and the value objects that guard
its name and email address.
"""

import unicodedata
import uuid
from datetime import UTC, datetime
from enum import StrEnum

from email_validator import EmailNotValidError, validate_email

from src.domain.exceptions import InvalidSubscriberEmailError, InvalidSubscriberNameError


class SubscriptionStatus(StrEnum):
    """Lifecycle of a subscription. Transitions only go forward."""

    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"


class SubscriberName:
    """Validated subscriber name."""

    MAX_LENGTH = 256
    FORBIDDEN_CHARACTERS = frozenset('/()"<>\\{}')

    def __init__(self, value: str):
        self._value = value

    @classmethod
    def parse(cls, raw: str) -> "SubscriberName":
        """
        Validate a name coming from an untrusted form submission.

        Args:
            raw: The submitted name

        Returns:
            A SubscriberName

        Raises:
            InvalidSubscriberNameError: If the name is blank, too long or
                contains control or forbidden characters
        """
        if not raw.strip():
            raise InvalidSubscriberNameError(raw, "name must not be empty")

        # Composed form, so the length bound does not depend on how the client encoded accents
        raw = unicodedata.normalize("NFC", raw)

        if len(raw) > cls.MAX_LENGTH:
            raise InvalidSubscriberNameError(
                raw, f"name must be at most {cls.MAX_LENGTH} characters long"
            )

        if any(c in cls.FORBIDDEN_CHARACTERS for c in raw):
            raise InvalidSubscriberNameError(raw, "name contains forbidden characters")

        if any(unicodedata.category(c) == "Cc" for c in raw):
            raise InvalidSubscriberNameError(raw, "name contains control characters")

        return cls(raw)

    @property
    def value(self) -> str:
        return self._value

    def __str__(self) -> str:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubscriberName):
            return False
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


class SubscriberEmail:
    """
    Validated subscriber email address.

    Decision: email-validator (the library behind pydantic's EmailStr) does the
    syntax check. Deliverability (DNS) checks are off: they would add network
    I/O to validation, which has to fail fast before anything else happens.
    """

    def __init__(self, value: str):
        self._value = value

    @classmethod
    def parse(cls, raw: str) -> "SubscriberEmail":
        """
        Validate an email address.

        Used both for form input and for re-checking stored values
        before a newsletter is sent.

        Raises:
            InvalidSubscriberEmailError: If the address is not syntactically valid
        """
        try:
            validated = validate_email(raw, check_deliverability=False)
        except EmailNotValidError as e:
            raise InvalidSubscriberEmailError(raw) from e

        return cls(validated.normalized)

    @property
    def value(self) -> str:
        return self._value

    def __str__(self) -> str:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubscriberEmail):
            return False
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


class Subscriber:
    """
    Subscriber aggregate root.

    Attributes:
        id: Unique identifier for the subscriber
        email: Subscriber's email address (unique)
        name: Subscriber's display name
        subscribed_at: When the subscription was created (immutable)
        status: Pending until the emailed token is used, then confirmed
    """

    def __init__(
        self,
        id: uuid.UUID,
        email: SubscriberEmail,
        name: SubscriberName,
        subscribed_at: datetime,
        status: SubscriptionStatus = SubscriptionStatus.PENDING_CONFIRMATION,
    ):
        """
        Initialize a Subscriber entity.

        Note: This constructor is primarily for reconstructing entities from persistence.
        Use the 'create' class method for new subscriptions.
        """
        self.id = id
        self.email = email
        self.name = name
        self.subscribed_at = subscribed_at
        self.status = status

    @classmethod
    def create(cls, name: str, email: str) -> "Subscriber":
        """
        Create a new pending subscriber from raw form input.

        Args:
            name: Submitted name
            email: Submitted email address

        Returns:
            A new Subscriber with a generated ID and status pending_confirmation

        Raises:
            InvalidSubscriberNameError: If the name is invalid
            InvalidSubscriberEmailError: If the email is invalid
        """
        return cls(
            id=uuid.uuid4(),
            email=SubscriberEmail.parse(email),
            name=SubscriberName.parse(name),
            subscribed_at=datetime.now(UTC),
            status=SubscriptionStatus.PENDING_CONFIRMATION,
        )

    def confirm(self) -> None:
        """
        Mark the subscription as confirmed.

        Confirming twice is a no-op: the status never goes back to pending.
        """
        self.status = SubscriptionStatus.CONFIRMED

    @property
    def is_confirmed(self) -> bool:
        return self.status == SubscriptionStatus.CONFIRMED

    def __eq__(self, other: object) -> bool:
        """Subscribers are equal if they have the same identity."""
        if not isinstance(other, Subscriber):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
