"""
Domain-specific exceptions.

These exceptions represent business rule violations and domain errors.
They are independent of infrastructure concerns.
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    pass


class SubscriberValidationError(DomainError):
    """Raised when submitted subscriber data is malformed."""

    pass


class InvalidSubscriberNameError(SubscriberValidationError):
    """Raised when a subscriber name breaks the naming rules."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid subscriber name: {reason}")


class InvalidSubscriberEmailError(SubscriberValidationError):
    """Raised when an email address cannot be parsed."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Invalid email format: '{email}'")


class SubscriptionTokenNotFoundError(DomainError):
    """
    Raised when a confirmation token is unknown.

    Malformed tokens raise the same error so callers cannot tell
    which tokens are syntactically plausible.
    """

    def __init__(self) -> None:
        super().__init__("Unknown subscription token")


class SubscriberNotFoundError(DomainError):
    """Raised when a subscription token references a subscriber that does not exist."""

    def __init__(self, subscriber_id: object):
        self.subscriber_id = subscriber_id
        super().__init__(f"Subscriber '{subscriber_id}' not found")


class AuthenticationError(DomainError):
    """Base exception for failed authentication."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when a username/password pair does not match a stored credential."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class MissingCredentialsError(AuthenticationError):
    """Raised when a request carries no usable Basic Auth credentials."""

    def __init__(self) -> None:
        super().__init__("Missing or malformed Authorization header")


class InvalidPasswordHashError(DomainError):
    """Raised when a stored password hash is not a valid PHC string."""

    def __init__(self) -> None:
        super().__init__("Stored password hash is not in PHC string format")
