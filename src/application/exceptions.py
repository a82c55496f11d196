"""
Application-level exceptions.

UnexpectedError marks failures the caller could not have caused:
database errors, email delivery errors and data-integrity violations.
"""


class UnexpectedError(Exception):
    """
    Raised when a use case fails for reasons outside the caller's control.

    Always raised with ``from`` so the original exception stays on
    ``__cause__`` and ends up in the error log.
    """

    def __init__(self, context: str):
        self.context = context
        super().__init__(context)
