"""Exceptions raised by domain code and translated to HTTP responses in ``shared.http``."""


class CampusTrucksError(Exception):
    """Base class for expected, user-facing failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CampusTrucksError):
    """Input or state violates a business rule.

    ``messages`` maps a field name to a list of problems, e.g.
    ``{"quantity": ["Valid quantity is required"]}``.
    """

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        first = next((msgs[0] for msgs in messages.values() if msgs), "Invalid request")
        super().__init__(first)


class ObjectNotFoundError(CampusTrucksError):
    pass


class AuthenticationError(CampusTrucksError):
    pass


class PermissionDeniedError(CampusTrucksError):
    pass
