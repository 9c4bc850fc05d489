"""Domain errors raised by services; the API layer maps them to HTTP responses."""

from __future__ import annotations


class DomainError(Exception):
    """Base for all expected service failures."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Referenced entity is absent or outside the stated parent scope."""

    status_code = 404


class ConflictError(DomainError):
    """Uniqueness or dependency violation detected before mutation."""

    status_code = 409


class ValidationError(DomainError):
    """Malformed input. ``field_errors`` maps field name -> message."""

    status_code = 422

    def __init__(self, field_errors: dict[str, str]) -> None:
        super().__init__("; ".join(field_errors.values()))
        self.field_errors = field_errors


class InternalError(DomainError):
    """Unexpected store failure; surfaced generically."""

    status_code = 500
