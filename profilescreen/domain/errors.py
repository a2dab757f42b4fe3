"""Errors raised by account collaborators and by local input checks."""
from __future__ import annotations


class AccountError(Exception):
    """Base class for failures the profile screen knows how to report."""


class ServiceError(AccountError):
    """Network, auth or database failure reported by the backend."""


class NotFoundError(AccountError):
    """The requested profile row does not exist."""


class ValidationError(AccountError):
    """User input rejected before any network call."""


def validate_display_name(value: str) -> str:
    """Return ``value`` trimmed, or raise if nothing is left."""
    name = (value or "").strip()
    if not name:
        raise ValidationError("Username cannot be empty")
    return name
