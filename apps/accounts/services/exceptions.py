"""
Domain-specific exceptions for accounts app.

Each one also carries the HTTP semantics of the shared taxonomy so the
API exception handler can render it without per-view mapping.
"""

from apps.common.exceptions import (
    Conflict,
    DomainValidationError,
    Forbidden,
    NotFound,
)


class AccountsServiceError(Exception):
    """Base exception for all accounts service errors."""
    pass


class UserNotFoundError(AccountsServiceError, NotFound):
    """Raised when an app user does not exist."""
    default_detail = 'User not found.'


class InactiveAccountError(AccountsServiceError, Forbidden):
    """Raised when a deactivated user tries to do anything."""
    default_detail = 'Your account is inactive.'


class InsufficientRoleError(AccountsServiceError, Forbidden):
    """Raised when the caller's role is not allowed for the operation."""
    pass


class BootstrapNotAllowedError(AccountsServiceError, Forbidden):
    """Raised when bootstrap is attempted after the first user exists."""
    default_detail = 'Setup already completed.'


class DuplicateEmailError(AccountsServiceError, Conflict):
    """Raised when inviting an email that already has an account."""
    default_detail = 'A user with this email already exists.'


class SelfModificationError(AccountsServiceError, DomainValidationError):
    """Raised when an admin tries to demote, deactivate or delete themselves."""
    pass
