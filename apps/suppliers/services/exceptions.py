"""
Domain-specific exceptions for suppliers app.
"""

from apps.common.exceptions import DomainValidationError, NotFound


class SuppliersServiceError(Exception):
    """Base exception for all supplier service errors."""
    pass


class SupplierNotFoundError(SuppliersServiceError, NotFound):
    """Raised when a supplier does not exist or is soft-deleted."""
    default_detail = 'Supplier not found.'


class InvalidSupplierError(SuppliersServiceError, DomainValidationError):
    """Raised when required fields for the supplier type are missing."""
    pass
