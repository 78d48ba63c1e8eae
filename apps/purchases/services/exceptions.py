"""
Domain exceptions for purchases app.

This module defines the exception hierarchy for purchase-related errors.
Each exception also derives from the shared error taxonomy so the API
renders it with the right status code.
"""

from apps.common.exceptions import DomainValidationError, ExternalServiceError, NotFound


class PurchaseServiceError(Exception):
    """Base exception for purchase service errors."""
    pass


class PurchaseNotFoundError(PurchaseServiceError, NotFound):
    """Purchase does not exist or is soft-deleted."""
    default_detail = 'Purchase not found.'
    default_code = 'purchase_not_found'


class PurchaseValidationError(PurchaseServiceError, DomainValidationError):
    """Purchase input failed validation; ``errors`` lists every bad field."""
    default_detail = 'Purchase data is invalid.'
    default_code = 'invalid_purchase'


class AttachmentNotFoundError(PurchaseServiceError, NotFound):
    """Attachment does not exist."""
    default_detail = 'Attachment not found.'
    default_code = 'attachment_not_found'


class AttachmentValidationError(PurchaseServiceError, DomainValidationError):
    default_detail = 'Attachment data is invalid.'
    default_code = 'invalid_attachment'


class InvoiceExtractionError(PurchaseServiceError, ExternalServiceError):
    """
    The invoice extraction service failed or returned something unparseable.

    ``raw_response`` carries the model reply, if any, for manual correction.
    """
    default_detail = 'Invoice extraction failed.'
    default_code = 'invoice_extraction_failed'
