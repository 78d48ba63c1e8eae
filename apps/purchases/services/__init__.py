"""
Purchases app services layer.

Purchases soft-delete; line items are only ever replaced as a set together
with their purchase.
"""

from .exceptions import (
    PurchaseServiceError,
    PurchaseNotFoundError,
    PurchaseValidationError,
    AttachmentNotFoundError,
    AttachmentValidationError,
    InvoiceExtractionError,
)

from .purchase_management import (
    validate_purchase_input,
    create_purchase,
    update_purchase,
    delete_purchase,
    get_purchase,
    list_purchases,
)

from .attachments import (
    add_attachment,
    add_document,
    get_attachment,
    update_attachment,
    delete_attachment,
    list_documents,
)

from .invoice_extraction import (
    extract_invoice,
    parse_extraction_reply,
    validate_extracted_invoice,
)


__all__ = [
    # Exceptions
    'PurchaseServiceError',
    'PurchaseNotFoundError',
    'PurchaseValidationError',
    'AttachmentNotFoundError',
    'AttachmentValidationError',
    'InvoiceExtractionError',

    # Purchases
    'validate_purchase_input',
    'create_purchase',
    'update_purchase',
    'delete_purchase',
    'get_purchase',
    'list_purchases',

    # Attachments & documents
    'add_attachment',
    'add_document',
    'get_attachment',
    'update_attachment',
    'delete_attachment',
    'list_documents',

    # Invoice extraction
    'extract_invoice',
    'parse_extraction_reply',
    'validate_extracted_invoice',
]
