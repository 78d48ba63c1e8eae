"""
Purchases App - Renovation Purchase Management

Purchases from suppliers, their line items, attachments and house
documents, plus reading invoices through a vision model.

Key Features:
- Purchase and line items written together in one transaction
- Line and purchase totals recomputed server-side
- Soft delete; deleted purchases drop out of every report
- Home inferred from line-item areas when not given
- Invoice extraction treated as an untrusted suggestion

Architecture:
- Models: Purchase, PurchaseLineItem, Attachment
- Services: purchase_management, attachments, invoice_extraction
- Views: PurchaseViewSet, AttachmentViewSet, documents
- Exceptions: services/exceptions.py
"""
