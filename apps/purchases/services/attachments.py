"""
Attachment and house document service.

Only metadata is stored here; the files themselves live in external
storage. An attachment with a ``house_document_type`` is a tracked house
document (insurance, permits, manuals...).
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.analytics.aggregation import expiring_documents
from apps.common.models import deleted
from apps.purchases.models import Attachment
from apps.purchases.serializers import AttachmentInputSerializer, DocumentInputSerializer

from .exceptions import AttachmentNotFoundError, AttachmentValidationError

logger = logging.getLogger(__name__)


def _validated(serializer_class, data, instance=None, partial=False):
    serializer = serializer_class(instance, data=data, partial=partial)
    if not serializer.is_valid():
        raise AttachmentValidationError(errors=serializer.errors)
    return serializer.validated_data


def _documents() -> QuerySet:
    return (
        Attachment.objects
        .filter(house_document_type__isnull=False)
        .exclude(deleted('purchase'))
        .select_related('room', 'room__area', 'purchase')
    )


def add_attachment(*, data: dict) -> Attachment:
    """
    Record an uploaded file against a purchase, line item and/or room.

    Raises:
        AttachmentValidationError: If the metadata is invalid
    """
    validated = _validated(AttachmentInputSerializer, data)
    attachment = Attachment.objects.create(**validated)
    logger.info('Attachment %s added (%s)', attachment.id, attachment.file_name)
    return attachment


def add_document(*, data: dict) -> Attachment:
    """Record a house document; the title defaults to the file name."""
    validated = _validated(DocumentInputSerializer, data)
    if not validated.get('document_title'):
        validated['document_title'] = validated['file_name']
    document = Attachment.objects.create(**validated)
    logger.info('Document %s added (%s)', document.id, document.house_document_type)
    return document


def get_attachment(*, attachment_id: UUID) -> Attachment:
    try:
        return Attachment.objects.get(id=attachment_id)
    except Attachment.DoesNotExist:
        raise AttachmentNotFoundError(f"Attachment with ID {attachment_id} not found")


@transaction.atomic
def update_attachment(*, attachment_id: UUID, data: dict) -> Attachment:
    try:
        attachment = Attachment.objects.select_for_update().get(id=attachment_id)
    except Attachment.DoesNotExist:
        raise AttachmentNotFoundError(f"Attachment with ID {attachment_id} not found")

    validated = _validated(AttachmentInputSerializer, data, instance=attachment, partial=True)
    for field, value in validated.items():
        setattr(attachment, field, value)
    attachment.save()
    return attachment


def delete_attachment(*, attachment_id: UUID) -> None:
    """Remove the metadata row. The stored file is not touched."""
    removed, _ = Attachment.objects.filter(id=attachment_id).delete()
    if not removed:
        raise AttachmentNotFoundError(f"Attachment with ID {attachment_id} not found")
    logger.info('Attachment %s deleted', attachment_id)


def list_documents(
    *,
    home_id: Optional[UUID] = None,
    document_type: Optional[str] = None,
    expiring_within_days: Optional[int] = None,
):
    """
    List house documents, newest first.

    Args:
        home_id: Only documents whose room (room -> area -> home) or
            purchase belongs to this home
        document_type: Only this house document type
        expiring_within_days: Only documents expiring within the window,
            soonest first

    Returns:
        QuerySet, or a list when filtering by expiry
    """
    queryset = _documents()

    if home_id:
        queryset = queryset.filter(Q(room__area__home_id=home_id) | Q(purchase__home_id=home_id))
    if document_type:
        queryset = queryset.filter(house_document_type=document_type)
    if expiring_within_days is not None:
        return expiring_documents(queryset.filter(expires_at__isnull=False), expiring_within_days)

    return queryset
