"""
Tag management service.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import Count, QuerySet

from apps.taxonomy.models import Tag

from .exceptions import DuplicateTagError, TagNotFoundError

logger = logging.getLogger(__name__)


def list_tags(*, search: Optional[str] = None) -> QuerySet:
    queryset = Tag.objects.annotate(usage_count=Count('line_items', distinct=True))
    if search:
        queryset = queryset.filter(name__icontains=search)
    return queryset


def get_tag(*, tag_id: UUID) -> Tag:
    try:
        return Tag.objects.get(id=tag_id)
    except Tag.DoesNotExist:
        raise TagNotFoundError(f"Tag with ID {tag_id} not found")


def create_tag(*, name: str, color: str = '') -> Tag:
    """
    Create a tag.

    Raises:
        DuplicateTagError: If the name is taken (case-insensitive)
    """
    name = name.strip()
    if Tag.objects.filter(name__iexact=name).exists():
        raise DuplicateTagError(f"Tag '{name}' already exists")

    try:
        with transaction.atomic():
            return Tag.objects.create(name=name, color=color)
    except IntegrityError:
        raise DuplicateTagError(f"Tag '{name}' already exists")


@transaction.atomic
def update_tag(*, tag_id: UUID, name: Optional[str] = None, color: Optional[str] = None) -> Tag:
    try:
        tag = Tag.objects.select_for_update().get(id=tag_id)
    except Tag.DoesNotExist:
        raise TagNotFoundError(f"Tag with ID {tag_id} not found")

    if name is not None:
        name = name.strip()
        if Tag.objects.filter(name__iexact=name).exclude(id=tag.id).exists():
            raise DuplicateTagError(f"Tag '{name}' already exists")
        tag.name = name
    if color is not None:
        tag.color = color
    tag.save()
    return tag


def delete_tag(*, tag_id: UUID) -> None:
    """Delete a tag; line items simply lose it."""
    removed, _ = Tag.objects.filter(id=tag_id).delete()
    if not removed:
        raise TagNotFoundError(f"Tag with ID {tag_id} not found")
    logger.info('Tag %s deleted', tag_id)
