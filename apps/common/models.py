"""
Shared model building blocks.

Every table that supports soft delete filters through ``not_deleted`` or
``SoftDeleteQuerySet.alive`` so the ``is_deleted = false`` predicate lives in
exactly one place.
"""

import uuid

from django.db import models
from django.db.models import Q


def _flag(prefix):
    return f'{prefix}__is_deleted' if prefix else 'is_deleted'


def not_deleted(prefix=''):
    """
    Return the soft-delete predicate, optionally across a relation.

    Args:
        prefix: Relation path to the soft-deletable model, e.g. ``'purchase'``.

    Example:
        PurchaseLineItem.objects.filter(not_deleted('purchase'))
    """
    return Q(**{_flag(prefix): False})


def deleted(prefix=''):
    """Inverse of ``not_deleted``; use with ``exclude()`` across nullable relations."""
    return Q(**{_flag(prefix): True})


class SoftDeleteQuerySet(models.QuerySet):

    def alive(self):
        return self.filter(not_deleted())

    def deleted(self):
        return self.filter(deleted())


class TimeStampedModel(models.Model):
    """Abstract base with UUID primary key and audit timestamps."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class SoftDeleteModel(TimeStampedModel):
    """Abstract base for rows that are flagged instead of removed."""

    is_deleted = models.BooleanField(default=False, db_index=True)

    objects = SoftDeleteQuerySet.as_manager()

    class Meta:
        abstract = True

    def soft_delete(self):
        self.is_deleted = True
        self.save(update_fields=['is_deleted', 'updated_at'])
