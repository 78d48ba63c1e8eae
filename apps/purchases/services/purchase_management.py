"""
Purchase write path.

A purchase and its line items are always written together in one
transaction. Line totals and the purchase total are recomputed from
quantity x unit price on every write; client-supplied totals are ignored.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Count, Q, QuerySet

from apps.analytics.aggregation import AMBIGUOUS, UNKNOWN, infer_home_id
from apps.common.models import deleted
from apps.common.money import line_total, sum_money
from apps.homes.models import Area, Room
from apps.purchases.models import Purchase, PurchaseLineItem
from apps.purchases.serializers import PurchaseInputSerializer

from .exceptions import PurchaseNotFoundError, PurchaseValidationError

logger = logging.getLogger(__name__)

SCALAR_FIELDS = (
    'supplier',
    'home',
    'area',
    'room',
    'date',
    'purchase_type',
    'expense_category',
    'currency',
    'payment_status',
    'payment_due_date',
    'notes',
)


def validate_purchase_input(data: dict) -> dict:
    """
    Validate a purchase payload.

    Every violated field is reported at once, including per-line-item
    errors.

    Raises:
        PurchaseValidationError: With ``errors`` mapping field -> messages
    """
    serializer = PurchaseInputSerializer(data=data)
    if not serializer.is_valid():
        logger.warning('Rejected purchase input: %s', sorted(serializer.errors))
        raise PurchaseValidationError(errors=serializer.errors)
    return serializer.validated_data


def _insert_line_items(purchase: Purchase, items: list) -> list:
    created = []
    for position, item in enumerate(items):
        fields = dict(item)
        tags = fields.pop('tags', [])
        line_item = PurchaseLineItem.objects.create(
            purchase=purchase,
            position=position,
            total_price=line_total(fields['quantity'], fields['unit_price']),
            **fields
        )
        if tags:
            line_item.tags.set(tags)
        created.append(line_item)
    return created


def _infer_home(purchase: Purchase, line_items: list) -> None:
    room_ids = {item.room_id for item in line_items} | {purchase.room_id}
    room_ids.discard(None)
    room_area_index = dict(Room.objects.filter(id__in=room_ids).values_list('id', 'area_id'))

    area_ids = {item.area_id for item in line_items} | {purchase.area_id} | set(room_area_index.values())
    area_ids.discard(None)
    area_home_index = dict(
        Area.objects
        .filter(id__in=area_ids)
        .exclude(deleted('home'))
        .values_list('id', 'home_id')
    )

    result = infer_home_id(purchase, line_items, area_home_index, room_area_index)
    if result == AMBIGUOUS:
        logger.warning('Purchase %s spans several homes; home left unset', purchase.id)
    elif result != UNKNOWN:
        purchase.home_id = result


@transaction.atomic
def create_purchase(*, data: dict, created_by=None) -> Purchase:
    """
    Create a purchase together with its line items.

    Args:
        data: Raw purchase payload (supplier, date, line_items...)
        created_by: AppUser performing the write, for the audit log

    Returns:
        Purchase: The created purchase

    Raises:
        PurchaseValidationError: If any field is invalid
    """
    validated = validate_purchase_input(data)
    items = validated['line_items']

    purchase = Purchase(**{field: validated[field] for field in SCALAR_FIELDS})
    purchase.total_amount = sum_money(line_total(i['quantity'], i['unit_price']) for i in items)
    purchase.save()

    line_items = _insert_line_items(purchase, items)

    if purchase.home_id is None:
        _infer_home(purchase, line_items)
        if purchase.home_id is not None:
            purchase.save(update_fields=['home', 'updated_at'])

    logger.info(
        'Purchase %s created by %s: %d line item(s), total %s %s',
        purchase.id,
        getattr(created_by, 'email', 'system'),
        len(line_items),
        purchase.total_amount,
        purchase.currency,
    )
    return purchase


@transaction.atomic
def update_purchase(*, purchase_id: UUID, data: dict, updated_by=None) -> Purchase:
    """
    Replace a purchase's fields and its whole line item set.

    The old line items are deleted and the new ones inserted in the same
    transaction, so readers see either the old set or the new one.

    Raises:
        PurchaseNotFoundError: If the purchase doesn't exist or is deleted
        PurchaseValidationError: If any field is invalid
    """
    try:
        purchase = Purchase.objects.alive().select_for_update().get(id=purchase_id)
    except Purchase.DoesNotExist:
        raise PurchaseNotFoundError(f"Purchase with ID {purchase_id} not found")

    validated = validate_purchase_input(data)
    items = validated['line_items']

    for field in SCALAR_FIELDS:
        setattr(purchase, field, validated[field])
    purchase.total_amount = sum_money(line_total(i['quantity'], i['unit_price']) for i in items)

    purchase.line_items.all().delete()
    line_items = _insert_line_items(purchase, items)

    if purchase.home_id is None:
        _infer_home(purchase, line_items)

    purchase.save()

    logger.info(
        'Purchase %s updated by %s: %d line item(s), total %s %s',
        purchase.id,
        getattr(updated_by, 'email', 'system'),
        len(line_items),
        purchase.total_amount,
        purchase.currency,
    )
    return purchase


@transaction.atomic
def delete_purchase(*, purchase_id: UUID, deleted_by=None) -> None:
    """Soft delete; the purchase and its line items stay in storage."""
    try:
        purchase = Purchase.objects.alive().select_for_update().get(id=purchase_id)
    except Purchase.DoesNotExist:
        raise PurchaseNotFoundError(f"Purchase with ID {purchase_id} not found")

    purchase.soft_delete()
    logger.info('Purchase %s deleted by %s', purchase_id, getattr(deleted_by, 'email', 'system'))


def get_purchase(*, purchase_id: UUID) -> Purchase:
    try:
        return (
            Purchase.objects.alive()
            .select_related('supplier', 'home', 'area', 'room')
            .prefetch_related('line_items__tags', 'line_items__area', 'line_items__room', 'attachments')
            .get(id=purchase_id)
        )
    except Purchase.DoesNotExist:
        raise PurchaseNotFoundError(f"Purchase with ID {purchase_id} not found")


def list_purchases(
    *,
    supplier_id: Optional[UUID] = None,
    home_id: Optional[UUID] = None,
    area_id: Optional[UUID] = None,
    room_id: Optional[UUID] = None,
    payment_status: Optional[str] = None,
    category: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> QuerySet:
    """
    List live purchases with optional filters.

    Area and room filters match the purchase-level attribution or any of
    its line items.
    """
    queryset = (
        Purchase.objects.alive()
        .select_related('supplier')
        .annotate(line_item_count=Count('line_items', distinct=True))
    )

    if supplier_id:
        queryset = queryset.filter(supplier_id=supplier_id)
    if home_id:
        queryset = queryset.filter(home_id=home_id)
    if area_id:
        matching = PurchaseLineItem.objects.filter(area_id=area_id).values('purchase_id')
        queryset = queryset.filter(Q(area_id=area_id) | Q(id__in=matching))
    if room_id:
        matching = PurchaseLineItem.objects.filter(room_id=room_id).values('purchase_id')
        queryset = queryset.filter(Q(room_id=room_id) | Q(id__in=matching))
    if payment_status:
        queryset = queryset.filter(payment_status=payment_status)
    if category:
        queryset = queryset.filter(expense_category=category)
    if date_from:
        queryset = queryset.filter(date__gte=date_from)
    if date_to:
        queryset = queryset.filter(date__lte=date_to)

    return queryset
