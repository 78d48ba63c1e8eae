"""
Expense Aggregation Engine
==========================

Pure functions that compute spend summaries from already fetched rows.

Every function accepts model instances or any objects exposing the same
attribute names (``purchase_id``, ``area_id``, ``total_price``...), never
touches the database and never fails on empty input: empty in, zeros out.

Rules applied everywhere:
    - Purchases flagged ``is_deleted`` contribute nothing, even though their
      line items are still physically present.
    - Sums are accumulated as integer cents (see ``apps.common.money``) and
      converted to ``Decimal`` once at the end.
    - Line-item area/room wins for per-area and per-room breakdowns. The
      purchase-level area/room is used only for a purchase none of whose
      line items carries an override.
      Once any line of a purchase is overridden, its unassigned lines fall
      to no area or room, so per-area totals can add up to less than the
      total spent.

Example:
    Kitchen spend from two purchases::

        from apps.analytics import aggregation

        totals = aggregation.spend_by_area(line_items, purchases, area_ids=[kitchen.id])
        totals[kitchen.id]  # Decimal('2000.00')
"""

import calendar
from collections import defaultdict
from datetime import date, datetime, timedelta

from django.utils import timezone

from apps.common.money import from_cents, to_cents

AMBIGUOUS = 'ambiguous'
UNKNOWN = 'unknown'
UNCATEGORIZED = 'uncategorized'

EXPIRED = 'expired'
URGENT = 'urgent'
MEDIUM = 'medium'
ACTIVE = 'active'

URGENT_DAYS = 30
MEDIUM_DAYS = 90


# =============================================================================
# Helpers
# =============================================================================

def alive_purchases(purchases):
    """Index non-deleted purchases by id."""
    return {p.id: p for p in purchases if not p.is_deleted}


def _purchases_with_overrides(line_items, alive):
    return {
        item.purchase_id
        for item in line_items
        if item.purchase_id in alive and (item.area_id is not None or item.room_id is not None)
    }


def item_area(item, room_area_index):
    """Area of a line item or purchase, resolving a bare room through the index."""
    if item.area_id is not None:
        return item.area_id
    if item.room_id is not None and room_area_index:
        return room_area_index.get(item.room_id)
    return None


def _to_money(cents_by_key):
    return {key: from_cents(cents) for key, cents in cents_by_key.items()}


def _group_totals(purchases, key):
    groups = defaultdict(lambda: {'cents': 0, 'purchase_count': 0})
    for purchase in alive_purchases(purchases).values():
        group = groups[key(purchase)]
        group['cents'] += to_cents(purchase.total_amount)
        group['purchase_count'] += 1
    return {
        k: {'total': from_cents(v['cents']), 'purchase_count': v['purchase_count']}
        for k, v in groups.items()
    }


# =============================================================================
# Spend breakdowns
# =============================================================================

def spend_by_room(line_items, purchases, room_ids=()):
    """
    Sum line totals per room.

    Args:
        line_items: Line item rows (any purchase)
        purchases: Parent purchases; deleted ones are skipped
        room_ids: Rooms that must appear in the result even with no spend

    Returns:
        dict: room_id -> Decimal total
    """
    line_items = list(line_items)
    alive = alive_purchases(purchases)
    cents = {room_id: 0 for room_id in room_ids}

    for item in line_items:
        if item.purchase_id in alive and item.room_id is not None:
            cents[item.room_id] = cents.get(item.room_id, 0) + to_cents(item.total_price)

    overridden = _purchases_with_overrides(line_items, alive)
    for purchase in alive.values():
        if purchase.id not in overridden and purchase.room_id is not None:
            cents[purchase.room_id] = cents.get(purchase.room_id, 0) + to_cents(purchase.total_amount)

    return _to_money(cents)


def spend_by_area(line_items, purchases, area_ids=(), room_area_index=None):
    """
    Sum line totals per area.

    A line item that names only a room is counted under that room's area
    when ``room_area_index`` (room_id -> area_id) is given.

    Returns:
        dict: area_id -> Decimal total, zero for requested areas with no spend
    """
    line_items = list(line_items)
    alive = alive_purchases(purchases)
    cents = {area_id: 0 for area_id in area_ids}

    for item in line_items:
        if item.purchase_id not in alive:
            continue
        area_id = item_area(item, room_area_index)
        if area_id is not None:
            cents[area_id] = cents.get(area_id, 0) + to_cents(item.total_price)

    overridden = _purchases_with_overrides(line_items, alive)
    for purchase in alive.values():
        if purchase.id in overridden:
            continue
        area_id = item_area(purchase, room_area_index)
        if area_id is not None:
            cents[area_id] = cents.get(area_id, 0) + to_cents(purchase.total_amount)

    return _to_money(cents)


def spend_by_category(line_items, purchases):
    """
    Sum line totals per parent purchase category.

    Returns:
        dict: category name (or ``'uncategorized'``) ->
            {'total': Decimal, 'purchase_count': int}
    """
    alive = alive_purchases(purchases)
    cents = defaultdict(int)
    contributors = defaultdict(set)

    for item in line_items:
        purchase = alive.get(item.purchase_id)
        if purchase is None:
            continue
        key = purchase.expense_category or UNCATEGORIZED
        cents[key] += to_cents(item.total_price)
        contributors[key].add(purchase.id)

    return {
        key: {'total': from_cents(value), 'purchase_count': len(contributors[key])}
        for key, value in cents.items()
    }


def spend_by_home(purchases):
    """
    Sum purchase totals per home. Purchases with no home are keyed ``None``.
    """
    totals = _group_totals(purchases, key=lambda p: p.home_id)
    return {home_id: group['total'] for home_id, group in totals.items()}


def spend_by_supplier(purchases):
    """Sum purchase totals and count purchases per supplier."""
    return _group_totals(purchases, key=lambda p: p.supplier_id)


def spend_by_type(purchases):
    totals = _group_totals(purchases, key=lambda p: p.purchase_type)
    return {purchase_type: group['total'] for purchase_type, group in totals.items()}


def spend_by_payment_status(purchases):
    return _group_totals(purchases, key=lambda p: p.payment_status)


def monthly_spending(purchases):
    """
    Purchase totals per calendar month.

    Returns:
        list[dict]: ``{'month': 'YYYY-MM', 'total': Decimal, 'purchase_count': int}``
            in chronological order
    """
    totals = _group_totals(purchases, key=lambda p: p.date.strftime('%Y-%m'))
    return [
        {'month': month, 'total': group['total'], 'purchase_count': group['purchase_count']}
        for month, group in sorted(totals.items())
    ]


# =============================================================================
# Home attribution
# =============================================================================

def infer_home_id(purchase, line_items, area_home_index, room_area_index=None):
    """
    Infer the home of a purchase from the areas of its line items.

    Args:
        purchase: The purchase; returned unchanged if it already has a home
        line_items: Line items; only those of ``purchase`` are considered
        area_home_index: area_id -> home_id (None for unassigned areas)
        room_area_index: room_id -> area_id, for items that name only a room

    Returns:
        The single home id, ``AMBIGUOUS`` when the areas span more than one
        home, or ``UNKNOWN`` when no area resolves to a home. Never picks
        one of several candidates.
    """
    if purchase.home_id is not None:
        return purchase.home_id

    areas = {
        item_area(item, room_area_index)
        for item in line_items
        if item.purchase_id == purchase.id
    }
    areas.discard(None)
    if not areas:
        fallback = item_area(purchase, room_area_index)
        if fallback is not None:
            areas.add(fallback)

    homes = {area_home_index.get(area_id) for area_id in areas}
    homes.discard(None)

    if len(homes) == 1:
        return homes.pop()
    if len(homes) > 1:
        return AMBIGUOUS
    return UNKNOWN


# =============================================================================
# Documents and warranties
# =============================================================================

def expiring_documents(attachments, window_days, now=None):
    """
    House documents expiring within ``[now, now + window_days]``.

    Both bounds are inclusive; soonest expiry first.
    """
    now = now or timezone.now()
    until = now + timedelta(days=window_days)
    documents = [
        attachment for attachment in attachments
        if attachment.house_document_type
        and attachment.expires_at is not None
        and now <= attachment.expires_at <= until
    ]
    return sorted(documents, key=lambda attachment: attachment.expires_at)


def warranty_expires_at(purchase_date, warranty_months):
    """
    Purchase date plus ``warranty_months`` calendar months.

    The day is clamped to the end of a shorter target month
    (31 January + 1 month = 28/29 February).
    """
    if purchase_date is None or not warranty_months:
        return None
    if isinstance(purchase_date, datetime):
        purchase_date = purchase_date.date()

    month_index = purchase_date.month - 1 + warranty_months
    year = purchase_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(purchase_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def days_until(expiry, today):
    """Whole calendar days from ``today`` to ``expiry``; negative once past."""
    if isinstance(expiry, datetime):
        expiry = timezone.localtime(expiry).date() if timezone.is_aware(expiry) else expiry.date()
    if isinstance(today, datetime):
        today = today.date()
    return (expiry - today).days


def classify_warranty(days):
    if days <= 0:
        return EXPIRED
    if days <= URGENT_DAYS:
        return URGENT
    if days <= MEDIUM_DAYS:
        return MEDIUM
    return ACTIVE


def _warranty_rows(line_items, purchases, today):
    alive = alive_purchases(purchases)
    rows = []
    for item in line_items:
        purchase = alive.get(item.purchase_id)
        if purchase is None:
            continue
        expires_at = warranty_expires_at(purchase.date, item.warranty_months)
        if expires_at is None:
            continue
        days = days_until(expires_at, today)
        rows.append({
            'line_item': item,
            'purchase': purchase,
            'expires_at': expires_at,
            'days_remaining': days,
            'status': classify_warranty(days),
        })
    rows.sort(key=lambda row: row['expires_at'])
    return rows


def expiring_warranties(line_items, purchases, window_days, today=None):
    """
    Line-item warranties ending within ``[today, today + window_days]``.

    Returns:
        list[dict]: rows with ``line_item``, ``purchase``, ``expires_at``,
            ``days_remaining`` and ``status``, soonest first
    """
    today = today or timezone.localdate()
    return [
        row for row in _warranty_rows(line_items, purchases, today)
        if 0 <= row['days_remaining'] <= window_days
    ]


def warranty_overview(line_items, purchases, today=None):
    """All warranties with their bucket, plus a count per bucket."""
    today = today or timezone.localdate()
    rows = _warranty_rows(line_items, purchases, today)
    counts = {EXPIRED: 0, URGENT: 0, MEDIUM: 0, ACTIVE: 0}
    for row in rows:
        counts[row['status']] += 1
    return {'items': rows, 'counts': counts}
