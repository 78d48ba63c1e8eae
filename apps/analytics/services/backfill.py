"""
Home-id backfill.

Purchases recorded before homes existed have no home. The backfill infers
one from the areas their line items point at and writes it only when the
answer is a single home.
"""

import logging

from django.db import transaction

from apps.analytics.aggregation import AMBIGUOUS, UNKNOWN, infer_home_id
from apps.common.models import deleted
from apps.homes.models import Area, Room
from apps.purchases.models import Purchase, PurchaseLineItem

logger = logging.getLogger(__name__)


def backfill_home_ids(*, dry_run: bool = False) -> dict:
    """
    Assign a home to every alive purchase that lacks one.

    Each purchase is saved in its own savepoint, so one bad row is logged
    and counted without stopping the rest of the batch.

    Args:
        dry_run: Count what would change without writing

    Returns:
        dict: ``updated``, ``skipped`` (no home could be inferred),
        ``ambiguous`` (areas span several homes), ``failed`` and ``total``
    """
    purchases = list(Purchase.objects.alive().filter(home__isnull=True))
    counts = {'updated': 0, 'skipped': 0, 'ambiguous': 0, 'failed': 0, 'total': len(purchases)}
    if not purchases:
        return counts

    line_items = list(
        PurchaseLineItem.objects
        .filter(purchase__in=[p.id for p in purchases])
        .only('id', 'purchase_id', 'area_id', 'room_id')
    )
    room_area_index = dict(Room.objects.values_list('id', 'area_id'))
    area_home_index = dict(Area.objects.exclude(deleted('home')).values_list('id', 'home_id'))

    by_purchase = {}
    for item in line_items:
        by_purchase.setdefault(item.purchase_id, []).append(item)

    for purchase in purchases:
        try:
            result = infer_home_id(
                purchase,
                by_purchase.get(purchase.id, []),
                area_home_index,
                room_area_index,
            )
            if result == AMBIGUOUS:
                logger.warning('Purchase %s spans several homes; left unset', purchase.id)
                counts['ambiguous'] += 1
                continue
            if result == UNKNOWN:
                counts['skipped'] += 1
                continue

            if not dry_run:
                with transaction.atomic():
                    Purchase.objects.filter(id=purchase.id, home__isnull=True).update(home_id=result)
            counts['updated'] += 1
        except Exception:
            logger.exception('Backfill failed for purchase %s', purchase.id)
            counts['failed'] += 1

    logger.info(
        'Home backfill%s: %s',
        ' (dry run)' if dry_run else '',
        ', '.join(f'{key}={value}' for key, value in counts.items()),
    )
    return counts
