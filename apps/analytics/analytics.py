"""
Analytics Module
=================

This module provides the ORM-backed read model for spending reports.
It fetches purchases, line items and house documents through the
soft-delete predicate and hands the rows to the pure functions in
``apps.analytics.aggregation``, which do all of the arithmetic.

Classes:
    AnalyticsQueries: Static methods for the dashboard, reports, area
        breakdowns, warranties and expiring documents.

Key Features:
    - Dashboard totals with pending payments and upcoming due dates
    - Date-ranged reports by area, supplier, type, category and month
    - Per-area breakdown with per-room spend and budget usage
    - Warranty buckets and expiring house documents

Example:
    Getting a report for one home::

        from apps.analytics.analytics import AnalyticsQueries

        report = AnalyticsQueries.report(
            home_id=home.id,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31),
        )
        print(f"Spent {report['total_spent']} EUR")

Note:
    This module is read-only and doesn't modify any data. All methods
    are static and can be called without instantiation. The selected home
    is always an explicit argument.
"""

from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db.models import Q
from django.utils import timezone

from apps.analytics import aggregation
from apps.common.exceptions import NotFound
from apps.common.models import deleted, not_deleted
from apps.homes.models import Area, Room
from apps.purchases.models import OUTSTANDING_STATUSES, Attachment, Purchase, PurchaseLineItem

TOP_SUPPLIERS_LIMIT = 10
RECENT_PURCHASES_LIMIT = 5


def _purchases(home_id=None, start_date=None, end_date=None):
    """Alive purchases of alive suppliers and homes, optionally scoped."""
    queryset = (
        Purchase.objects.alive()
        .filter(not_deleted('supplier'))
        .exclude(deleted('home'))
    )
    if home_id:
        queryset = queryset.filter(home_id=home_id)
    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)
    return queryset


def _line_items(purchases):
    return PurchaseLineItem.objects.filter(purchase__in=purchases)


def _room_area_index(**filters):
    return dict(Room.objects.filter(**filters).values_list('id', 'area_id'))


class _PurchaseRow:
    """A purchase with no attributed line items, seen as one line."""

    def __init__(self, purchase):
        self.purchase_id = purchase.id
        self.area_id = purchase.area_id
        self.room_id = purchase.room_id
        self.total_price = purchase.total_amount


def _attributed_rows(line_items, purchases):
    """
    Rows that carry area/room attribution: overriding line items, plus the
    purchase itself for purchases none of whose lines override.
    """
    overridden = {i.purchase_id for i in line_items if i.area_id or i.room_id}
    rows = [i for i in line_items if i.area_id or i.room_id]
    rows += [_PurchaseRow(p) for p in purchases if p.id not in overridden]
    return rows


def _share(spent, budget):
    """Percentage of budget used, or None without a budget."""
    if not budget:
        return None
    return float(round(spent / budget * 100, 1))


def _purchase_summary(purchase):
    return {
        'id': str(purchase.id),
        'date': purchase.date,
        'supplier_name': purchase.supplier.display_name,
        'purchase_type': purchase.purchase_type,
        'total_amount': purchase.total_amount,
        'currency': purchase.currency,
        'payment_status': purchase.payment_status,
        'payment_due_date': purchase.payment_due_date,
    }


def _warranty_row(row):
    item = row['line_item']
    purchase = row['purchase']
    return {
        'line_item_id': str(item.id),
        'description': item.description,
        'brand': item.brand,
        'purchase_id': str(purchase.id),
        'purchase_date': purchase.date,
        'supplier_name': purchase.supplier.display_name,
        'warranty_months': item.warranty_months,
        'expires_at': row['expires_at'],
        'days_remaining': row['days_remaining'],
        'status': row['status'],
    }


def _document_row(attachment):
    return {
        'id': str(attachment.id),
        'title': attachment.document_title or attachment.file_name,
        'house_document_type': attachment.house_document_type,
        'file_url': attachment.file_url,
        'expires_at': attachment.expires_at,
        'purchase_id': str(attachment.purchase_id) if attachment.purchase_id else None,
        'room_id': str(attachment.room_id) if attachment.room_id else None,
    }


class AnalyticsQueries:
    """
    Read-model queries for the analytics endpoints.

    Every method loads the relevant rows once, excludes soft-deleted
    purchases (and purchases of deleted suppliers or homes), and delegates
    the sums to ``aggregation``. Return values are plain dicts ready for a
    DRF ``Response``; money stays ``Decimal``.

    Methods:
        dashboard: Headline numbers for the landing page.
        report: Date-ranged spend breakdowns.
        area_breakdown: One area with its rooms and categories.
        room_spend: Spend for a set of rooms.
        warranties: Warranty overview plus the ones running out soon.
        expiring_documents: House documents expiring soon.
    """

    @staticmethod
    def dashboard(home_id=None):
        """
        Calculate the dashboard summary.

        Args:
            home_id (UUID, optional): Restrict to purchases of one home.

        Returns:
            dict: Dashboard data containing:
                - total_spent (Decimal): Sum of all purchase totals
                - purchase_count (int): Number of purchases
                - supplier_count (int): Number of distinct suppliers used
                - pending_payments (dict): ``total`` and ``count`` over
                  pending and partially paid purchases
                - by_payment_status (dict): status -> total/purchase_count
                - by_type (dict): purchase type -> total
                - recent_purchases (list): Latest purchases, newest first
                - upcoming_payments (list): Outstanding purchases due within
                  ``UPCOMING_PAYMENTS_WINDOW_DAYS``, soonest first

        Example:
            >>> AnalyticsQueries.dashboard()['pending_payments']
            {'total': Decimal('264.90'), 'count': 1}
        """
        purchases = list(_purchases(home_id).select_related('supplier'))

        by_status = aggregation.spend_by_payment_status(purchases)
        pending_total = sum(
            (by_status[s]['total'] for s in OUTSTANDING_STATUSES if s in by_status),
            Decimal('0.00'),
        )
        pending_count = sum(
            by_status[s]['purchase_count'] for s in OUTSTANDING_STATUSES if s in by_status
        )

        today = timezone.localdate()
        horizon = today + timedelta(days=settings.UPCOMING_PAYMENTS_WINDOW_DAYS)
        upcoming = sorted(
            (
                p for p in purchases
                if p.payment_status in OUTSTANDING_STATUSES
                and p.payment_due_date is not None
                and today <= p.payment_due_date <= horizon
            ),
            key=lambda p: p.payment_due_date,
        )

        totals = aggregation.spend_by_home(purchases)
        return {
            'total_spent': sum(totals.values(), Decimal('0.00')),
            'purchase_count': len(purchases),
            'supplier_count': len({p.supplier_id for p in purchases}),
            'pending_payments': {'total': pending_total, 'count': pending_count},
            'by_payment_status': by_status,
            'by_type': aggregation.spend_by_type(purchases),
            'recent_purchases': [
                _purchase_summary(p) for p in purchases[:RECENT_PURCHASES_LIMIT]
            ],
            'upcoming_payments': [_purchase_summary(p) for p in upcoming],
        }

    @staticmethod
    def report(home_id=None, start_date=None, end_date=None):
        """
        Calculate spend breakdowns for a date range.

        Args:
            home_id (UUID, optional): Restrict to one home; its areas are
                listed even when nothing was spent on them.
            start_date (date, optional): First purchase date to include.
            end_date (date, optional): Last purchase date to include.

        Returns:
            dict: Report data containing:
                - period_start / period_end (date | None)
                - total_spent (Decimal)
                - purchase_count (int)
                - by_area (list): id, name, spent, budget,
                  budget_used_percentage, purchase_count; highest spend first
                - top_suppliers (list): id, display_name, total,
                  purchase_count; at most ten
                - by_type (dict): purchase type -> total
                - by_category (dict): category -> total/purchase_count
                - monthly (list): month, total, purchase_count
        """
        purchases = list(_purchases(home_id, start_date, end_date).select_related('supplier'))
        line_items = list(_line_items([p.id for p in purchases]))

        areas = Area.objects.exclude(deleted('home'))
        if home_id:
            areas = areas.filter(home_id=home_id)
        areas = list(areas)
        room_area_index = _room_area_index()
        by_area = aggregation.spend_by_area(
            line_items,
            purchases,
            area_ids=[a.id for a in areas],
            room_area_index=room_area_index,
        )

        contributors = {}
        for row in _attributed_rows(line_items, purchases):
            area_id = aggregation.item_area(row, room_area_index)
            if area_id is not None:
                contributors.setdefault(area_id, set()).add(row.purchase_id)

        area_rows = [
            {
                'id': str(area.id),
                'name': area.name,
                'spent': by_area.get(area.id, Decimal('0.00')),
                'budget': area.budget,
                'budget_used_percentage': _share(by_area.get(area.id, Decimal('0.00')), area.budget),
                'purchase_count': len(contributors.get(area.id, ())),
            }
            for area in areas
        ]
        area_rows.sort(key=lambda row: row['spent'], reverse=True)

        suppliers = {p.supplier_id: p.supplier for p in purchases}
        supplier_rows = [
            {
                'id': str(supplier_id),
                'display_name': suppliers[supplier_id].display_name,
                'total': group['total'],
                'purchase_count': group['purchase_count'],
            }
            for supplier_id, group in aggregation.spend_by_supplier(purchases).items()
        ]
        supplier_rows.sort(key=lambda row: row['total'], reverse=True)

        return {
            'period_start': start_date,
            'period_end': end_date,
            'total_spent': sum(aggregation.spend_by_home(purchases).values(), Decimal('0.00')),
            'purchase_count': len(purchases),
            'by_area': area_rows,
            'top_suppliers': supplier_rows[:TOP_SUPPLIERS_LIMIT],
            'by_type': aggregation.spend_by_type(purchases),
            'by_category': aggregation.spend_by_category(line_items, purchases),
            'monthly': aggregation.monthly_spending(purchases),
        }

    @staticmethod
    def area_breakdown(area_id):
        """
        Spend of one area, split by room and by category.

        Args:
            area_id (UUID): Area to analyse.

        Returns:
            dict: ``id``, ``name``, ``home_id``, ``budget``, ``spent``,
            ``budget_used_percentage``, ``rooms`` (each with ``spent`` and
            ``budget``) and ``by_category``.

        Raises:
            NotFound: If the area does not exist or belongs to a deleted home.
        """
        area = (
            Area.objects.exclude(deleted('home'))
            .prefetch_related('rooms')
            .filter(id=area_id)
            .first()
        )
        if area is None:
            raise NotFound(f'Area with ID {area_id} not found.')

        rooms = list(area.rooms.all())
        room_ids = [room.id for room in rooms]
        in_area = (
            Q(area_id=area.id) | Q(room_id__in=room_ids)
            | Q(line_items__area_id=area.id) | Q(line_items__room_id__in=room_ids)
        )
        purchases = list(_purchases().filter(in_area).distinct())
        line_items = list(_line_items([p.id for p in purchases]))
        room_area_index = _room_area_index()

        spent = aggregation.spend_by_area(
            line_items, purchases, area_ids=[area.id], room_area_index=room_area_index
        )[area.id]
        by_room = aggregation.spend_by_room(line_items, purchases, room_ids=room_ids)

        # Category totals only count what is attributed to this area
        area_rows = [
            row for row in _attributed_rows(line_items, purchases)
            if aggregation.item_area(row, room_area_index) == area.id
        ]

        return {
            'id': str(area.id),
            'name': area.name,
            'home_id': str(area.home_id) if area.home_id else None,
            'budget': area.budget,
            'spent': spent,
            'budget_used_percentage': _share(spent, area.budget),
            'rooms': [
                {
                    'id': str(room.id),
                    'name': room.name,
                    'budget': room.budget,
                    'spent': by_room[room.id],
                }
                for room in rooms
            ],
            'by_category': aggregation.spend_by_category(area_rows, purchases),
        }

    @staticmethod
    def home_spend():
        """Purchase totals per home id; unattributed purchases are dropped."""
        totals = aggregation.spend_by_home(_purchases())
        totals.pop(None, None)
        return totals

    @staticmethod
    def area_spend(area_ids=()):
        """
        Attributed spend per area.

        Args:
            area_ids (list[UUID]): Areas that must appear even with no spend.

        Returns:
            dict: area_id -> Decimal
        """
        purchases = list(_purchases())
        return aggregation.spend_by_area(
            _line_items([p.id for p in purchases]),
            purchases,
            area_ids=area_ids,
            room_area_index=_room_area_index(),
        )

    @staticmethod
    def room_spend(room_ids):
        """
        Spend per room.

        Args:
            room_ids (list[UUID]): Rooms to report; every id appears in the
                result, with zero when nothing was spent.

        Returns:
            dict: room_id -> Decimal
        """
        room_ids = list(room_ids)
        in_rooms = Q(room_id__in=room_ids) | Q(line_items__room_id__in=room_ids)
        purchases = list(_purchases().filter(in_rooms).distinct())
        line_items = _line_items([p.id for p in purchases])
        totals = aggregation.spend_by_room(line_items, purchases, room_ids=room_ids)
        return {room_id: totals[room_id] for room_id in room_ids}

    @staticmethod
    def warranties(home_id=None):
        """
        Warranty status of every line item that carries one.

        Args:
            home_id (UUID, optional): Restrict to purchases of one home.

        Returns:
            dict: Warranty data containing:
                - items (list): every warranty with expiry and status
                - counts (dict): expired/urgent/medium/active -> int
                - expiring (list): warranties ending within
                  ``EXPIRING_WARRANTIES_WINDOW_DAYS``
                - window_days (int)
        """
        purchases = list(_purchases(home_id).select_related('supplier'))
        line_items = list(
            _line_items([p.id for p in purchases]).filter(warranty_months__isnull=False)
        )
        window = settings.EXPIRING_WARRANTIES_WINDOW_DAYS

        overview = aggregation.warranty_overview(line_items, purchases)
        expiring = aggregation.expiring_warranties(line_items, purchases, window)
        return {
            'items': [_warranty_row(row) for row in overview['items']],
            'counts': overview['counts'],
            'expiring': [_warranty_row(row) for row in expiring],
            'window_days': window,
        }

    @staticmethod
    def expiring_documents(window_days=None):
        """
        House documents whose ``expires_at`` falls within the window.

        Args:
            window_days (int, optional): Defaults to
                ``EXPIRING_DOCUMENTS_WINDOW_DAYS``.

        Returns:
            dict: ``window_days`` and ``documents``, soonest expiry first.
        """
        if window_days is None:
            window_days = settings.EXPIRING_DOCUMENTS_WINDOW_DAYS
        attachments = (
            Attachment.objects
            .filter(house_document_type__isnull=False, expires_at__isnull=False)
            .exclude(deleted('purchase'))
        )
        documents = aggregation.expiring_documents(attachments, window_days)
        return {
            'window_days': window_days,
            'documents': [_document_row(doc) for doc in documents],
        }
