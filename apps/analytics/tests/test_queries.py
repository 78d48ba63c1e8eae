"""
Tests for the ORM-backed analytics read model.
"""

from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest
from django.utils import timezone

from apps.analytics.analytics import AnalyticsQueries
from apps.common.exceptions import NotFound
from apps.homes.models import Area, Room
from apps.purchases.models import Attachment, Purchase
from apps.purchases.services import create_purchase


@pytest.mark.django_db
class TestDashboard:

    def test_totals_exclude_deleted_purchases(self, kitchen_purchases):
        data = AnalyticsQueries.dashboard()

        assert data['total_spent'] == Decimal('2000.00')
        assert data['purchase_count'] == 2
        assert data['supplier_count'] == 2

    def test_pending_payments(self, kitchen_purchases):
        data = AnalyticsQueries.dashboard()

        assert data['pending_payments'] == {'total': Decimal('800.00'), 'count': 1}
        assert data['by_payment_status']['paid']['total'] == Decimal('1200.00')

    def test_upcoming_payments_window(self, kitchen_purchases):
        _, counter_purchase = kitchen_purchases
        Purchase.objects.filter(id=counter_purchase.id).update(
            payment_due_date=timezone.localdate() + timedelta(days=10)
        )

        data = AnalyticsQueries.dashboard()

        assert [p['id'] for p in data['upcoming_payments']] == [str(counter_purchase.id)]

    def test_home_scope(self, kitchen_purchases, other_home):
        assert AnalyticsQueries.dashboard(home_id=other_home.id)['purchase_count'] == 0

    def test_empty_database(self, db):
        data = AnalyticsQueries.dashboard()

        assert data['total_spent'] == Decimal('0.00')
        assert data['recent_purchases'] == []


@pytest.mark.django_db
class TestReport:

    def test_by_area_and_category(self, kitchen_purchases, kitchen):
        data = AnalyticsQueries.report()

        kitchen_row = next(row for row in data['by_area'] if row['id'] == str(kitchen.id))
        assert kitchen_row['spent'] == Decimal('2000.00')
        assert kitchen_row['budget_used_percentage'] == 40.0
        assert kitchen_row['purchase_count'] == 2
        assert data['by_category']['carpentry'] == {'total': Decimal('800.00'), 'purchase_count': 1}

    def test_top_suppliers_sorted(self, kitchen_purchases):
        data = AnalyticsQueries.report()

        assert [s['display_name'] for s in data['top_suppliers']] == [
            'Baltic Tiles UAB',
            'Jonas Petraitis',
        ]

    def test_date_range(self, kitchen_purchases):
        data = AnalyticsQueries.report(start_date=date(2024, 4, 1), end_date=date(2024, 4, 30))

        assert data['total_spent'] == Decimal('800.00')
        assert [m['month'] for m in data['monthly']] == ['2024-04']

    def test_area_without_spend_is_listed(self, kitchen_purchases, home):
        garden = Area.objects.create(home=home, name='Garden')

        data = AnalyticsQueries.report(home_id=home.id)

        garden_row = next(row for row in data['by_area'] if row['id'] == str(garden.id))
        assert garden_row['spent'] == Decimal('0.00')
        assert garden_row['budget_used_percentage'] is None


@pytest.mark.django_db
class TestAreaBreakdown:

    def test_rooms_and_budget(self, kitchen_purchases, kitchen, sink, counter):
        data = AnalyticsQueries.area_breakdown(kitchen.id)

        rooms = {room['name']: room['spent'] for room in data['rooms']}
        assert data['spent'] == Decimal('2000.00')
        assert rooms == {'Sink': Decimal('1200.00'), 'Counter': Decimal('800.00')}
        assert set(data['by_category']) == {'plumbing', 'carpentry'}

    def test_room_without_spend(self, kitchen_purchases, kitchen):
        Room.objects.create(area=kitchen, name='Pantry')

        data = AnalyticsQueries.area_breakdown(kitchen.id)

        pantry = next(room for room in data['rooms'] if room['name'] == 'Pantry')
        assert pantry['spent'] == Decimal('0.00')

    def test_purchase_level_area_counts(self, company_supplier, kitchen):
        create_purchase(data={
            'supplier': str(company_supplier.id),
            'date': '2024-05-01',
            'purchase_type': 'indirect',
            'area': str(kitchen.id),
            'line_items': [{'description': 'Skip hire', 'quantity': '1', 'unit_price': '150'}],
        })

        assert AnalyticsQueries.area_breakdown(kitchen.id)['spent'] == Decimal('150.00')

    def test_unknown_area(self, db):
        with pytest.raises(NotFound):
            AnalyticsQueries.area_breakdown(uuid4())


@pytest.mark.django_db
class TestRoomSpend:

    def test_every_requested_room_present(self, kitchen_purchases, sink, counter):
        missing = uuid4()

        totals = AnalyticsQueries.room_spend([sink.id, counter.id, missing])

        assert totals == {
            sink.id: Decimal('1200.00'),
            counter.id: Decimal('800.00'),
            missing: Decimal('0.00'),
        }


@pytest.mark.django_db
class TestWarrantiesAndDocuments:

    def test_warranty_items(self, kitchen_purchases):
        data = AnalyticsQueries.warranties()

        assert [row['description'] for row in data['items']] == ['Worktop']
        assert data['items'][0]['status'] in ('expired', 'urgent', 'medium', 'active')
        assert sum(data['counts'].values()) == 1

    def test_expiring_documents(self, db):
        now = timezone.now()
        soon = Attachment.objects.create(
            file_url='https://files.example/insurance.pdf',
            file_name='insurance.pdf',
            file_type='document',
            house_document_type='insurance',
            expires_at=now + timedelta(days=5),
        )
        Attachment.objects.create(
            file_url='https://files.example/permit.pdf',
            file_name='permit.pdf',
            file_type='document',
            house_document_type='building_permit',
            expires_at=now + timedelta(days=60),
        )

        data = AnalyticsQueries.expiring_documents()

        assert data['window_days'] == 30
        assert [doc['id'] for doc in data['documents']] == [str(soon.id)]
