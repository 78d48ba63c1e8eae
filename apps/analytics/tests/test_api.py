import pytest
from decimal import Decimal
from uuid import uuid4

from django.urls import reverse
from rest_framework import status

from apps.purchases.models import Purchase


# =============================================================================
# Analytics endpoints
# =============================================================================

@pytest.mark.django_db
class TestDashboardAPI:
    """Tests for GET /api/analytics/dashboard/"""

    def test_viewer_sees_totals(self, viewer_client, kitchen_purchases):
        response = viewer_client.get(reverse('analytics:dashboard'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_spent'] == Decimal('2000.00')
        assert response.data['pending_payments']['count'] == 1

    def test_requires_identity(self, api_client):
        response = api_client.get(reverse('analytics:dashboard'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_identity_forbidden(self, identity_client):
        client = identity_client('idp|stranger', 'stranger@example.com')
        response = client.get(reverse('analytics:dashboard'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_home(self, viewer_client):
        response = viewer_client.get(reverse('analytics:dashboard'), {'home': 'nope'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'home' in response.data['details']


@pytest.mark.django_db
class TestReportAPI:
    """Tests for GET /api/analytics/reports/"""

    def test_period_filter(self, viewer_client, kitchen_purchases):
        response = viewer_client.get(reverse('analytics:report'), {'period': '2024-03'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_spent'] == Decimal('1200.00')
        assert str(response.data['period_end']) == '2024-03-31'

    def test_bad_period(self, viewer_client):
        response = viewer_client.get(reverse('analytics:report'), {'period': 'March'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'period' in response.data['details']

    def test_reversed_range(self, viewer_client):
        response = viewer_client.get(
            reverse('analytics:report'),
            {'start_date': '2024-05-01', 'end_date': '2024-04-01'},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestAreaBreakdownAPI:

    def test_area_rooms(self, viewer_client, kitchen_purchases, kitchen):
        url = reverse('analytics:area-breakdown', kwargs={'area_id': kitchen.id})
        response = viewer_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['spent'] == Decimal('2000.00')
        assert len(response.data['rooms']) == 2

    def test_missing_area(self, viewer_client):
        url = reverse('analytics:area-breakdown', kwargs={'area_id': uuid4()})
        response = viewer_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data


@pytest.mark.django_db
class TestExpiryAPI:

    def test_warranties(self, viewer_client, kitchen_purchases):
        response = viewer_client.get(reverse('analytics:warranties'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['window_days'] == 90
        assert len(response.data['items']) == 1

    def test_expiring_documents_window(self, viewer_client):
        response = viewer_client.get(reverse('analytics:expiring-documents'), {'days': 7})

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'window_days': 7, 'documents': []}

    def test_negative_window_rejected(self, viewer_client):
        response = viewer_client.get(reverse('analytics:expiring-documents'), {'days': -1})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Admin maintenance
# =============================================================================

@pytest.mark.django_db
class TestBackfillAPI:
    """Tests for POST /api/admin/backfill-home-ids/"""

    def test_admin_runs_backfill(self, admin_client, kitchen_purchases):
        Purchase.objects.update(home=None)

        response = admin_client.post(reverse('backfill-home-ids'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['updated'] == 2
        assert response.data['total'] == 2

    def test_editor_forbidden(self, editor_client):
        response = editor_client.post(reverse('backfill-home-ids'))
        assert response.status_code == status.HTTP_403_FORBIDDEN
