import pytest
from django.urls import reverse
from rest_framework import status

from apps.suppliers.models import Supplier


@pytest.mark.django_db
class TestSupplierAPI:
    """Tests for /api/suppliers/"""

    def test_list_suppliers(self, viewer_client, company_supplier, individual_supplier):
        response = viewer_client.get(reverse('suppliers:supplier-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

    def test_search_suppliers(self, viewer_client, company_supplier, individual_supplier):
        response = viewer_client.get(reverse('suppliers:supplier-list'), {'search': 'baltic'})
        assert [s['display_name'] for s in response.data['results']] == ['Baltic Tiles UAB']

    def test_create_company(self, editor_client):
        response = editor_client.post(
            reverse('suppliers:supplier-list'),
            {'type': 'company', 'company_name': 'Wood & Co', 'rating': 5},
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['display_name'] == 'Wood & Co'

    def test_create_invalid_rating(self, editor_client):
        response = editor_client.post(
            reverse('suppliers:supplier-list'),
            {'type': 'company', 'company_name': 'Wood & Co', 'rating': 6},
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'rating' in response.data['details']

    def test_create_individual_missing_names(self, editor_client):
        response = editor_client.post(
            reverse('suppliers:supplier-list'), {'type': 'individual'}, format='json'
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert set(response.data['details']) == {'first_name', 'last_name'}

    def test_viewer_cannot_delete(self, viewer_client, company_supplier):
        url = reverse('suppliers:supplier-detail', kwargs={'pk': company_supplier.id})
        assert viewer_client.delete(url).status_code == status.HTTP_403_FORBIDDEN

    def test_delete_is_soft(self, editor_client, company_supplier):
        url = reverse('suppliers:supplier-detail', kwargs={'pk': company_supplier.id})
        response = editor_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Supplier.objects.get(id=company_supplier.id).is_deleted is True
