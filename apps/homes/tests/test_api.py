import pytest
from decimal import Decimal

from django.urls import reverse
from rest_framework import status

from apps.homes.models import Area, Home, HomeImage
from apps.purchases.services import create_purchase, delete_purchase


# =============================================================================
# Home API Tests
# =============================================================================

@pytest.mark.django_db
class TestHomeAPI:
    """Tests for /api/homes/"""

    def test_list_homes_viewer(self, viewer_client, home):
        response = viewer_client.get(reverse('homes:home-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['name'] == 'Lake House'

    def test_list_requires_identity(self, api_client, home):
        response = api_client.get(reverse('homes:home-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_viewer_cannot_create(self, viewer_client):
        response = viewer_client.post(reverse('homes:home-list'), {'name': 'Nope'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Home.objects.exists()

    def test_inactive_editor_cannot_create(self, inactive_client):
        response = inactive_client.post(reverse('homes:home-list'), {'name': 'Nope'}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_editor_creates_home(self, editor_client):
        response = editor_client.post(
            reverse('homes:home-list'),
            {'name': 'Cabin', 'address': 'Forest 3'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert Home.objects.get(id=response.data['id']).name == 'Cabin'

    def test_delete_is_soft(self, editor_client, home):
        url = reverse('homes:home-detail', kwargs={'pk': home.id})
        response = editor_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        home.refresh_from_db()
        assert home.is_deleted is True
        assert editor_client.get(url).status_code == status.HTTP_404_NOT_FOUND

    def test_patch_home(self, editor_client, home):
        url = reverse('homes:home-detail', kwargs={'pk': home.id})
        response = editor_client.patch(url, {'name_lt': 'Ezero namas'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name_lt'] == 'Ezero namas'
        assert response.data['name'] == 'Lake House'

    def test_images_add_list_delete(self, editor_client, home):
        url = reverse('homes:home-images', kwargs={'pk': home.id})
        created = editor_client.post(url, {'url': 'https://img.example.com/a.jpg'}, format='json')
        assert created.status_code == status.HTTP_201_CREATED

        listed = editor_client.get(url)
        assert [i['url'] for i in listed.data] == ['https://img.example.com/a.jpg']

        delete_url = reverse(
            'homes:home-delete-image',
            kwargs={'pk': home.id, 'image_id': created.data['id']},
        )
        assert editor_client.delete(delete_url).status_code == status.HTTP_204_NO_CONTENT
        assert not HomeImage.objects.exists()


# =============================================================================
# Area & Room API Tests
# =============================================================================

@pytest.mark.django_db
class TestAreaAPI:
    """Tests for /api/areas/ and /api/rooms/"""

    def test_create_area_with_nonpositive_budget(self, editor_client, home):
        response = editor_client.post(
            reverse('homes:area-list'),
            {'name': 'Cellar', 'home': str(home.id), 'budget': '0'},
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'budget' in response.data['details']

    def test_create_area_with_deleted_home(self, editor_client, home):
        home.soft_delete()
        response = editor_client.post(
            reverse('homes:area-list'),
            {'name': 'Cellar', 'home': str(home.id)},
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_area_with_rooms_conflicts(self, editor_client, kitchen, sink):
        url = reverse('homes:area-detail', kwargs={'pk': kitchen.id})
        response = editor_client.delete(url)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert 'room' in response.data['error']
        assert Area.objects.filter(id=kitchen.id).exists()

    def test_delete_area_after_room_removed(self, editor_client, kitchen, sink):
        room_url = reverse('homes:room-detail', kwargs={'pk': sink.id})
        assert editor_client.delete(room_url).status_code == status.HTTP_204_NO_CONTENT

        area_url = reverse('homes:area-detail', kwargs={'pk': kitchen.id})
        assert editor_client.delete(area_url).status_code == status.HTTP_204_NO_CONTENT

    def test_create_room_negative_budget(self, editor_client, kitchen):
        response = editor_client.post(
            reverse('homes:room-list'),
            {'name': 'Pantry', 'area': str(kitchen.id), 'budget': '-1'},
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_rooms_by_area(self, viewer_client, kitchen, sink, counter):
        response = viewer_client.get(reverse('homes:room-list'), {'area': str(kitchen.id)})

        assert response.status_code == status.HTTP_200_OK
        assert {r['name'] for r in response.data['results']} == {'Sink', 'Counter'}


# =============================================================================
# Attributed spend
# =============================================================================

@pytest.mark.django_db
class TestAttributedSpend:
    """List and detail responses carry spend from non-deleted purchases."""

    @pytest.fixture
    def sink_purchase(self, company_supplier, kitchen, sink):
        return create_purchase(data={
            'supplier': str(company_supplier.id),
            'date': '2024-03-10',
            'purchase_type': 'materials',
            'line_items': [{
                'description': 'Sink unit',
                'quantity': '2',
                'unit_price': '600.00',
                'area': str(kitchen.id),
                'room': str(sink.id),
            }],
        })

    def test_area_detail(self, viewer_client, kitchen, sink_purchase):
        response = viewer_client.get(reverse('homes:area-detail', kwargs={'pk': kitchen.id}))

        assert response.data['spent'] == Decimal('1200.00')

    def test_room_detail_and_list(self, viewer_client, sink, counter, sink_purchase):
        detail = viewer_client.get(reverse('homes:room-detail', kwargs={'pk': sink.id}))
        listed = viewer_client.get(reverse('homes:room-list'))

        assert detail.data['spent'] == Decimal('1200.00')
        spent = {r['name']: r['spent'] for r in listed.data['results']}
        assert spent == {'Sink': Decimal('1200.00'), 'Counter': Decimal('0.00')}

    def test_home_list(self, viewer_client, home, sink_purchase):
        response = viewer_client.get(reverse('homes:home-list'))

        assert response.data['results'][0]['spent'] == Decimal('1200.00')

    def test_deleted_purchase_not_counted(self, viewer_client, kitchen, sink_purchase):
        delete_purchase(purchase_id=sink_purchase.id)

        response = viewer_client.get(reverse('homes:area-detail', kwargs={'pk': kitchen.id}))

        assert response.data['spent'] == Decimal('0.00')
