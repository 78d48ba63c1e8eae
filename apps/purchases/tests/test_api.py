import pytest
from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

from django.urls import reverse
from rest_framework import status

from apps.purchases.models import Attachment, Purchase
from apps.purchases.services.exceptions import InvoiceExtractionError


# =============================================================================
# Purchase CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestPurchaseList:
    """Tests for GET /api/purchases/"""

    def test_viewer_lists_purchases(self, viewer_client, purchase):
        response = viewer_client.get(reverse('purchases:purchase-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        result = response.data['results'][0]
        assert result['supplier']['display_name'] == 'Baltic Tiles UAB'
        assert result['line_item_count'] == 2

    def test_requires_identity(self, api_client):
        response = api_client.get(reverse('purchases:purchase-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_filter_by_area(self, viewer_client, purchase, kitchen):
        other = viewer_client.get(reverse('purchases:purchase-list'), {'area': str(uuid4())})
        mine = viewer_client.get(reverse('purchases:purchase-list'), {'area': str(kitchen.id)})

        assert other.data['count'] == 0
        assert mine.data['count'] == 1

    def test_invalid_date_range(self, viewer_client):
        response = viewer_client.get(
            reverse('purchases:purchase-list'),
            {'date_from': '2024-05-01', 'date_to': '2024-04-01'},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'date_to' in response.data['details']


@pytest.mark.django_db
class TestPurchaseCreate:
    """Tests for POST /api/purchases/"""

    def test_editor_creates_purchase(self, editor_client, purchase_payload):
        response = editor_client.post(reverse('purchases:purchase-list'), purchase_payload(), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['total_amount'] == Decimal('264.90')
        assert [item['total_price'] for item in response.data['line_items']] == [
            Decimal('250.00'),
            Decimal('14.90'),
        ]

    def test_viewer_cannot_create(self, viewer_client, purchase_payload):
        response = viewer_client.post(reverse('purchases:purchase-list'), purchase_payload(), format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Purchase.objects.exists()

    def test_validation_errors_aggregated(self, editor_client, purchase_payload):
        payload = purchase_payload(date='not-a-date', line_items=[
            {'description': 'Paint', 'quantity': '-2', 'unit_price': '5'},
        ])

        response = editor_client.post(reverse('purchases:purchase-list'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Purchase data is invalid.'
        assert 'date' in response.data['details']
        assert 'quantity' in response.data['details']['line_items'][0]

    def test_oversized_line_total_is_400(self, editor_client, purchase_payload):
        payload = purchase_payload(line_items=[
            {'description': 'Marble', 'quantity': '9999999.999', 'unit_price': '9999999999.99'},
        ])

        response = editor_client.post(reverse('purchases:purchase-list'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'total_price' in response.data['details']['line_items'][0]
        assert not Purchase.objects.exists()

        listing = editor_client.get(reverse('purchases:purchase-list'))
        assert listing.status_code == status.HTTP_200_OK


@pytest.mark.django_db
class TestPurchaseDetail:
    """Tests for /api/purchases/{id}/"""

    def test_retrieve_with_line_items(self, viewer_client, purchase):
        url = reverse('purchases:purchase-detail', kwargs={'pk': purchase.id})
        response = viewer_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['line_items']) == 2
        assert response.data['line_items'][0]['room_name'] == 'Sink'

    def test_put_replaces_line_items(self, editor_client, purchase, purchase_payload):
        url = reverse('purchases:purchase-detail', kwargs={'pk': purchase.id})
        payload = purchase_payload(line_items=[
            {'description': 'Adhesive', 'quantity': '4', 'unit_price': '9.99'},
        ])

        response = editor_client.put(url, payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert [item['description'] for item in response.data['line_items']] == ['Adhesive']
        assert response.data['total_amount'] == Decimal('39.96')

    def test_patch_not_allowed(self, editor_client, purchase):
        url = reverse('purchases:purchase-detail', kwargs={'pk': purchase.id})
        response = editor_client.patch(url, {'notes': 'x'}, format='json')
        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

    def test_delete_is_soft(self, editor_client, purchase):
        url = reverse('purchases:purchase-detail', kwargs={'pk': purchase.id})

        response = editor_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Purchase.objects.filter(id=purchase.id, is_deleted=True).exists()
        assert editor_client.get(url).status_code == status.HTTP_404_NOT_FOUND

    def test_missing_purchase(self, viewer_client):
        url = reverse('purchases:purchase-detail', kwargs={'pk': uuid4()})
        response = viewer_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'].startswith('Purchase with ID')


# =============================================================================
# Attachments and documents
# =============================================================================

@pytest.mark.django_db
class TestAttachmentsAPI:

    def test_add_and_list_purchase_attachments(self, editor_client, purchase):
        url = reverse('purchases:purchase-attachments', kwargs={'pk': purchase.id})

        created = editor_client.post(url, {
            'file_url': 'https://files.example/invoice.pdf',
            'file_name': 'invoice.pdf',
            'file_type': 'invoice',
        }, format='json')
        listed = editor_client.get(url)

        assert created.status_code == status.HTTP_201_CREATED
        assert created.data['purchase'] == purchase.id
        assert [a['file_name'] for a in listed.data] == ['invoice.pdf']

    def test_patch_and_delete_attachment(self, editor_client, purchase):
        attachment = Attachment.objects.create(
            purchase=purchase,
            file_url='https://files.example/a.jpg',
            file_name='a.jpg',
            file_type='photo',
        )
        url = reverse('purchases:attachment-detail', kwargs={'pk': attachment.id})

        patched = editor_client.patch(url, {'document_title': 'Before photo'}, format='json')
        deleted = editor_client.delete(url)

        assert patched.status_code == status.HTTP_200_OK
        assert patched.data['document_title'] == 'Before photo'
        assert deleted.status_code == status.HTTP_204_NO_CONTENT
        assert not Attachment.objects.filter(id=attachment.id).exists()

    def test_documents_create_and_filter(self, editor_client):
        url = reverse('purchases:documents')

        created = editor_client.post(url, {
            'file_url': 'https://files.example/permit.pdf',
            'file_name': 'permit.pdf',
            'house_document_type': 'building_permit',
        }, format='json')
        by_type = editor_client.get(url, {'type': 'building_permit'})
        other_type = editor_client.get(url, {'type': 'insurance'})

        assert created.status_code == status.HTTP_201_CREATED
        assert len(by_type.data) == 1
        assert other_type.data == []

    def test_viewer_cannot_add_document(self, viewer_client):
        response = viewer_client.post(reverse('purchases:documents'), {
            'file_url': 'https://files.example/permit.pdf',
            'file_name': 'permit.pdf',
            'house_document_type': 'building_permit',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Invoice extraction
# =============================================================================

@pytest.mark.django_db
class TestExtractInvoiceAPI:
    """Tests for POST /api/purchases/extract-invoice/"""

    @patch('apps.purchases.views.extract_invoice')
    def test_returns_validated_suggestion(self, mock_extract, editor_client, company_supplier):
        mock_extract.return_value = {
            'date': '2024-04-02',
            'supplierName': 'Baltic Tiles',
            'lineItems': [{'description': 'Tiles', 'quantity': 2, 'unitPrice': 10}],
        }

        response = editor_client.post(
            reverse('purchases:purchase-extract'),
            {'image_base64': 'aGVsbG8=', 'mime_type': 'image/png'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.data['data']
        assert body['errors'] == {}
        assert body['supplier_suggestions'][0]['id'] == company_supplier.id
        assert not Purchase.objects.exists()

    @patch('apps.purchases.views.extract_invoice')
    def test_parse_failure_returns_raw_response(self, mock_extract, editor_client):
        mock_extract.side_effect = InvoiceExtractionError(
            detail='Failed to parse invoice data',
            raw_response='sorry, blurry image',
        )

        response = editor_client.post(
            reverse('purchases:purchase-extract'),
            {'image_base64': 'aGVsbG8='},
            format='json',
        )

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['raw_response'] == 'sorry, blurry image'

    def test_image_required(self, editor_client):
        response = editor_client.post(reverse('purchases:purchase-extract'), {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'image_base64' in response.data['details']
