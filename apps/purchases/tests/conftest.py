import pytest

from apps.purchases.services import create_purchase
from apps.taxonomy.models import Tag


@pytest.fixture
def tile_tag(db):
    return Tag.objects.create(name='tiles', color='#A47449')


@pytest.fixture
def purchase_payload(company_supplier):
    """Return a factory for valid purchase payloads."""

    def build(**overrides):
        payload = {
            'supplier': str(company_supplier.id),
            'date': '2024-03-15',
            'purchase_type': 'materials',
            'expense_category': 'tiles',
            'line_items': [
                {'description': 'Floor tiles', 'quantity': '12.5', 'unit_price': '20.00'},
                {'description': 'Grout', 'quantity': '2', 'unit_price': '7.45'},
            ],
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def purchase(purchase_payload, kitchen, sink):
    """Purchase of 264.90 with one line item in the sink room."""
    return create_purchase(data=purchase_payload(line_items=[
        {
            'description': 'Floor tiles',
            'quantity': '12.5',
            'unit_price': '20.00',
            'area': str(kitchen.id),
            'room': str(sink.id),
            'warranty_months': 24,
        },
        {'description': 'Grout', 'quantity': '2', 'unit_price': '7.45'},
    ]))
