import pytest

from apps.purchases.services import create_purchase, delete_purchase


def line(description, amount, **attribution):
    return {
        'description': description,
        'quantity': '1',
        'unit_price': amount,
        **{key: str(value) for key, value in attribution.items()},
    }


@pytest.fixture
def kitchen_purchases(company_supplier, individual_supplier, kitchen, sink, counter):
    """
    Kitchen spend: 1200 on the sink, 800 on the counter, plus a deleted
    500 purchase that must not count.
    """
    sink_purchase = create_purchase(data={
        'supplier': str(company_supplier.id),
        'date': '2024-03-10',
        'purchase_type': 'materials',
        'expense_category': 'plumbing',
        'payment_status': 'paid',
        'line_items': [line('Sink unit', '1200.00', area=kitchen.id, room=sink.id)],
    })
    counter_purchase = create_purchase(data={
        'supplier': str(individual_supplier.id),
        'date': '2024-04-02',
        'purchase_type': 'service',
        'expense_category': 'carpentry',
        'line_items': [
            line('Worktop', '500.00', area=kitchen.id, room=counter.id, warranty_months=24),
            line('Fitting', '300.00', area=kitchen.id, room=counter.id),
        ],
    })
    removed = create_purchase(data={
        'supplier': str(company_supplier.id),
        'date': '2024-04-05',
        'purchase_type': 'materials',
        'line_items': [line('Returned tap', '500.00', area=kitchen.id, room=sink.id)],
    })
    delete_purchase(purchase_id=removed.id)
    return sink_purchase, counter_purchase
