"""
Service layer unit tests for taxonomy app.

Tests cover:
- Category name normalization and sort order defaults
- Rename carried over to purchases
- Delete guard while purchases reference a category
- Tag uniqueness
"""

from uuid import uuid4

import pytest

from apps.purchases.models import Purchase
from apps.purchases.services import create_purchase, delete_purchase
from apps.taxonomy.models import ExpenseCategory, Tag
from apps.taxonomy.services import (
    normalize_category_name,
    list_categories,
    create_category,
    update_category,
    delete_category,
    category_usage_count,
    create_tag,
    update_tag,
    delete_tag,
    list_tags,
)
from apps.taxonomy.services.exceptions import (
    CategoryInUseError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    DuplicateTagError,
    TagNotFoundError,
)


def purchase_in(category_name, supplier):
    return create_purchase(data={
        'supplier': str(supplier.id),
        'date': '2024-02-01',
        'purchase_type': 'materials',
        'expense_category': category_name,
        'line_items': [{'description': 'Item', 'quantity': '1', 'unit_price': '10'}],
    })


@pytest.mark.django_db
class TestCategories:

    def test_normalize(self):
        assert normalize_category_name('  Heating   Works ') == 'heating_works'

    def test_create_appends_to_end(self, category, category_payload):
        created = create_category(**category_payload)

        assert created.name == 'heating_works'
        assert created.sort_order == 2

    def test_first_category_sort_order(self, category_payload):
        assert create_category(**category_payload).sort_order == 1

    def test_duplicate_after_normalization(self, category, category_payload):
        category_payload['name'] = 'Tiles'

        with pytest.raises(DuplicateCategoryError):
            create_category(**category_payload)

    def test_list_order(self, category, category_payload):
        create_category(sort_order=0, **{**category_payload, 'name': 'paint'})

        assert [c.name for c in list_categories()] == ['paint', 'tiles']

    def test_rename_updates_purchases(self, category, company_supplier):
        purchase = purchase_in('tiles', company_supplier)

        update_category(category_id=category.id, data={'name': 'Wall Tiles'})

        purchase.refresh_from_db()
        assert purchase.expense_category == 'wall_tiles'

    def test_delete_in_use_conflicts(self, category, company_supplier):
        purchase_in('tiles', company_supplier)

        with pytest.raises(CategoryInUseError):
            delete_category(category_id=category.id)
        assert ExpenseCategory.objects.filter(id=category.id).exists()

    def test_deleted_purchases_still_block_delete(self, category, company_supplier):
        purchase = purchase_in('tiles', company_supplier)
        delete_purchase(purchase_id=purchase.id)

        assert category_usage_count(name='tiles') == 1
        with pytest.raises(CategoryInUseError):
            delete_category(category_id=category.id)

    def test_delete_unused(self, category):
        delete_category(category_id=category.id)
        assert not ExpenseCategory.objects.exists()

    def test_update_missing(self, db):
        with pytest.raises(CategoryNotFoundError):
            update_category(category_id=uuid4(), data={'label': 'x'})


@pytest.mark.django_db
class TestTags:

    def test_duplicate_is_case_insensitive(self, tag):
        with pytest.raises(DuplicateTagError):
            create_tag(name='URGENT')

    def test_rename_to_taken_name(self, tag):
        other = create_tag(name='later')

        with pytest.raises(DuplicateTagError):
            update_tag(tag_id=other.id, name='Urgent')

    def test_search(self, tag):
        create_tag(name='plumbing')

        assert [t.name for t in list_tags(search='plu')] == ['plumbing']

    def test_delete(self, tag):
        delete_tag(tag_id=tag.id)

        assert not Tag.objects.exists()
        with pytest.raises(TagNotFoundError):
            delete_tag(tag_id=tag.id)

    def test_delete_detaches_from_line_items(self, tag, company_supplier):
        purchase = create_purchase(data={
            'supplier': str(company_supplier.id),
            'date': '2024-02-01',
            'purchase_type': 'materials',
            'line_items': [{
                'description': 'Pipe',
                'quantity': '1',
                'unit_price': '4',
                'tags': [str(tag.id)],
            }],
        })

        delete_tag(tag_id=tag.id)

        assert Purchase.objects.get(id=purchase.id).line_items.get().tags.count() == 0
