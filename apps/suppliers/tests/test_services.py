"""
Service layer unit tests for suppliers app.
"""

import pytest

from apps.suppliers.models import Supplier, SupplierType
from apps.suppliers.services import (
    create_supplier,
    get_supplier,
    search_suppliers,
    update_supplier,
    soft_delete_supplier,
    normalize_name,
    match_supplier_name,
)
from apps.suppliers.services.exceptions import InvalidSupplierError, SupplierNotFoundError


@pytest.mark.django_db
class TestSupplierManagement:
    """Tests for supplier_management.py service functions."""

    def test_company_requires_company_name(self):
        with pytest.raises(InvalidSupplierError) as exc_info:
            create_supplier(type=SupplierType.COMPANY, company_name='  ')
        assert 'company_name' in exc_info.value.errors

    def test_individual_reports_all_missing_names(self):
        """Both name fields are reported at once."""
        with pytest.raises(InvalidSupplierError) as exc_info:
            create_supplier(type=SupplierType.INDIVIDUAL)
        assert set(exc_info.value.errors) == {'first_name', 'last_name'}

    def test_create_individual(self):
        supplier = create_supplier(
            type=SupplierType.INDIVIDUAL, first_name='Ona', last_name='Kazlauskiene', email=None
        )
        assert supplier.display_name == 'Ona Kazlauskiene'
        assert supplier.email == ''

    def test_switching_type_revalidates(self, company_supplier):
        with pytest.raises(InvalidSupplierError):
            update_supplier(
                supplier_id=company_supplier.id, data={'type': SupplierType.INDIVIDUAL}
            )

    def test_soft_delete_hides_supplier(self, company_supplier, individual_supplier):
        soft_delete_supplier(supplier_id=company_supplier.id)

        assert list(search_suppliers()) == [individual_supplier]
        with pytest.raises(SupplierNotFoundError):
            get_supplier(supplier_id=company_supplier.id)
        assert Supplier.objects.filter(id=company_supplier.id).exists()

    def test_search_by_last_name(self, company_supplier, individual_supplier):
        assert list(search_suppliers(search='petrait')) == [individual_supplier]


@pytest.mark.django_db
class TestSupplierMatching:
    """Tests for supplier_matching.py."""

    def test_normalize_drops_legal_form(self):
        assert normalize_name('Baltic Tiles, UAB') == 'baltic tiles'

    def test_matches_invoice_spelling(self, company_supplier, individual_supplier):
        matches = match_supplier_name(name='UAB "Baltic Tiles"')

        assert matches[0][0] == company_supplier
        assert matches[0][1] >= 85

    def test_no_match_for_unrelated_name(self, company_supplier):
        assert match_supplier_name(name='Nordic Windows') == []

    def test_deleted_supplier_not_matched(self, company_supplier):
        company_supplier.soft_delete()
        assert match_supplier_name(name='Baltic Tiles') == []
