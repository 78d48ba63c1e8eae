"""
Suppliers app services layer.
"""

from .exceptions import (
    SuppliersServiceError,
    SupplierNotFoundError,
    InvalidSupplierError,
)

from .supplier_management import (
    create_supplier,
    get_supplier,
    search_suppliers,
    update_supplier,
    soft_delete_supplier,
)

from .supplier_matching import (
    normalize_name,
    match_supplier_name,
)


__all__ = [
    # Exceptions
    'SuppliersServiceError',
    'SupplierNotFoundError',
    'InvalidSupplierError',

    # Supplier management
    'create_supplier',
    'get_supplier',
    'search_suppliers',
    'update_supplier',
    'soft_delete_supplier',

    # Matching
    'normalize_name',
    'match_supplier_name',
]
