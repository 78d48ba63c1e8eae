"""
Supplier management service.

Handles supplier CRUD (soft delete) and search.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.suppliers.models import Supplier, SupplierType

from .exceptions import InvalidSupplierError, SupplierNotFoundError

logger = logging.getLogger(__name__)

SUPPLIER_FIELDS = (
    'type',
    'company_name',
    'company_address',
    'first_name',
    'last_name',
    'email',
    'phone',
    'notes',
    'rating',
)


def validate_supplier_identity(supplier: Supplier) -> None:
    """
    Check the name fields required by the supplier type.

    Raises:
        InvalidSupplierError: With every missing field listed
    """
    errors = {}
    if supplier.type == SupplierType.COMPANY:
        if not (supplier.company_name or '').strip():
            errors['company_name'] = ['Company name is required for company suppliers.']
    else:
        if not (supplier.first_name or '').strip():
            errors['first_name'] = ['First name is required for individual suppliers.']
        if not (supplier.last_name or '').strip():
            errors['last_name'] = ['Last name is required for individual suppliers.']

    if errors:
        raise InvalidSupplierError(errors=errors, detail='Invalid supplier data.')


def _apply(supplier, data):
    for key, value in data.items():
        if key in SUPPLIER_FIELDS:
            setattr(supplier, key, '' if value is None and key != 'rating' else value)


def create_supplier(*, type: str, **fields) -> Supplier:
    """
    Create a supplier.

    Raises:
        InvalidSupplierError: If the name fields for the type are missing
    """
    supplier = Supplier(type=type)
    _apply(supplier, fields)
    validate_supplier_identity(supplier)
    supplier.save()
    logger.info('Supplier %s created (%s)', supplier.id, supplier.display_name)
    return supplier


def get_supplier(*, supplier_id: UUID) -> Supplier:
    try:
        return Supplier.objects.alive().get(id=supplier_id)
    except Supplier.DoesNotExist:
        raise SupplierNotFoundError(f"Supplier with ID {supplier_id} not found")


def search_suppliers(*, search: Optional[str] = None) -> QuerySet:
    """List live suppliers, optionally filtered by name or email."""
    queryset = Supplier.objects.alive()
    if search:
        queryset = queryset.filter(
            Q(company_name__icontains=search) |
            Q(first_name__icontains=search) |
            Q(last_name__icontains=search) |
            Q(email__icontains=search)
        )
    return queryset


@transaction.atomic
def update_supplier(*, supplier_id: UUID, data: dict) -> Supplier:
    try:
        supplier = Supplier.objects.alive().select_for_update().get(id=supplier_id)
    except Supplier.DoesNotExist:
        raise SupplierNotFoundError(f"Supplier with ID {supplier_id} not found")

    _apply(supplier, data)
    validate_supplier_identity(supplier)
    supplier.save()
    return supplier


@transaction.atomic
def soft_delete_supplier(*, supplier_id: UUID) -> None:
    """Flag a supplier as deleted; its purchases keep the reference."""
    supplier = get_supplier(supplier_id=supplier_id)
    supplier.soft_delete()
    logger.info('Supplier %s soft-deleted', supplier_id)
