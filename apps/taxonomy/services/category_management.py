"""
Expense category management service.

Purchases reference categories by name, so renaming a category rewrites
the references and deleting one is refused while any purchase uses it.
"""

import logging
import re
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import Max, QuerySet

from apps.purchases.models import Purchase
from apps.taxonomy.models import ExpenseCategory

from .exceptions import CategoryInUseError, CategoryNotFoundError, DuplicateCategoryError

logger = logging.getLogger(__name__)

CATEGORY_FIELDS = ('label', 'icon_name', 'color', 'bg_color', 'sort_order')


def normalize_category_name(name: str) -> str:
    """``'Heating Works'`` -> ``'heating_works'``."""
    return re.sub(r'\s+', '_', name.strip().lower())


def list_categories() -> QuerySet:
    return ExpenseCategory.objects.order_by('sort_order', 'name')


def get_category(*, category_id: UUID) -> ExpenseCategory:
    try:
        return ExpenseCategory.objects.get(id=category_id)
    except ExpenseCategory.DoesNotExist:
        raise CategoryNotFoundError(f"Category with ID {category_id} not found")


def category_usage_count(*, name: str) -> int:
    """Number of purchases referencing the category, deleted ones included."""
    return Purchase.objects.filter(expense_category=name).count()


def create_category(
    *,
    name: str,
    label: str,
    icon_name: str,
    color: str,
    bg_color: str,
    sort_order: Optional[int] = None,
) -> ExpenseCategory:
    """
    Create a category at the end of the list unless sort_order is given.

    Raises:
        DuplicateCategoryError: If the normalized name is taken
    """
    key = normalize_category_name(name)

    if sort_order is None:
        current_max = ExpenseCategory.objects.aggregate(m=Max('sort_order'))['m']
        sort_order = (current_max or 0) + 1

    try:
        with transaction.atomic():
            category = ExpenseCategory.objects.create(
                name=key,
                label=label,
                icon_name=icon_name,
                color=color,
                bg_color=bg_color,
                sort_order=sort_order,
            )
    except IntegrityError:
        raise DuplicateCategoryError(f"A category named '{key}' already exists")

    logger.info('Category %s created', key)
    return category


@transaction.atomic
def update_category(*, category_id: UUID, data: dict) -> ExpenseCategory:
    """
    Update a category; a rename is carried over to every purchase.

    Raises:
        CategoryNotFoundError: If the category doesn't exist
        DuplicateCategoryError: If the new name is taken
    """
    try:
        category = ExpenseCategory.objects.select_for_update().get(id=category_id)
    except ExpenseCategory.DoesNotExist:
        raise CategoryNotFoundError(f"Category with ID {category_id} not found")

    old_name = category.name
    if data.get('name'):
        category.name = normalize_category_name(data['name'])
    for key in CATEGORY_FIELDS:
        if key in data:
            setattr(category, key, data[key])

    if category.name != old_name:
        if ExpenseCategory.objects.filter(name=category.name).exclude(id=category.id).exists():
            raise DuplicateCategoryError(f"A category named '{category.name}' already exists")
        renamed = Purchase.objects.filter(expense_category=old_name).update(
            expense_category=category.name
        )
        logger.info('Category %s renamed to %s (%d purchases)', old_name, category.name, renamed)

    category.save()
    return category


@transaction.atomic
def delete_category(*, category_id: UUID) -> None:
    """
    Delete an unused category.

    Raises:
        CategoryNotFoundError: If the category doesn't exist
        CategoryInUseError: If any purchase references it
    """
    category = get_category(category_id=category_id)
    usage = category_usage_count(name=category.name)
    if usage:
        logger.warning('Refused to delete category %s used by %d purchase(s)', category.name, usage)
        raise CategoryInUseError(
            f"This category is used by {usage} purchase(s). Please reassign them first."
        )

    category.delete()
    logger.info('Category %s deleted', category.name)
