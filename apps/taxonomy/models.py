from django.db import models

from apps.common.models import TimeStampedModel


class ExpenseCategory(TimeStampedModel):
    """
    User-managed expense category.

    Purchases refer to a category by ``name`` (a soft reference), so the
    name doubles as the stable key and is stored in lower_snake_case.
    """

    name = models.CharField(max_length=100, unique=True)
    label = models.CharField(max_length=255)
    icon_name = models.CharField(max_length=100)
    color = models.CharField(max_length=50)
    bg_color = models.CharField(max_length=50)
    sort_order = models.IntegerField(default=0)

    class Meta:
        db_table = 'expense_categories'
        ordering = ['sort_order', 'name']
        verbose_name_plural = 'expense categories'

    def __str__(self):
        return self.label


class Tag(TimeStampedModel):
    """Freeform label attached to purchase line items."""

    name = models.CharField(max_length=100, unique=True)
    color = models.CharField(max_length=50, blank=True)

    class Meta:
        db_table = 'tags'
        ordering = ['name']

    def __str__(self):
        return self.name
