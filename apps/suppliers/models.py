from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.common.models import SoftDeleteModel


class SupplierType(models.TextChoices):
    COMPANY = 'company', 'Company'
    INDIVIDUAL = 'individual', 'Individual'


class Supplier(SoftDeleteModel):
    """A company or tradesperson purchases are made from."""

    type = models.CharField(max_length=20, choices=SupplierType.choices)

    # Company suppliers
    company_name = models.CharField(max_length=255, blank=True)
    company_address = models.TextField(blank=True)

    # Individual suppliers
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)

    # Contact
    email = models.EmailField(max_length=255, blank=True)
    phone = models.CharField(max_length=50, blank=True)
    notes = models.TextField(blank=True)

    rating = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )

    class Meta:
        db_table = 'suppliers'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company_name'], name='suppliers_company_idx'),
            models.Index(fields=['last_name', 'first_name'], name='suppliers_person_idx'),
        ]

    def __str__(self):
        return self.display_name

    @property
    def display_name(self):
        if self.type == SupplierType.COMPANY:
            return self.company_name
        return f"{self.first_name} {self.last_name}".strip()
