from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from apps.common.models import SoftDeleteModel, TimeStampedModel


class Home(SoftDeleteModel):
    """A property under renovation. Root of the ownership hierarchy."""

    name = models.CharField(max_length=255)
    name_lt = models.CharField(max_length=255, blank=True)
    address = models.TextField(blank=True)
    purchase_date = models.DateField(null=True, blank=True)
    cover_image_url = models.URLField(max_length=1000, blank=True)
    description = models.TextField(blank=True)
    description_lt = models.TextField(blank=True)

    class Meta:
        db_table = 'homes'
        ordering = ['name']

    def __str__(self):
        return self.name


class HomeImage(TimeStampedModel):
    """Gallery image of a home."""

    home = models.ForeignKey(Home, on_delete=models.CASCADE, related_name='images')
    url = models.URLField(max_length=1000)
    caption = models.CharField(max_length=255, blank=True)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'home_images'
        ordering = ['sort_order', 'created_at']

    def __str__(self):
        return self.caption or self.url


class Area(TimeStampedModel):
    """Subdivision of a home, e.g. a floor or wing."""

    # Nullable for rows imported before homes existed
    home = models.ForeignKey(
        Home,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='areas'
    )
    name = models.CharField(max_length=255)
    name_lt = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    description_lt = models.TextField(blank=True)
    budget = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.01'))]
    )

    class Meta:
        db_table = 'areas'
        ordering = ['name']
        indexes = [
            models.Index(fields=['home'], name='areas_home_idx'),
        ]

    def __str__(self):
        return self.name


class Room(TimeStampedModel):
    """Subdivision of an area."""

    # PROTECT backs up the rooms-exist check done before area deletion
    area = models.ForeignKey(Area, on_delete=models.PROTECT, related_name='rooms')
    name = models.CharField(max_length=255)
    name_lt = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    description_lt = models.TextField(blank=True)
    budget = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    class Meta:
        db_table = 'rooms'
        ordering = ['name']
        indexes = [
            models.Index(fields=['area'], name='rooms_area_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.area.name})"
