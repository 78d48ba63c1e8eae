from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from apps.common.models import SoftDeleteModel, TimeStampedModel


class PurchaseType(models.TextChoices):
    SERVICE = 'service', 'Service'
    MATERIALS = 'materials', 'Materials'
    PRODUCTS = 'products', 'Products'
    INDIRECT = 'indirect', 'Indirect'


class PaymentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PARTIAL = 'partial', 'Partial'
    PAID = 'paid', 'Paid'


OUTSTANDING_STATUSES = (PaymentStatus.PENDING, PaymentStatus.PARTIAL)


class Purchase(SoftDeleteModel):
    """
    A financial transaction with a supplier.

    Home/area/room here are the coarse attribution; line items may carry
    their own area/room, which wins for per-area and per-room breakdowns.
    """

    supplier = models.ForeignKey(
        'suppliers.Supplier',
        on_delete=models.PROTECT,
        related_name='purchases'
    )

    # Coarse attribution
    home = models.ForeignKey(
        'homes.Home',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='purchases'
    )
    area = models.ForeignKey(
        'homes.Area',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='purchases'
    )
    room = models.ForeignKey(
        'homes.Room',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='purchases'
    )

    date = models.DateField()
    purchase_type = models.CharField(max_length=20, choices=PurchaseType.choices)
    # Soft reference to ExpenseCategory.name
    expense_category = models.CharField(max_length=100, null=True, blank=True)

    # Sum of line totals, recomputed on every write
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    currency = models.CharField(max_length=3, default='EUR')

    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING
    )
    payment_due_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'purchases'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['date'], name='purchases_date_idx'),
            models.Index(fields=['supplier', 'date'], name='purchases_supplier_date_idx'),
            models.Index(fields=['home'], name='purchases_home_idx'),
            models.Index(fields=['expense_category'], name='purchases_category_idx'),
            models.Index(fields=['payment_status'], name='purchases_status_idx'),
        ]

    def __str__(self):
        return f"{self.supplier} - {self.total_amount} {self.currency} ({self.date})"


class PurchaseLineItem(TimeStampedModel):
    """
    One item of a purchase.

    Line items have no identity of their own to clients: an update replaces
    the whole set.
    """

    purchase = models.ForeignKey(
        Purchase,
        on_delete=models.CASCADE,
        related_name='line_items'
    )
    position = models.PositiveIntegerField(default=0)

    description = models.CharField(max_length=500)
    brand = models.CharField(max_length=255, blank=True)
    quantity = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        default=Decimal('1.000'),
        validators=[MinValueValidator(Decimal('0.001'))]
    )
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    total_price = models.DecimalField(max_digits=12, decimal_places=2)

    # Fine-grained attribution
    area = models.ForeignKey(
        'homes.Area',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='line_items'
    )
    room = models.ForeignKey(
        'homes.Room',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='line_items'
    )

    warranty_months = models.PositiveIntegerField(null=True, blank=True)
    notes = models.TextField(blank=True)

    tags = models.ManyToManyField(
        'taxonomy.Tag',
        blank=True,
        related_name='line_items',
        db_table='line_item_tags'
    )

    class Meta:
        db_table = 'purchase_line_items'
        ordering = ['position', 'created_at']
        indexes = [
            models.Index(fields=['area'], name='line_items_area_idx'),
            models.Index(fields=['room'], name='line_items_room_idx'),
        ]

    def __str__(self):
        return f"{self.description} x{self.quantity}"

    @property
    def has_attribution_override(self):
        return self.area_id is not None or self.room_id is not None


class FileType(models.TextChoices):
    INVOICE = 'invoice', 'Invoice'
    RECEIPT = 'receipt', 'Receipt'
    PHOTO = 'photo', 'Photo'
    DOCUMENT = 'document', 'Document'


class HouseDocumentType(models.TextChoices):
    PURCHASE_AGREEMENT = 'purchase_agreement', 'Purchase agreement'
    UTILITY_CONTRACT = 'utility_contract', 'Utility contract'
    INSURANCE = 'insurance', 'Insurance'
    BUILDING_PERMIT = 'building_permit', 'Building permit'
    TAX_DOCUMENT = 'tax_document', 'Tax document'
    WARRANTY = 'warranty', 'Warranty'
    MANUAL = 'manual', 'Manual'
    OTHER = 'other', 'Other'


class Attachment(TimeStampedModel):
    """
    File metadata attached to a purchase, a line item and/or a room.

    Only the URL is stored; the binary lives in external storage. A
    house_document_type marks tracked documents (insurance, permits...).
    """

    purchase = models.ForeignKey(
        Purchase,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='attachments'
    )
    line_item = models.ForeignKey(
        PurchaseLineItem,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='attachments'
    )
    room = models.ForeignKey(
        'homes.Room',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='attachments'
    )

    file_url = models.URLField(max_length=1000)
    thumbnail_url = models.URLField(max_length=1000, blank=True)
    file_name = models.CharField(max_length=255)
    file_type = models.CharField(max_length=20, choices=FileType.choices)
    file_size_bytes = models.PositiveBigIntegerField(null=True, blank=True)
    ai_extracted_data = models.JSONField(null=True, blank=True)

    house_document_type = models.CharField(
        max_length=30,
        choices=HouseDocumentType.choices,
        null=True,
        blank=True
    )
    document_title = models.CharField(max_length=255, blank=True)
    document_description = models.TextField(blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'attachments'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['house_document_type', 'expires_at'], name='attachments_doc_expiry_idx'),
        ]

    def __str__(self):
        return self.document_title or self.file_name
