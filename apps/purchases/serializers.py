from decimal import Decimal

from rest_framework import serializers

from apps.common.money import MAX_AMOUNT, line_total, sum_money
from apps.homes.models import Area, Home, Room
from apps.suppliers.models import Supplier
from apps.taxonomy.models import Tag

from .models import (
    Attachment,
    FileType,
    HouseDocumentType,
    PaymentStatus,
    Purchase,
    PurchaseLineItem,
    PurchaseType,
)


def _room_in_area(attrs):
    room = attrs.get('room')
    area = attrs.get('area')
    if room is not None and area is not None and room.area_id != area.id:
        raise serializers.ValidationError({'room': 'Room does not belong to the selected area.'})
    return attrs


# =============================================================================
# Input Serializers
# =============================================================================

class PurchaseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for purchase filtering.

    Query Parameters:
        supplier (UUID): Filter by supplier
        home (UUID): Filter by home
        area (UUID): Purchase-level or any line-item area
        room (UUID): Purchase-level or any line-item room
        payment_status (str): pending / partial / paid
        category (str): Expense category name
        date_from (date): Purchases on or after this date
        date_to (date): Purchases on or before this date
    """

    supplier = serializers.UUIDField(required=False)
    home = serializers.UUIDField(required=False)
    area = serializers.UUIDField(required=False)
    room = serializers.UUIDField(required=False)
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False)
    category = serializers.CharField(required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'End date must be after start date'
            })

        return attrs


class LineItemInputSerializer(serializers.Serializer):
    """
    One line item as submitted by a client or suggested by extraction.

    ``total_price`` is never accepted; it is recomputed from quantity and
    unit price on every write.
    """

    description = serializers.CharField(max_length=500)
    brand = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    quantity = serializers.DecimalField(
        max_digits=10,
        decimal_places=3,
        min_value=Decimal('0.001'),
    )
    unit_price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.00'),
    )
    area = serializers.PrimaryKeyRelatedField(queryset=Area.objects.all(), allow_null=True, default=None)
    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.all(), allow_null=True, default=None)
    warranty_months = serializers.IntegerField(min_value=0, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    tags = serializers.PrimaryKeyRelatedField(queryset=Tag.objects.all(), many=True, required=False)

    def validate(self, attrs):
        if line_total(attrs['quantity'], attrs['unit_price']) > MAX_AMOUNT:
            raise serializers.ValidationError({
                'total_price': f'Line total exceeds the maximum amount of {MAX_AMOUNT}.'
            })
        return _room_in_area(attrs)


class PurchaseInputSerializer(serializers.Serializer):
    """
    Full purchase payload for create and update.

    Update is a full replacement, so optional fields fall back to their
    defaults when omitted.
    """

    supplier = serializers.PrimaryKeyRelatedField(queryset=Supplier.objects.alive())
    home = serializers.PrimaryKeyRelatedField(queryset=Home.objects.alive(), allow_null=True, default=None)
    area = serializers.PrimaryKeyRelatedField(queryset=Area.objects.all(), allow_null=True, default=None)
    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.all(), allow_null=True, default=None)
    date = serializers.DateField()
    purchase_type = serializers.ChoiceField(choices=PurchaseType.choices)
    expense_category = serializers.CharField(max_length=100, allow_null=True, allow_blank=True, default=None)
    currency = serializers.CharField(max_length=3, default='EUR')
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices, default=PaymentStatus.PENDING)
    payment_due_date = serializers.DateField(allow_null=True, default=None)
    notes = serializers.CharField(allow_blank=True, default='')
    line_items = LineItemInputSerializer(many=True, allow_empty=False)

    def validate_expense_category(self, value):
        return value or None

    def validate_currency(self, value):
        return value.upper()

    def validate(self, attrs):
        total = sum_money(line_total(i['quantity'], i['unit_price']) for i in attrs['line_items'])
        if total > MAX_AMOUNT:
            raise serializers.ValidationError({
                'total_amount': f'Purchase total exceeds the maximum amount of {MAX_AMOUNT}.'
            })
        return _room_in_area(attrs)


class AttachmentInputSerializer(serializers.ModelSerializer):
    """Attachment metadata; the file itself is already in external storage."""

    purchase = serializers.PrimaryKeyRelatedField(
        queryset=Purchase.objects.alive(),
        allow_null=True,
        required=False,
    )

    class Meta:
        model = Attachment
        fields = [
            'purchase',
            'line_item',
            'room',
            'file_url',
            'thumbnail_url',
            'file_name',
            'file_type',
            'file_size_bytes',
            'ai_extracted_data',
            'house_document_type',
            'document_title',
            'document_description',
            'expires_at',
        ]

    def validate(self, attrs):
        line_item = attrs.get('line_item')
        purchase = attrs.get('purchase')
        if line_item is not None and purchase is not None and line_item.purchase_id != purchase.id:
            raise serializers.ValidationError({'line_item': 'Line item does not belong to the purchase.'})
        return attrs


class DocumentInputSerializer(AttachmentInputSerializer):
    """A house document: the document type is mandatory."""

    house_document_type = serializers.ChoiceField(choices=HouseDocumentType.choices)
    file_type = serializers.ChoiceField(choices=FileType.choices, default=FileType.DOCUMENT)


class DocumentFilterSerializer(serializers.Serializer):
    """
    Query Parameters:
        home (UUID): Documents of one home (via room or purchase)
        type (str): House document type
        expiring_within_days (int): Only documents expiring in the window
    """

    home = serializers.UUIDField(required=False)
    type = serializers.ChoiceField(choices=HouseDocumentType.choices, required=False)
    expiring_within_days = serializers.IntegerField(min_value=0, required=False)


class ExtractInvoiceInputSerializer(serializers.Serializer):
    image_base64 = serializers.CharField()
    mime_type = serializers.ChoiceField(
        choices=['image/jpeg', 'image/png', 'image/gif', 'image/webp', 'application/pdf'],
        default='image/jpeg',
    )


# =============================================================================
# Output Serializers
# =============================================================================

class SupplierMinimalSerializer(serializers.ModelSerializer):
    """Minimal supplier info for nested serialization."""

    class Meta:
        model = Supplier
        fields = ['id', 'type', 'display_name']
        read_only_fields = fields


class LineItemSerializer(serializers.ModelSerializer):

    area_name = serializers.CharField(source='area.name', read_only=True, default=None)
    room_name = serializers.CharField(source='room.name', read_only=True, default=None)

    class Meta:
        model = PurchaseLineItem
        fields = [
            'id',
            'position',
            'description',
            'brand',
            'quantity',
            'unit_price',
            'total_price',
            'area',
            'area_name',
            'room',
            'room_name',
            'warranty_months',
            'notes',
            'tags',
        ]
        read_only_fields = fields


class AttachmentSerializer(serializers.ModelSerializer):

    class Meta:
        model = Attachment
        fields = [
            'id',
            'purchase',
            'line_item',
            'room',
            'file_url',
            'thumbnail_url',
            'file_name',
            'file_type',
            'file_size_bytes',
            'ai_extracted_data',
            'house_document_type',
            'document_title',
            'document_description',
            'expires_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PurchaseListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    supplier = SupplierMinimalSerializer(read_only=True)
    line_item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Purchase
        fields = [
            'id',
            'supplier',
            'home',
            'area',
            'room',
            'date',
            'purchase_type',
            'expense_category',
            'total_amount',
            'currency',
            'payment_status',
            'payment_due_date',
            'line_item_count',
            'created_at',
        ]
        read_only_fields = fields


class PurchaseSerializer(serializers.ModelSerializer):
    """Main serializer for a purchase with its line items and attachments."""

    supplier = SupplierMinimalSerializer(read_only=True)
    line_items = LineItemSerializer(many=True, read_only=True)
    attachments = AttachmentSerializer(many=True, read_only=True)

    class Meta:
        model = Purchase
        fields = [
            'id',
            'supplier',
            'home',
            'area',
            'room',
            'date',
            'purchase_type',
            'expense_category',
            'total_amount',
            'currency',
            'payment_status',
            'payment_due_date',
            'notes',
            'line_items',
            'attachments',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ExtractedInvoiceSerializer(serializers.Serializer):
    """Result of invoice extraction after validation."""

    data = serializers.DictField()
    cleaned = serializers.DictField()
    errors = serializers.DictField()
    supplier_suggestions = serializers.ListField(child=serializers.DictField())
