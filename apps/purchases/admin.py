from django.contrib import admin
from django.utils.html import format_html

from .models import Attachment, PaymentStatus, Purchase, PurchaseLineItem


class PurchaseLineItemInline(admin.TabularInline):
    """Line items are read-only here; the write path recomputes totals."""
    model = PurchaseLineItem
    extra = 0
    fields = ['position', 'description', 'quantity', 'unit_price', 'total_price', 'area', 'room', 'warranty_months']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


class AttachmentInline(admin.TabularInline):
    model = Attachment
    fk_name = 'purchase'
    extra = 0
    fields = ['file_name', 'file_type', 'file_url', 'house_document_type']


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """
    Admin interface for purchases.

    Deleted purchases stay listed (filter on ``is_deleted``) for auditing.
    """

    list_display = [
        'date',
        'supplier',
        'home',
        'purchase_type',
        'total_amount',
        'currency',
        'status_badge',
        'is_deleted',
    ]
    list_filter = ['payment_status', 'purchase_type', 'is_deleted', 'home']
    search_fields = ['supplier__company_name', 'supplier__last_name', 'notes']
    date_hierarchy = 'date'
    readonly_fields = ['total_amount', 'created_at', 'updated_at']
    inlines = [PurchaseLineItemInline, AttachmentInline]

    def status_badge(self, obj):
        """Display payment status as colored badge."""
        colors = {
            PaymentStatus.PENDING: ('#E5C49A', '#2C1810'),
            PaymentStatus.PARTIAL: ('#A47449', 'white'),
            PaymentStatus.PAID: ('#6B8E5E', 'white'),
        }
        bg, fg = colors.get(obj.payment_status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_payment_status_display()
        )
    status_badge.short_description = 'Payment'


@admin.register(Attachment)
class AttachmentAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'file_type', 'house_document_type', 'expires_at', 'created_at']
    list_filter = ['file_type', 'house_document_type']
    search_fields = ['file_name', 'document_title']
