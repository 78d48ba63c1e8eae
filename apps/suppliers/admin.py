from django.contrib import admin

from .models import Supplier


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ['display_name', 'type', 'email', 'phone', 'rating', 'is_deleted']
    list_filter = ['type', 'rating', 'is_deleted']
    search_fields = ['company_name', 'first_name', 'last_name', 'email']
    readonly_fields = ['id', 'created_at', 'updated_at']
