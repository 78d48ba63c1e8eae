from django.contrib import admin
from django.utils.html import format_html

from .models import AppUser


@admin.register(AppUser)
class AppUserAdmin(admin.ModelAdmin):
    """
    Admin interface for application users.

    Users are created through invitations; the pending badge shows who has
    not signed in yet.
    """

    list_display = ['email', 'name', 'role', 'is_active', 'pending_badge', 'created_at']
    list_filter = ['role', 'is_active']
    search_fields = ['email', 'name', 'auth_subject_id']
    readonly_fields = ['id', 'auth_subject_id', 'created_at', 'updated_at']
    ordering = ['email']

    @admin.display(description='Linked')
    def pending_badge(self, obj):
        if obj.is_pending:
            return format_html('<span style="color: {};">{}</span>', '#c77d00', 'pending')
        return format_html('<span style="color: {};">{}</span>', '#2e7d32', 'linked')
