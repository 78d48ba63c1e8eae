from django.contrib import admin

from .models import ExpenseCategory, Tag


@admin.register(ExpenseCategory)
class ExpenseCategoryAdmin(admin.ModelAdmin):
    list_display = ['label', 'name', 'icon_name', 'sort_order']
    search_fields = ['name', 'label']
    ordering = ['sort_order', 'name']


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ['name', 'color', 'created_at']
    search_fields = ['name']
