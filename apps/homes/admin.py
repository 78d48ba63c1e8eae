from django.contrib import admin

from .models import Area, Home, HomeImage, Room


class HomeImageInline(admin.TabularInline):
    model = HomeImage
    extra = 0
    fields = ['url', 'caption', 'sort_order']


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ['name', 'name_lt', 'budget']


@admin.register(Home)
class HomeAdmin(admin.ModelAdmin):
    list_display = ['name', 'address', 'purchase_date', 'is_deleted', 'created_at']
    list_filter = ['is_deleted']
    search_fields = ['name', 'name_lt', 'address']
    inlines = [HomeImageInline]


@admin.register(Area)
class AreaAdmin(admin.ModelAdmin):
    list_display = ['name', 'home', 'budget', 'created_at']
    list_filter = ['home']
    search_fields = ['name', 'name_lt']
    inlines = [RoomInline]


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ['name', 'area', 'budget', 'created_at']
    list_filter = ['area']
    search_fields = ['name', 'name_lt']
