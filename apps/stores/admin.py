from django.contrib import admin

from apps.stores.models import Store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    """Admin interface for stores."""

    list_display = ['name', 'owner_id', 'email', 'phone', 'created_at']
    search_fields = ['name', 'owner_id', 'email']
    readonly_fields = ['owner_id', 'created_at', 'updated_at']
    ordering = ['-created_at']
