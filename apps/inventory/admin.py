from django.contrib import admin

from apps.inventory.models import InventoryCategory, InventoryItem


class InventoryItemInline(admin.TabularInline):
    """Inline admin for the items of a category."""
    model = InventoryItem
    extra = 0
    fields = ['sku', 'name', 'quantity', 'reorder_level', 'status']
    readonly_fields = ['status']


@admin.register(InventoryCategory)
class InventoryCategoryAdmin(admin.ModelAdmin):
    """Admin interface for inventory categories."""

    list_display = ['name', 'owner_id', 'created_at']
    search_fields = ['name', 'owner_id']
    readonly_fields = ['owner_id', 'created_at', 'updated_at']
    inlines = [InventoryItemInline]
    ordering = ['name']


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    """Admin interface for inventory items."""

    list_display = [
        'name',
        'sku',
        'category',
        'quantity',
        'reorder_level',
        'status',
        'unit_price'
    ]
    list_filter = ['status', 'category__name']
    search_fields = ['name', 'sku', 'supplier', 'owner_id']
    readonly_fields = ['owner_id', 'status', 'created_at', 'updated_at']
    ordering = ['name']

    fieldsets = (
        ('Item', {
            'fields': ('sku', 'name', 'category', 'description', 'supplier')
        }),
        ('Units & Pricing', {
            'fields': ('order_unit', 'unit', 'amount_per_unit', 'unit_price')
        }),
        ('Stock', {
            'fields': ('quantity', 'reorder_level', 'status')
        }),
        ('Metadata', {
            'fields': ('owner_id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('category')
