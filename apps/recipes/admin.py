from django.contrib import admin

from apps.recipes.models import Recipe, RecipeIngredient


class RecipeIngredientInline(admin.TabularInline):
    """Inline admin for recipe ingredients."""
    model = RecipeIngredient
    extra = 0
    fields = ['inventory_item', 'quantity', 'unit', 'notes', 'position']


@admin.register(Recipe)
class RecipeAdmin(admin.ModelAdmin):
    """Admin interface for recipes."""

    list_display = [
        'name',
        'product',
        'product_variant',
        'total_cost',
        'is_active',
        'created_at'
    ]
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'product__name', 'owner_id']
    readonly_fields = ['owner_id', 'total_cost', 'created_at', 'updated_at']
    inlines = [RecipeIngredientInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Recipe', {
            'fields': ('name', 'description', 'instructions', 'prep_time_minutes')
        }),
        ('Product', {
            'fields': ('product', 'product_variant')
        }),
        ('Cost', {
            'fields': ('total_cost',)
        }),
        ('Metadata', {
            'fields': ('owner_id', 'is_active', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('product', 'product_variant')
