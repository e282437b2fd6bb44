from django.contrib import admin

from apps.catalog.models import Product, ProductCategory, Variant, VariantOption, VariantOptionValue


class VariantOptionInline(admin.TabularInline):
    """Inline admin for product options."""
    model = VariantOption
    extra = 0
    fields = ['name', 'position']


class VariantInline(admin.TabularInline):
    """Inline admin for product variants."""
    model = Variant
    extra = 0
    fields = ['title', 'sku', 'price', 'is_default', 'is_available', 'position']
    readonly_fields = ['title']


class VariantOptionValueInline(admin.TabularInline):
    model = VariantOptionValue
    extra = 0
    fields = ['value', 'position']


@admin.register(ProductCategory)
class ProductCategoryAdmin(admin.ModelAdmin):
    """Admin interface for product categories."""

    list_display = ['name', 'owner_id', 'created_at']
    search_fields = ['name', 'description', 'owner_id']
    readonly_fields = ['owner_id', 'created_at', 'updated_at']
    ordering = ['name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for products."""

    list_display = [
        'name',
        'category',
        'base_price',
        'sku',
        'has_variants',
        'is_active',
        'created_at'
    ]
    list_filter = ['is_active', 'has_variants', 'created_at']
    search_fields = ['name', 'sku', 'owner_id']
    readonly_fields = ['owner_id', 'created_at', 'updated_at']
    inlines = [VariantOptionInline, VariantInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description', 'category')
        }),
        ('Pricing', {
            'fields': ('base_price', 'sku', 'has_variants')
        }),
        ('Metadata', {
            'fields': ('owner_id', 'is_active', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('category')


@admin.register(VariantOption)
class VariantOptionAdmin(admin.ModelAdmin):
    """Admin interface for product options and their values."""

    list_display = ['name', 'product', 'position']
    search_fields = ['name', 'product__name']
    inlines = [VariantOptionValueInline]

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('product')


@admin.register(Variant)
class VariantAdmin(admin.ModelAdmin):
    """Admin interface for product variants."""

    list_display = ['get_product_name', 'title', 'sku', 'price', 'is_default', 'is_available']
    list_filter = ['is_default', 'is_available']
    search_fields = ['title', 'sku', 'product__name']
    readonly_fields = ['owner_id', 'created_at', 'updated_at']
    filter_horizontal = ['option_values']

    def get_product_name(self, obj):
        """Display product name."""
        return obj.product.name
    get_product_name.short_description = 'Product'
    get_product_name.admin_order_field = 'product__name'

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('product')
