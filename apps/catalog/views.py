from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.core.mixins import OwnerScopedMixin
from apps.core.pagination import StandardPagination
from apps.core.responses import Intent, action_response

from .models import ProductCategory
from .serializers import (
    GenerateVariantsInputSerializer,
    GeneratedVariantSerializer,
    ProductCategorySerializer,
    ProductFilterSerializer,
    ProductInputSerializer,
    ProductListSerializer,
    ProductSerializer,
)
from .services import (
    build_variants,
    create_category,
    create_product,
    delete_category,
    delete_product,
    get_product,
    list_categories,
    list_products,
    product_queryset,
    update_category,
    update_product,
)


class ProductCategoryViewSet(OwnerScopedMixin, viewsets.ModelViewSet):
    """
    ViewSet for product category CRUD operations.

    list: Categories of the owner with product counts
    create: Create a category
    retrieve: Get a category
    update: Rename/describe a category
    destroy: Delete a category without products
    """

    queryset = ProductCategory.objects.all()
    serializer_class = ProductCategorySerializer
    pagination_class = StandardPagination

    def get_queryset(self):
        queryset = list_categories(owner_id=self.owner_id)

        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(name__icontains=search)

        return queryset

    def create(self, request, *args, **kwargs):
        """Create a new product category."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        category = create_category(owner_id=self.owner_id, **serializer.validated_data)

        return action_response(Intent.CREATE, ProductCategorySerializer(category).data)

    def update(self, request, *args, **kwargs):
        """Update a product category."""
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        category = update_category(
            owner_id=self.owner_id,
            category_id=kwargs['pk'],
            data=serializer.validated_data,
        )

        return action_response(Intent.UPDATE, ProductCategorySerializer(category).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a product category."""
        delete_category(owner_id=self.owner_id, category_id=kwargs['pk'])
        return action_response(Intent.DELETE, {'id': kwargs['pk']})


class ProductViewSet(OwnerScopedMixin, viewsets.ModelViewSet):
    """
    ViewSet for product CRUD operations.

    list: Products of the owner (filters: search, category, is_active)
    create: Create a product with its options and variants
    retrieve: Get a product with its options and variants
    update: Replace a product and its options and variants
    destroy: Delete a product
    generate_variants: Preview the variant table for a set of options
    """

    queryset = product_queryset()
    serializer_class = ProductSerializer
    pagination_class = StandardPagination
    http_method_names = ['get', 'post', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        """Filter products using input serializer validation."""
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = ProductFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_products(
            owner_id=self.owner_id,
            search=params.get('search', ''),
            category_id=params.get('category'),
            is_active=params.get('is_active'),
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return ProductListSerializer
        if self.action in ('create', 'update'):
            return ProductInputSerializer
        if self.action == 'generate_variants':
            return GenerateVariantsInputSerializer
        return ProductSerializer

    def _detail(self, product):
        product = get_product(owner_id=self.owner_id, product_id=product.pk)
        return ProductSerializer(product).data

    @extend_schema(responses=ProductSerializer)
    def create(self, request, *args, **kwargs):
        """Create a product together with its options and variants."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product, _ = create_product(owner_id=self.owner_id, **serializer.to_service_kwargs())

        return action_response(Intent.CREATE, self._detail(product))

    @extend_schema(responses=ProductSerializer)
    def update(self, request, *args, **kwargs):
        """Replace a product; nested records keep their identity by id."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product, _ = update_product(
            owner_id=self.owner_id,
            product_id=kwargs['pk'],
            data=serializer.to_service_kwargs(),
        )

        return action_response(Intent.UPDATE, self._detail(product))

    def destroy(self, request, *args, **kwargs):
        """Delete a product with its options and variants."""
        delete_product(owner_id=self.owner_id, product_id=kwargs['pk'])
        return action_response(Intent.DELETE, {'id': kwargs['pk']})

    @extend_schema(responses=GeneratedVariantSerializer(many=True))
    @action(detail=False, methods=['post'], url_path='generate-variants')
    def generate_variants(self, request):
        """
        Expand options into the variant table.

        POST /api/catalog/products/generate-variants/
        Rows matching a submitted variant by title keep its id, SKU and price.
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        variants = build_variants(
            product_name=data['name'],
            options=sorted(data['variant_options'], key=lambda o: o.get('position', 0)),
            existing_variants=data['variants'],
            base_price=data.get('base_price'),
        )
        return Response(GeneratedVariantSerializer(variants, many=True).data)
