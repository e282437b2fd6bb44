from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.core.mixins import OwnerScopedMixin
from apps.core.pagination import StandardPagination
from apps.core.responses import Intent, action_response

from .models import InventoryItem, StockStatus
from .serializers import (
    InventoryCategorySerializer,
    InventoryItemFilterSerializer,
    InventoryItemInputSerializer,
    InventoryItemSerializer,
    InventoryStatsSerializer,
)
from .services import (
    count_items_by_status,
    create_inventory_category,
    create_inventory_item,
    delete_inventory_category,
    delete_inventory_item,
    list_inventory_categories,
    list_inventory_items,
    update_inventory_category,
    update_inventory_item,
)


class InventoryCategoryViewSet(OwnerScopedMixin, viewsets.ModelViewSet):
    """
    ViewSet for inventory category CRUD operations.

    list: Categories of the owner with item counts
    create: Create a category
    retrieve: Get a category
    update: Rename/describe a category
    destroy: Delete a category without items
    """

    serializer_class = InventoryCategorySerializer
    pagination_class = StandardPagination

    def get_queryset(self):
        return list_inventory_categories(owner_id=self.owner_id)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        category = create_inventory_category(owner_id=self.owner_id, **serializer.validated_data)

        return action_response(Intent.CREATE, InventoryCategorySerializer(category).data)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        category = update_inventory_category(
            owner_id=self.owner_id,
            category_id=kwargs['pk'],
            data=serializer.validated_data,
        )

        return action_response(Intent.UPDATE, InventoryCategorySerializer(category).data)

    def destroy(self, request, *args, **kwargs):
        delete_inventory_category(owner_id=self.owner_id, category_id=kwargs['pk'])
        return action_response(Intent.DELETE, {'id': kwargs['pk']})


class InventoryItemViewSet(OwnerScopedMixin, viewsets.ModelViewSet):
    """
    ViewSet for inventory item CRUD operations.

    list: Items of the owner (filters: status, search, category)
    create: Create an item
    retrieve: Get an item
    update: Replace an item
    destroy: Delete an item no recipe uses
    stats: Number of items per stock status
    """

    queryset = InventoryItem.objects.select_related('category')
    serializer_class = InventoryItemSerializer
    pagination_class = StandardPagination
    http_method_names = ['get', 'post', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        """Filter items using input serializer validation."""
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = InventoryItemFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_inventory_items(
            owner_id=self.owner_id,
            status=params.get('status'),
            search=params.get('search', ''),
            category_id=params.get('category'),
        )

    def get_serializer_class(self):
        if self.action in ('create', 'update'):
            return InventoryItemInputSerializer
        return InventoryItemSerializer

    @extend_schema(responses=InventoryItemSerializer)
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = create_inventory_item(owner_id=self.owner_id, **serializer.to_service_kwargs())

        return action_response(Intent.CREATE, InventoryItemSerializer(item).data)

    @extend_schema(responses=InventoryItemSerializer)
    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = update_inventory_item(
            owner_id=self.owner_id,
            item_id=kwargs['pk'],
            data=serializer.to_service_kwargs(),
        )

        return action_response(Intent.UPDATE, InventoryItemSerializer(item).data)

    def destroy(self, request, *args, **kwargs):
        delete_inventory_item(owner_id=self.owner_id, item_id=kwargs['pk'])
        return action_response(Intent.DELETE, {'id': kwargs['pk']})

    @extend_schema(responses=InventoryStatsSerializer)
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """
        Number of items per stock status.

        GET /api/inventory/items/stats/
        """
        counts = count_items_by_status(owner_id=self.owner_id)
        data = {
            'in_stock': counts[StockStatus.IN_STOCK],
            'low_in_stock': counts[StockStatus.LOW_IN_STOCK],
            'out_of_stock': counts[StockStatus.OUT_OF_STOCK],
            'total': sum(counts.values()),
        }
        return Response(InventoryStatsSerializer(data).data)
