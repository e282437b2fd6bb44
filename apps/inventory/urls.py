from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'inventory'

router = DefaultRouter()
router.register(r'categories', views.InventoryCategoryViewSet, basename='category')
router.register(r'items', views.InventoryItemViewSet, basename='item')

urlpatterns = [
    # Category routes
    # GET    /api/inventory/categories/           - List categories
    # POST   /api/inventory/categories/           - Create category
    # GET    /api/inventory/categories/{id}/      - Get category
    # PUT    /api/inventory/categories/{id}/      - Update category
    # DELETE /api/inventory/categories/{id}/      - Delete category

    # Item routes
    # GET    /api/inventory/items/                - List items (?status=&search=&category=)
    # POST   /api/inventory/items/                - Create item
    # GET    /api/inventory/items/{id}/           - Get item
    # PUT    /api/inventory/items/{id}/           - Replace item
    # DELETE /api/inventory/items/{id}/           - Delete item
    # GET    /api/inventory/items/stats/          - Counts per stock status

    path('', include(router.urls)),
]
