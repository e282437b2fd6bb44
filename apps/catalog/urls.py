from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'categories', views.ProductCategoryViewSet, basename='category')
router.register(r'products', views.ProductViewSet, basename='product')

urlpatterns = [
    # Category routes
    # GET    /api/catalog/categories/                     - List categories
    # POST   /api/catalog/categories/                     - Create category
    # GET    /api/catalog/categories/{id}/                - Get category
    # PUT    /api/catalog/categories/{id}/                - Update category
    # DELETE /api/catalog/categories/{id}/                - Delete category

    # Product routes
    # GET    /api/catalog/products/                       - List products
    # POST   /api/catalog/products/                       - Create product with variants
    # GET    /api/catalog/products/{id}/                  - Get product
    # PUT    /api/catalog/products/{id}/                  - Replace product and variants
    # DELETE /api/catalog/products/{id}/                  - Delete product
    # POST   /api/catalog/products/generate-variants/     - Preview variant table

    path('', include(router.urls)),
]
