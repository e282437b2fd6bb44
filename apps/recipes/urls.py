from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'recipes'

router = DefaultRouter()
router.register(r'', views.RecipeViewSet, basename='recipe')

urlpatterns = [
    # GET    /api/recipes/          - List recipes (?search=&product=&product_variant=&is_active=)
    # POST   /api/recipes/          - Create recipe with ingredients
    # GET    /api/recipes/{id}/     - Get recipe
    # PUT    /api/recipes/{id}/     - Replace recipe and ingredients
    # DELETE /api/recipes/{id}/     - Delete recipe

    path('', include(router.urls)),
]
