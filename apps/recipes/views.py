from drf_spectacular.utils import extend_schema
from rest_framework import viewsets

from apps.core.mixins import OwnerScopedMixin
from apps.core.pagination import StandardPagination
from apps.core.responses import Intent, action_response

from .serializers import (
    RecipeFilterSerializer,
    RecipeInputSerializer,
    RecipeListSerializer,
    RecipeSerializer,
)
from .services import (
    create_recipe,
    delete_recipe,
    get_recipe,
    list_recipes,
    recipe_queryset,
    update_recipe,
)


class RecipeViewSet(OwnerScopedMixin, viewsets.ModelViewSet):
    """
    ViewSet for recipe CRUD operations.

    list: Recipes of the owner (filters: search, product, product_variant, is_active)
    create: Create a recipe with its ingredients
    retrieve: Get a recipe with its ingredients and costs
    update: Replace a recipe and its ingredients
    destroy: Delete a recipe
    """

    queryset = recipe_queryset()
    serializer_class = RecipeSerializer
    pagination_class = StandardPagination
    http_method_names = ['get', 'post', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        """Filter recipes using input serializer validation."""
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = RecipeFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_recipes(
            owner_id=self.owner_id,
            search=params.get('search', ''),
            product_id=params.get('product'),
            product_variant_id=params.get('product_variant'),
            is_active=params.get('is_active'),
        )

    def get_serializer_class(self):
        if self.action == 'list':
            return RecipeListSerializer
        if self.action in ('create', 'update'):
            return RecipeInputSerializer
        return RecipeSerializer

    def _detail(self, recipe):
        recipe = get_recipe(owner_id=self.owner_id, recipe_id=recipe.pk)
        return RecipeSerializer(recipe).data

    @extend_schema(responses=RecipeSerializer)
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        recipe = create_recipe(owner_id=self.owner_id, **serializer.to_service_kwargs())

        return action_response(Intent.CREATE, self._detail(recipe))

    @extend_schema(responses=RecipeSerializer)
    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        recipe = update_recipe(
            owner_id=self.owner_id,
            recipe_id=kwargs['pk'],
            data=serializer.to_service_kwargs(),
        )

        return action_response(Intent.UPDATE, self._detail(recipe))

    def destroy(self, request, *args, **kwargs):
        delete_recipe(owner_id=self.owner_id, recipe_id=kwargs['pk'])
        return action_response(Intent.DELETE, {'id': kwargs['pk']})
