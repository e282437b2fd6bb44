from drf_spectacular.utils import extend_schema
from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.responses import Intent, action_response
from apps.core.utils import owner_id_from

from .serializers import StoreInputSerializer, StoreSerializer
from .services import create_store, get_store, update_store


@extend_schema(
    methods=['GET'],
    responses={200: StoreSerializer},
    description="Get the store of the current owner.",
    tags=['store'],
)
@extend_schema(
    methods=['POST'],
    request=StoreInputSerializer,
    responses={201: StoreSerializer},
    description="Onboard: create the store and the default inventory categories.",
    tags=['store'],
)
@extend_schema(
    methods=['PUT'],
    request=StoreInputSerializer,
    responses={200: StoreSerializer},
    description="Replace the store profile.",
    tags=['store'],
)
@api_view(['GET', 'POST', 'PUT'])
def store(request):
    """Store profile of the authenticated owner."""
    owner_id = owner_id_from(request.user)

    if request.method == 'GET':
        return Response(StoreSerializer(get_store(owner_id=owner_id)).data)

    serializer = StoreInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    if request.method == 'POST':
        created = create_store(owner_id=owner_id, **serializer.validated_data)
        return action_response(Intent.CREATE, StoreSerializer(created).data)

    updated = update_store(owner_id=owner_id, data=serializer.validated_data)
    return action_response(Intent.UPDATE, StoreSerializer(updated).data)
