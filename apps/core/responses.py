from rest_framework import status
from rest_framework.response import Response


class Intent:
    CREATE = 'create'
    UPDATE = 'update'
    DELETE = 'delete'


_DEFAULT_STATUS = {
    Intent.CREATE: status.HTTP_201_CREATED,
    Intent.UPDATE: status.HTTP_200_OK,
    Intent.DELETE: status.HTTP_200_OK,
}


def action_response(intent, data, status_code=None):
    """Success body tagged with the operation kind."""
    return Response(
        {'success': True, 'intent': intent, 'data': data},
        status=status_code or _DEFAULT_STATUS[intent],
    )
