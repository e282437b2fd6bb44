"""
Error taxonomy shared by every app.

Services raise subclasses of :class:`ServiceError`. Each carries a stable
error code, an HTTP status class, a human-readable message and, where the
failure belongs to one input, the name of the offending field so the
client can display the error inline.

Exception Hierarchy:
    ServiceError (INTERNAL_ERROR, 500)
    ├── RecordNotFoundError (RECORD_NOT_FOUND, 404)
    ├── UniqueConstraintError (UNIQUE_CONSTRAINT_VIOLATION, 409)
    ├── RelatedRecordMissingError (RELATED_RECORD_MISSING, 400)
    ├── ReferentialIntegrityError (FOREIGN_KEY_CONSTRAINT, 400)
    └── InvalidValueError (INVALID_VALUE, 400)

Database errors that reach the API layer without being wrapped by a
service (``IntegrityError``, ``ProtectedError``...) are translated into the
same taxonomy by :func:`translate_error`, and every failure response is
rendered by :func:`action_exception_handler`:

    {
        "success": false,
        "error": "UNIQUE_CONSTRAINT_VIOLATION",
        "message": "A variant record with this sku already exists",
        "status_code": 409,
        "field": "sku"
    }
"""

import logging
import re

from django.apps import apps as django_apps
from django.core.exceptions import FieldDoesNotExist, ObjectDoesNotExist
from django.db import IntegrityError
from django.db.models import F, ProtectedError, RestrictedError, UniqueConstraint
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ErrorCode:
    VALIDATION_ERROR = 'VALIDATION_ERROR'
    UNIQUE_CONSTRAINT_VIOLATION = 'UNIQUE_CONSTRAINT_VIOLATION'
    RECORD_NOT_FOUND = 'RECORD_NOT_FOUND'
    RELATED_RECORD_MISSING = 'RELATED_RECORD_MISSING'
    FOREIGN_KEY_CONSTRAINT = 'FOREIGN_KEY_CONSTRAINT'
    INVALID_VALUE = 'INVALID_VALUE'
    DATABASE_ERROR = 'DATABASE_ERROR'
    INTERNAL_ERROR = 'INTERNAL_ERROR'


class ServiceError(Exception):
    """Base exception for all service errors."""

    error_code = ErrorCode.INTERNAL_ERROR
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'An internal error occurred'

    def __init__(self, message=None, *, field=None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    def as_payload(self):
        """Structured failure body returned to the client."""
        payload = {
            'success': False,
            'error': self.error_code,
            'message': self.message,
            'status_code': self.status_code,
        }
        if self.field:
            payload['field'] = self.field
        return payload


class RecordNotFoundError(ServiceError):
    """Raised when a record does not exist or belongs to another owner."""
    error_code = ErrorCode.RECORD_NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'The requested record was not found'


class UniqueConstraintError(ServiceError):
    """Raised when a name, value or SKU is already taken."""
    error_code = ErrorCode.UNIQUE_CONSTRAINT_VIOLATION
    status_code = status.HTTP_409_CONFLICT
    default_message = 'A record with this value already exists'


class RelatedRecordMissingError(ServiceError):
    """Raised when a referenced record (category, inventory item...) is absent."""
    error_code = ErrorCode.RELATED_RECORD_MISSING
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'A related record is missing'


class ReferentialIntegrityError(ServiceError):
    """Raised when deleting a record that other records still reference."""
    error_code = ErrorCode.FOREIGN_KEY_CONSTRAINT
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Cannot perform this operation due to related records'


class InvalidValueError(ServiceError):
    """Raised when a value is well-formed but breaks a business rule."""
    error_code = ErrorCode.INVALID_VALUE
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'The provided value is not valid for this field'


class DatabaseError(ServiceError):
    """Raised for database failures with no better classification."""
    error_code = ErrorCode.DATABASE_ERROR
    default_message = 'A database error occurred'


# =============================================================================
# Database error translation
# =============================================================================

# Columns scoping a uniqueness rule rather than naming the duplicated value.
SCOPE_COLUMNS = {'owner_id'}

_SQLITE_COLUMNS = re.compile(r'UNIQUE constraint failed: (?P<columns>[\w.]+(?:, [\w.]+)*)')
_POSTGRES_COLUMNS = re.compile(r'Key \((?P<columns>[^)]+)\)=')
VOWELS = 'aeiou'


def _constraint_fields(constraint):
    if constraint.fields:
        return list(constraint.fields)
    names = []
    for expression in constraint.expressions:
        nodes = expression.flatten() if hasattr(expression, 'flatten') else [expression]
        names.extend(node.name for node in nodes if isinstance(node, F))
    return names


def _value_field(model, names):
    """Pick the field holding the duplicated value, skipping scope columns."""
    for name in names:
        try:
            field = model._meta.get_field(name)
        except FieldDoesNotExist:
            field = next((f for f in model._meta.concrete_fields if f.column == name), None)
        if field is None or field.is_relation or field.name in SCOPE_COLUMNS:
            continue
        return field.name
    return None


def _find_by_constraint_name(message):
    for model in django_apps.get_models():
        for constraint in model._meta.constraints:
            if isinstance(constraint, UniqueConstraint) and constraint.name in message:
                return model, _value_field(model, _constraint_fields(constraint))
    return None, None


def _find_by_columns(message):
    match = _SQLITE_COLUMNS.search(message) or _POSTGRES_COLUMNS.search(message)
    if not match:
        return None, None

    model = None
    columns = []
    for column in match.group('columns').split(','):
        table, _, name = column.strip().rpartition('.')
        columns.append(name)
        if table and model is None:
            model = next(
                (m for m in django_apps.get_models() if m._meta.db_table == table),
                None,
            )
    if model is None:
        return None, next((c for c in columns if c not in SCOPE_COLUMNS), None)
    return model, _value_field(model, columns)


def describe_unique_violation(exc):
    """
    Turn a database uniqueness failure into a field-tagged error.

    Works from the constraint name when the backend reports one
    (PostgreSQL, SQLite expression indexes) and from the listed columns
    otherwise (SQLite column constraints).
    """
    message = str(exc)
    model, field = _find_by_constraint_name(message)
    if model is None:
        model, field = _find_by_columns(message)

    model_name = str(model._meta.verbose_name) if model is not None else 'record'
    article = 'An' if model_name[:1].lower() in VOWELS else 'A'
    if model is not None:
        model_name = f'{model_name} record'
    return UniqueConstraintError(
        f"{article} {model_name} with this {field or 'value'} already exists",
        field=field,
    )


def translate_error(exc):
    """
    Map an exception onto the service error taxonomy.

    Returns None for exceptions that are not data errors (DRF's own
    exceptions, programming errors).
    """
    if isinstance(exc, ServiceError):
        return exc

    if isinstance(exc, IntegrityError):
        message = str(exc).lower()
        if 'unique' in message or 'duplicate key' in message:
            return describe_unique_violation(exc)
        if 'foreign key' in message:
            return RelatedRecordMissingError()
        if 'not null' in message:
            return InvalidValueError('A required value is missing')
        return DatabaseError()

    if isinstance(exc, (ProtectedError, RestrictedError)):
        return ReferentialIntegrityError()

    if isinstance(exc, (ObjectDoesNotExist, Http404)):
        return RecordNotFoundError()

    return None


# =============================================================================
# DRF exception handler
# =============================================================================

def _first_field(errors):
    if isinstance(errors, dict):
        for key in errors:
            if key != 'non_field_errors':
                return key
    return None


def action_exception_handler(exc, context):
    """
    Render every failure with the structured failure contract.

    Configured as ``REST_FRAMEWORK['EXCEPTION_HANDLER']``.
    """
    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else 'unknown view'

    failure = translate_error(exc)
    if failure is not None:
        if failure.status_code >= 500:
            logger.error('%s failed: %s', view_name, failure.message, exc_info=exc)
        else:
            logger.info('%s rejected request: %s (%s)', view_name, failure.message, failure.error_code)
        return Response(failure.as_payload(), status=failure.status_code)

    response = exception_handler(exc, context)
    if response is None:
        logger.exception('Unhandled error in %s', view_name, exc_info=exc)
        failure = ServiceError()
        return Response(failure.as_payload(), status=failure.status_code)

    if isinstance(exc, drf_exceptions.ValidationError):
        payload = {
            'success': False,
            'error': ErrorCode.VALIDATION_ERROR,
            'message': 'Invalid data provided',
            'status_code': response.status_code,
            'errors': response.data,
        }
        field = _first_field(response.data)
        if field:
            payload['field'] = field
    else:
        detail = response.data.get('detail', '') if isinstance(response.data, dict) else response.data
        payload = {
            'success': False,
            'error': getattr(exc, 'default_code', 'error').upper(),
            'message': str(detail),
            'status_code': response.status_code,
        }

    response.data = payload
    return response
