"""
Domain errors and the unified API exception handler.

Services raise the errors below; DRF turns them into responses through
:func:`api_exception_handler`, which gives every failure the same
``{'ok': False, 'error': {...}}`` envelope.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler, set_rollback

logger = logging.getLogger(__name__)


class FacilityError(APIException):
    """Base class for errors raised by the facility services."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'facility_error'
    default_detail = 'Request could not be processed'

    def __init__(self, detail=None, *, field: str | None = None):
        super().__init__(detail=detail)
        self.field = field


class ValidationError(FacilityError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'validation_error'
    default_detail = 'Invalid input'


class NotFoundError(FacilityError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = 'not_found'
    default_detail = 'Not found'


class ConflictError(FacilityError):
    status_code = status.HTTP_409_CONFLICT
    default_code = 'conflict'
    default_detail = 'Conflicting state'


class CapacityExceededError(ConflictError):
    default_code = 'capacity_exceeded'
    default_detail = 'Room is full'


class DataIntegrityError(FacilityError):
    """Stored data violates an assumption (e.g. a malformed generated code)."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = 'data_integrity'
    default_detail = 'Stored data is inconsistent'


class InternalError(FacilityError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = 'internal_error'
    default_detail = 'Internal server error'


def _message(data) -> str:
    if isinstance(data, dict):
        if 'detail' in data:
            return str(data['detail'])
        # serializer errors: {'field': ['msg', ...]}
        parts = []
        for key, value in data.items():
            text = value[0] if isinstance(value, list) and value else value
            parts.append(f"{key}: {text}")
        return '; '.join(parts)
    if isinstance(data, list) and data:
        return str(data[0])
    return str(data)


def _first_field(data) -> str | None:
    if isinstance(data, dict):
        for key in data:
            if key not in ('detail', 'non_field_errors'):
                return key
    return None


def api_exception_handler(exc, context):
    if isinstance(exc, FacilityError):
        set_rollback()
        error = {'code': exc.default_code, 'message': str(exc.detail)}
        if exc.field:
            error['field'] = exc.field
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.default_code, exc.detail)
        return Response({'ok': False, 'error': error}, status=exc.status_code)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        # Anything unexpected (database errors included) becomes internal_error
        logger.exception("Unhandled error in %s", context.get('view'))
        set_rollback()
        message = str(exc) if settings.DEBUG else InternalError.default_detail
        return Response(
            {'ok': False, 'error': {'code': InternalError.default_code, 'message': message}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, Http404):
        code = NotFoundError.default_code
    elif resp.status_code == status.HTTP_400_BAD_REQUEST:
        code = ValidationError.default_code
    else:
        code = getattr(exc, 'default_code', None) or 'api_error'
    error = {'code': code, 'message': _message(resp.data)}
    field = _first_field(resp.data)
    if field:
        error['field'] = field
    return Response({'ok': False, 'error': error}, status=resp.status_code, headers=dict(resp.items()))
