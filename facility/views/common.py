"""Response shapes shared by several views."""
from __future__ import annotations

from facility.models import User


def iso(value):
    return value.isoformat() if value else None


def upload_url(field) -> str | None:
    return field.url if field else None


def serialize_user(user: User) -> dict:
    # never expose the password hash
    return {
        'id': user.id,
        'username': user.username,
        'full_name': user.full_name,
        'role': user.role,
        'email': user.email,
        'phone': user.phone,
        'is_active': user.is_active,
        'last_login': iso(user.last_login),
        'created_at': iso(user.date_joined),
    }


def query_params(request, serializer_class) -> dict:
    s = serializer_class(data={k: v for k, v in request.query_params.items() if v != ''})
    s.is_valid(raise_exception=True)
    return s.validated_data
