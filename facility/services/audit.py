from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model

from facility.models import AuditEvent

User = get_user_model()


def log_action(*, user, action: str, object_type: str | None = None, object_id: int | None = None,
               detail: dict[str, Any] | None = None) -> AuditEvent:
    return AuditEvent.objects.create(
        user=user if isinstance(user, User) and user.pk else None,
        action=action,
        object_type=object_type, object_id=object_id,
        detail=detail or {},
    )
