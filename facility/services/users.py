"""
Staff account management.

The first admin account ever created (lowest id with role ``admin``) is
the facility's main administrator and cannot be deleted.
"""
from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from facility.exceptions import ConflictError, NotFoundError, ValidationError
from facility.services.audit import log_action

logger = logging.getLogger(__name__)

User = get_user_model()

MIN_PASSWORD_LENGTH = 6


def _check_password(password: str, field: str = 'password') -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field=field)


def protected_admin_id() -> int | None:
    return User.objects.filter(role='admin').order_by('id').values_list('id', flat=True).first()


def list_users():
    return User.objects.order_by('role', 'username')


def create_user(*, username: str, password: str, full_name: str, role: str = 'staff', email: str = '',
                phone: str = '', actor=None):
    _check_password(password)
    with transaction.atomic():
        if User.objects.filter(username=username).exists():
            raise ConflictError("Username already exists", field='username')
        user = User.objects.create_user(
            username=username, password=password, full_name=full_name, role=role, email=email, phone=phone,
        )
        log_action(user=actor, action='user_create', object_type='user', object_id=user.id,
                   detail={'username': username, 'role': role})
    logger.info("User %s (%s) created", username, role)
    return user


def delete_user(pk: int, *, actor=None) -> None:
    with transaction.atomic():
        user = User.objects.select_for_update().filter(pk=pk).first()
        if user is None:
            raise NotFoundError("User not found")
        if user.pk == protected_admin_id():
            raise ConflictError("The main administrator account cannot be deleted")
        if actor is not None and actor.pk == user.pk:
            raise ConflictError("You cannot delete your own account")
        username = user.username
        user.delete()
        log_action(user=actor, action='user_delete', object_type='user', object_id=pk,
                   detail={'username': username})
    logger.info("User %s deleted", username)


def change_password(pk: int, new_password: str, *, actor=None) -> None:
    _check_password(new_password, field='newPassword')
    user = User.objects.filter(pk=pk).first()
    if user is None:
        raise NotFoundError("User not found")
    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])
    log_action(user=actor, action='password_change', object_type='user', object_id=user.id)
