"""
Role based access control.

Every endpoint names the resource it serves; :func:`can_access` is the
single place deciding which role may read, write or delete it.
"""
from __future__ import annotations

from rest_framework.permissions import BasePermission, SAFE_METHODS

ADMIN_ROLES = {"admin"}
OPERATOR_ROLES = {"staff", "doctor", "nurse"}

# resource -> actions open to operators (admin may do everything)
OPERATOR_ACCESS: dict[str, set[str]] = {
    "residents": {"read", "write"},
    "records": {"read", "write"},
    "rooms": {"read", "write", "delete"},
    "reference": {"read"},
    "dashboard": {"read"},
    "transactions": set(),
    "users": set(),
}


def action_for_method(method: str) -> str:
    if method in SAFE_METHODS:
        return "read"
    if method == "DELETE":
        return "delete"
    return "write"


def can_access(role: str | None, resource: str, action: str) -> bool:
    if role in ADMIN_ROLES:
        return True
    if role in OPERATOR_ROLES:
        return action in OPERATOR_ACCESS.get(resource, set())
    return False


def resource_permission(resource: str) -> type[BasePermission]:
    """Build a permission class guarding ``resource`` for the request method."""

    class _ResourcePermission(BasePermission):
        message = "You do not have access to this resource"

        def has_permission(self, request, view) -> bool:  # type: ignore[override]
            user = getattr(request, "user", None)
            if not (user and user.is_authenticated):
                return False
            return can_access(getattr(user, "role", None), resource, action_for_method(request.method))

    _ResourcePermission.__name__ = f"{resource.title()}Permission"
    return _ResourcePermission


class IsAdminRole(BasePermission):
    """Allow access only to users with an administrative role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) in ADMIN_ROLES)
