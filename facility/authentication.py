"""
JWT authentication for API requests.

Requests carry ``Authorization: Bearer <access token>`` issued by the
login endpoint.  Keeping the class in its own module gives settings a
stable import path without pulling in view code.
"""
from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed


class BearerJWTAuthentication(JWTAuthentication):
    """simplejwt authentication that also refuses deactivated accounts."""

    def get_user(self, validated_token):
        user = super().get_user(validated_token)
        if not user.is_active:
            raise AuthenticationFailed('User is inactive', code='user_inactive')
        return user
