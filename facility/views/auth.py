"""
Login, token refresh and logout.

Login exchanges a username/password for a JWT pair; the access token
goes in ``Authorization: Bearer <token>`` on every other request.
"""
from __future__ import annotations

from django.contrib.auth import authenticate
from django.contrib.auth.models import update_last_login
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken

from facility.exceptions import ValidationError
from facility.serializers.auth import LoginSerializer, LogoutSerializer
from facility.services.audit import log_action

from .common import serialize_user


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    username = s.validated_data['username']

    # inactive accounts are refused by the auth backend
    user = authenticate(request, username=username, password=s.validated_data['password'])
    if user is None:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'username': username, 'ip': request.META.get('REMOTE_ADDR')})
        raise AuthenticationFailed('Invalid username or password')

    update_last_login(None, user)
    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})

    refresh = RefreshToken.for_user(user)
    return Response({
        'ok': True,
        'message': 'Login successful',
        'token': str(refresh.access_token),
        'refresh': str(refresh),
        'user': serialize_user(user),
    })


login_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def refresh_view(request):
    """Exchange a refresh token for a new access (and rotated refresh) token."""
    s = TokenRefreshSerializer(data=request.data)
    try:
        s.is_valid(raise_exception=True)
    except TokenError as e:
        raise InvalidToken(e.args[0])
    data = dict(s.validated_data)
    return Response({'ok': True, 'token': data['access'], 'refresh': data.get('refresh')})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Blacklist the given refresh token, or every outstanding token of the user."""
    s = LogoutSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    refresh = s.validated_data.get('refresh')
    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
        except TokenError as e:
            raise ValidationError(str(e), field='refresh')
        count = 1
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += created
    return Response({'ok': True, 'blacklisted': count})
