from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from facility.permissions import resource_permission
from facility.serializers.users import PasswordChangeSerializer, UserCreateSerializer
from facility.services import users as user_service

from .common import serialize_user


@api_view(['GET', 'POST'])
@permission_classes([resource_permission('users')])
def users_list(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': [serialize_user(u) for u in user_service.list_users()]})
    s = UserCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = user_service.create_user(actor=request.user, **s.validated_data)
    return Response({'ok': True, 'message': 'User created', 'data': serialize_user(user)},
                    status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([resource_permission('users')])
def user_detail(request, pk: int):
    user_service.delete_user(pk, actor=request.user)
    return Response({'ok': True, 'message': 'User deleted'})


@api_view(['PUT'])
@permission_classes([resource_permission('users')])
def user_password(request, pk: int):
    s = PasswordChangeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user_service.change_password(pk, s.validated_data['newPassword'], actor=request.user)
    return Response({'ok': True, 'message': 'Password updated'})
