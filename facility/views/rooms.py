from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from facility.exceptions import NotFoundError
from facility.models import Room
from facility.permissions import resource_permission
from facility.serializers.rooms import RoomSerializer
from facility.services import rooms as room_service

from .common import iso


def _serialize(room: Room) -> dict:
    return {
        'id': room.id,
        'room_name': room.room_name,
        'room_type': room.room_type,
        'capacity': room.capacity,
        'current_occupants': room.current_occupants,
        'status': room.status,
        'notes': room.notes,
        'created_at': iso(room.created_at),
        'updated_at': iso(room.updated_at),
    }


@api_view(['GET', 'POST'])
@permission_classes([resource_permission('rooms')])
def rooms_list(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': room_service.list_rooms()})
    s = RoomSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    room = room_service.create_room(s.validated_data)
    return Response({'ok': True, 'message': 'Room created', 'data': _serialize(room)},
                    status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([resource_permission('rooms')])
def rooms_available(request):
    return Response({'ok': True, 'data': room_service.available_rooms()})


@api_view(['GET'])
@permission_classes([resource_permission('rooms')])
def rooms_occupancy_report(request):
    return Response({'ok': True, 'data': room_service.occupancy_report()})


@api_view(['PUT', 'DELETE'])
@permission_classes([resource_permission('rooms')])
def room_detail(request, pk: int):
    if request.method == 'DELETE':
        room_service.delete_room(pk)
        return Response({'ok': True, 'message': 'Room deleted'})
    room = Room.objects.filter(pk=pk).first()
    if room is None:
        raise NotFoundError('Room not found')
    s = RoomSerializer(room, data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    room = room_service.update_room(pk, s.validated_data)
    return Response({'ok': True, 'message': 'Room updated', 'data': _serialize(room)})
