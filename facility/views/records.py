from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from facility.models import DailyRecord
from facility.permissions import resource_permission
from facility.serializers.records import DailyRecordCreateSerializer, DailyRecordFilterSerializer
from facility.services import records as record_service

from .common import iso, query_params


def serialize_record(rec: DailyRecord) -> dict:
    resident = rec.resident
    activity = rec.activity_type
    return {
        'id': rec.id,
        'resident_id': rec.resident_id,
        'resident_name': resident.name,
        'resident_type': 'Opa' if resident.gender == 'male' else 'Oma',
        'activity_type_id': rec.activity_type_id,
        'activity_name': activity.name,
        'activity_icon': activity.icon,
        'activity_color': activity.color,
        'record_datetime': iso(rec.record_datetime),
        'condition': rec.condition,
        'notes': rec.notes,
        'recorded_by': rec.recorded_by,
        'created_at': iso(rec.created_at),
    }


@api_view(['GET', 'POST'])
@permission_classes([resource_permission('records')])
def records_list(request):
    if request.method == 'GET':
        filters = query_params(request, DailyRecordFilterSerializer)
        rows = record_service.list_daily_records(**filters)
        return Response({'ok': True, 'data': [serialize_record(r) for r in rows]})

    s = DailyRecordCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    record = record_service.create_daily_record(user=request.user, **s.validated_data)
    return Response({'ok': True, 'message': 'Record saved', 'data': serialize_record(record)},
                    status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([resource_permission('records')])
def record_detail(request, pk: int):
    record_service.delete_daily_record(pk, user=request.user)
    return Response({'ok': True, 'message': 'Record deleted'})
