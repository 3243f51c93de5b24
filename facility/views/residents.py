"""
Resident endpoints.

``POST /api/residents`` accepts multipart form data so the photo and
audio recording can be uploaded together with the profile; guardians and
medications arrive as JSON-encoded strings in that case.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from facility.exceptions import ValidationError
from facility.models import HealthRecord, Resident
from facility.permissions import resource_permission
from facility.serializers.residents import (
    AssignRoomSerializer,
    ResidentCreateSerializer,
    ResidentProfileSerializer,
)
from facility.services import residents as resident_service
from facility.services.rooms import assign_room

from .common import iso, upload_url
from .records import serialize_record

READING_FIELDS = resident_service.HEMATOLOGY_FIELDS + resident_service.BLOOD_SUGAR_FIELDS


def _serialize(r: Resident) -> dict:
    room = r.room
    return {
        'id': r.id,
        'resident_id': r.resident_id,
        'name': r.name,
        'gender': r.gender,
        'type': 'Opa' if r.gender == 'male' else 'Oma',
        'age': r.age,
        'birth_date': iso(r.birth_date),
        'birth_place': r.birth_place,
        'address': r.address,
        'religion': r.religion,
        'join_date': iso(r.join_date),
        'condition': r.condition,
        'medical_history': r.medical_history,
        'allergies': r.allergies,
        'smoking': r.smoking,
        'alcohol': r.alcohol,
        'photo': upload_url(r.photo),
        'audio': upload_url(r.audio),
        'status': r.status,
        'room_id': r.room_id,
        'room_name': room.room_name if room else None,
        'room_type': room.room_type if room else None,
        'room_status': room.status if room else None,
        'created_at': iso(r.created_at),
        'updated_at': iso(r.updated_at),
    }


def _reading(record: HealthRecord | None, fields: tuple[str, ...]) -> dict | None:
    if record is None:
        return None
    data = {f: getattr(record, f) for f in fields}
    data['recorded_date'] = iso(record.recorded_date)
    return data


def _serialize_detail(detail: dict) -> dict:
    r: Resident = detail['resident']
    guardians = [
        {
            'id': g.id, 'name': g.name, 'id_number': g.id_number, 'email': g.email, 'phone': g.phone,
            'relationship': g.relationship, 'address': g.address, 'is_primary': g.is_primary,
            'emergency_contact': g.emergency_contact,
        }
        for g in detail['guardians']
    ]
    medications = [
        {
            'id': m.id, 'medication_name': m.medication_name, 'dosage': m.dosage, 'schedule': m.schedule,
            'start_date': iso(m.start_date), 'end_date': iso(m.end_date), 'status': m.status,
            'prescribing_doctor': m.prescribing_doctor, 'pharmacy': m.pharmacy, 'notes': m.notes,
        }
        for m in detail['medications']
    ]
    data = _serialize(r)
    data.update({
        'guardians': guardians,
        'guardian': guardians[0] if guardians else None,
        'medications': medications,
        'medication': medications[0] if medications else None,
        'hematology': _reading(detail['hematology'], resident_service.HEMATOLOGY_FIELDS),
        'bloodSugar': _reading(detail['blood_sugar'], resident_service.BLOOD_SUGAR_FIELDS),
        'functional': {'walking': r.functional_walking, 'eating': r.functional_eating},
        'mental': {'emotion': r.mental_emotion, 'consciousness': r.mental_consciousness},
        'recent_records': [serialize_record(rec) for rec in detail['recent_records']],
    })
    return data


@api_view(['GET', 'POST'])
@permission_classes([resource_permission('residents')])
def residents_list(request):
    if request.method == 'GET':
        params = request.query_params
        rows = resident_service.list_residents(
            search=params.get('search') or None,
            status=params.get('status') or None,
            gender_type=params.get('type') or None,
        )
        return Response({'ok': True, 'data': [_serialize(r) for r in rows]})

    s = ResidentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = dict(s.validated_data)
    photo = vd.pop('photo', None)
    audio = vd.pop('audio', None)
    guardians = vd.pop('guardians', [])
    medications = vd.pop('medications', [])
    readings = {f: vd.pop(f) for f in READING_FIELDS if f in vd}
    result = resident_service.create_resident(
        vd, guardians, medications, readings, photo=photo, audio=audio, user=request.user,
    )
    return Response({'ok': True, 'message': 'Resident created', **result}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT'])
@permission_classes([resource_permission('residents')])
def resident_detail(request, pk: int):
    if request.method == 'PUT':
        s = ResidentProfileSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = dict(s.validated_data)
        photo = vd.pop('photo', None)
        audio = vd.pop('audio', None)
        resident_service.update_resident(pk, vd, photo=photo, audio=audio, user=request.user)
    return Response({'ok': True, 'data': _serialize_detail(resident_service.resident_detail(pk))})


@api_view(['POST', 'PUT'])
@permission_classes([resource_permission('residents')])
def resident_assign_room(request, pk: int):
    s = AssignRoomSerializer(data=request.data)
    if not s.is_valid():
        raise ValidationError('room_id must be a room id or null', field='room_id')
    resident = assign_room(
        pk, s.validated_data['room_id'], s.validated_data.get('previous_room_id'), user=request.user,
    )
    return Response({'ok': True, 'message': 'Room assignment updated', 'data': _serialize(resident)})
