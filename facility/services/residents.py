"""
Resident aggregate: creation, updates and read models.

A resident is written together with guardians, medications, initial lab
readings and optional photo/audio uploads.  All of it succeeds or none
of it does; uploaded files are removed again when the write fails.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from facility.exceptions import NotFoundError, ValidationError
from facility.models import DailyRecord, Guardian, HealthRecord, Medication, Resident
from facility.services.audit import log_action
from facility.services.identifiers import create_with_code
from facility.services.rooms import take_bed
from facility.services.uploads import StagedUploads, remove_upload

logger = logging.getLogger(__name__)

RESIDENT_PREFIX = 'R'
REQUIRED_FIELDS = ('name', 'gender', 'birth_date', 'join_date', 'condition')
PROFILE_FIELDS = (
    'name', 'gender', 'birth_date', 'birth_place', 'address', 'religion', 'join_date', 'condition',
    'medical_history', 'allergies', 'smoking', 'alcohol', 'functional_walking', 'functional_eating',
    'mental_emotion', 'mental_consciousness', 'status',
)
HEMATOLOGY_FIELDS = ('hemoglobin', 'leukocyte', 'erythrocyte')
BLOOD_SUGAR_FIELDS = ('blood_sugar_random', 'blood_sugar_fasting', 'blood_sugar_two_hour')
GUARDIAN_FIELDS = ('name', 'id_number', 'email', 'phone', 'relationship', 'address', 'is_primary',
                   'emergency_contact')
MEDICATION_FIELDS = ('dosage', 'schedule', 'end_date', 'status', 'prescribing_doctor', 'pharmacy', 'notes')

# UI labels for the gender filter
GENDER_TYPES = {'Opa': 'male', 'Oma': 'female', 'male': 'male', 'female': 'female'}


def calculate_age(birth_date: dt.date, today: dt.date | None = None) -> int:
    """Whole years between ``birth_date`` and ``today``; the birthday itself counts."""
    today = today or timezone.localdate()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def _text(value: Any) -> str:
    return str(value).strip() if value not in (None, '') else ''


def _checked(row, label: str):
    """Run model validation on a dependent row; errors name the offending field."""
    try:
        row.full_clean(exclude=['resident'])
    except DjangoValidationError as exc:
        field, messages = next(iter(exc.message_dict.items()))
        raise ValidationError(f"{label} {field}: {messages[0]}", field=label) from None
    return row


def _build_guardians(resident: Resident, guardians: list[dict]) -> list[Guardian]:
    rows = []
    for item in guardians:
        # both name and phone are needed to reach a guardian
        if not _text(item.get('name')) or not _text(item.get('phone')):
            continue
        values = {k: item[k] for k in GUARDIAN_FIELDS if k in item and item[k] is not None}
        values['name'] = _text(item['name'])
        values['phone'] = _text(item['phone'])
        rows.append(_checked(Guardian(resident=resident, **values), 'guardians'))
    return rows


def _build_medications(resident: Resident, medications: list[dict]) -> list[Medication]:
    rows = []
    for item in medications:
        name = _text(item.get('medication_name') or item.get('name'))
        if not name:
            continue
        values = {k: item[k] for k in MEDICATION_FIELDS if item.get(k) not in (None, '')}
        values.setdefault('status', 'Active')
        rows.append(_checked(
            Medication(resident=resident, medication_name=name, start_date=resident.join_date, **values),
            'medications',
        ))
    return rows


def _build_readings(resident: Resident, readings: dict) -> list[HealthRecord]:
    rows = []
    for record_type, fields in (('hematology', HEMATOLOGY_FIELDS), ('blood_sugar', BLOOD_SUGAR_FIELDS)):
        values = {f: _text(readings.get(f)) for f in fields}
        if any(values.values()):
            rows.append(HealthRecord(
                resident=resident, record_type=record_type, recorded_date=resident.join_date,
                recorded_by='system', **values,
            ))
    return rows


def create_resident(profile: dict, guardians: list[dict] | None = None, medications: list[dict] | None = None,
                    readings: dict | None = None, *, photo=None, audio=None, user=None) -> dict:
    """Create a resident with all related rows in one transaction.

    Returns the generated resident code, the internal id and the age.
    """
    for field in REQUIRED_FIELDS:
        if profile.get(field) in (None, ''):
            raise ValidationError(f"{field} is required", field=field)

    age = calculate_age(profile['birth_date'])
    room_id = profile.get('room_id')

    with StagedUploads() as staged:
        photo_name = staged.save('photos', photo, label='photo', field='photo')
        audio_name = staged.save('audio', audio, label='audio', field='audio')

        with transaction.atomic():
            room = take_bed(room_id) if room_id else None

            def build(code: str) -> Resident:
                return Resident(
                    resident_id=code, age=age, photo=photo_name, audio=audio_name, room=room,
                    **{k: v for k, v in profile.items() if k in PROFILE_FIELDS and v is not None},
                )

            resident = create_with_code(Resident, field='resident_id', prefix=RESIDENT_PREFIX, build=build)

            Guardian.objects.bulk_create(_build_guardians(resident, guardians or []))
            Medication.objects.bulk_create(_build_medications(resident, medications or []))
            HealthRecord.objects.bulk_create(_build_readings(resident, readings or {}))

            log_action(user=user, action='resident_create', object_type='resident', object_id=resident.id,
                       detail={'resident_id': resident.resident_id})

    logger.info("Resident %s (%s) created", resident.resident_id, resident.name)
    return {'resident_id': resident.resident_id, 'id': resident.id, 'age': age}


def update_resident(pk: int, changes: dict, *, photo=None, audio=None, user=None) -> Resident:
    """Update profile fields.  Room changes go through assign_room only."""
    resident = Resident.objects.filter(pk=pk).first()
    if resident is None:
        raise NotFoundError("Resident not found")
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] in (None, ''):
            raise ValidationError(f"{field} is required", field=field)

    old_files = []
    with StagedUploads() as staged:
        new_photo = staged.save('photos', photo, label='photo', field='photo')
        new_audio = staged.save('audio', audio, label='audio', field='audio')
        with transaction.atomic():
            for key, value in changes.items():
                if key in PROFILE_FIELDS and value is not None:
                    setattr(resident, key, value)
            if new_photo:
                old_files.append(resident.photo.name)
                resident.photo = new_photo
            if new_audio:
                old_files.append(resident.audio.name)
                resident.audio = new_audio
            resident.age = calculate_age(resident.birth_date)
            resident.save()
            log_action(user=user, action='resident_update', object_type='resident', object_id=resident.id,
                       detail={'fields': sorted(changes)})
    for name in old_files:
        remove_upload(name)
    return resident


# ---------------------------------------------------------------------
# Read models
# ---------------------------------------------------------------------
def list_residents(*, search: str | None = None, status: str | None = None,
                   gender_type: str | None = None) -> list[Resident]:
    qs = Resident.objects.select_related('room')
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(resident_id__icontains=search))
    if status:
        qs = qs.filter(status=status)
    if gender_type:
        gender = GENDER_TYPES.get(gender_type)
        if gender is None:
            raise ValidationError("type must be Opa or Oma", field='type')
        qs = qs.filter(gender=gender)
    return list(qs.order_by('name', 'id'))


def _latest_reading(resident: Resident, record_type: str) -> HealthRecord | None:
    return resident.health_records.filter(record_type=record_type).order_by('-recorded_date', '-id').first()


def resident_detail(pk: int) -> dict:
    """The full resident aggregate as shown on the resident page."""
    resident = Resident.objects.select_related('room').filter(pk=pk).first()
    if resident is None:
        raise NotFoundError("Resident not found")
    guardians = list(resident.guardians.order_by('-is_primary', 'id'))
    medications = list(resident.medications.order_by('id'))
    records = list(
        DailyRecord.objects.filter(resident=resident).select_related('activity_type').order_by('-record_datetime')[:10]
    )
    return {
        'resident': resident,
        'guardians': guardians,
        'medications': medications,
        'hematology': _latest_reading(resident, 'hematology'),
        'blood_sugar': _latest_reading(resident, 'blood_sugar'),
        'recent_records': records,
    }
