"""Daily activity records."""
from __future__ import annotations

import datetime as dt
import logging

import bleach
from django.utils import timezone

from facility.exceptions import NotFoundError, ValidationError
from facility.models import ActivityType, DailyRecord, Resident
from facility.services.audit import log_action

logger = logging.getLogger(__name__)


def list_daily_records(*, resident_id: int | None = None, date_from: dt.date | None = None,
                       date_to: dt.date | None = None, activity_type_id: int | None = None) -> list[DailyRecord]:
    qs = DailyRecord.objects.select_related('resident', 'activity_type')
    if resident_id:
        qs = qs.filter(resident_id=resident_id)
    # inclusive on both ends, compared on the local calendar date
    if date_from:
        qs = qs.filter(record_datetime__date__gte=date_from)
    if date_to:
        qs = qs.filter(record_datetime__date__lte=date_to)
    if activity_type_id:
        qs = qs.filter(activity_type_id=activity_type_id)
    return list(qs.order_by('-record_datetime', '-id'))


def create_daily_record(*, resident_id: int, activity_type_id: int, notes: str,
                        record_datetime: dt.datetime | None = None, condition: str = 'Baik',
                        recorded_by: str | None = None, user=None) -> DailyRecord:
    notes = bleach.clean(notes or '', tags=[], strip=True).strip()
    if not notes:
        raise ValidationError("notes is required", field='notes')
    if condition not in dict(DailyRecord.CONDITION_CHOICES):
        raise ValidationError(f"Unknown condition {condition!r}", field='condition')
    resident = Resident.objects.filter(pk=resident_id).first()
    if resident is None:
        raise ValidationError("Unknown resident", field='resident_id')
    activity = ActivityType.objects.filter(pk=activity_type_id).first()
    if activity is None:
        raise ValidationError("Unknown activity type", field='activity_type_id')

    if record_datetime is None:
        record_datetime = timezone.now()
    elif timezone.is_naive(record_datetime):
        record_datetime = timezone.make_aware(record_datetime)
    if not recorded_by:
        recorded_by = (getattr(user, 'full_name', '') or 'System') if user else 'System'

    record = DailyRecord.objects.create(
        resident=resident, activity_type=activity, record_datetime=record_datetime.replace(microsecond=0),
        condition=condition, notes=notes, recorded_by=recorded_by,
    )
    logger.info("Daily record %s added for %s", record.id, resident.resident_id)
    return record


def delete_daily_record(pk: int, *, user=None) -> None:
    record = DailyRecord.objects.filter(pk=pk).first()
    if record is None:
        raise NotFoundError("Record not found")
    record.delete()
    log_action(user=user, action='record_delete', object_type='daily_record', object_id=pk)
