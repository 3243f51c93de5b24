import datetime as dt

import pytest
from django.utils import timezone

from facility.exceptions import NotFoundError, ValidationError
from facility.models import DailyRecord
from facility.services import records

pytestmark = pytest.mark.django_db


def _at(y, m, d, hh=9, mm=0):
    return timezone.make_aware(dt.datetime(y, m, d, hh, mm))


def test_date_range_is_inclusive_and_newest_first(make_resident, activity):
    r = make_resident()
    for day in (1, 2, 3, 4):
        records.create_daily_record(resident_id=r.id, activity_type_id=activity.id, notes=f"hari {day}",
                                    record_datetime=_at(2024, 5, day, 23, 30))
    rows = records.list_daily_records(date_from=dt.date(2024, 5, 2), date_to=dt.date(2024, 5, 3))
    assert [row.notes for row in rows] == ["hari 3", "hari 2"]


def test_filters_by_resident_and_activity(make_resident, activity):
    from facility.models import ActivityType

    other_activity = ActivityType.objects.create(name="Istirahat")
    a, b = make_resident(), make_resident()
    records.create_daily_record(resident_id=a.id, activity_type_id=activity.id, notes="makan siang")
    records.create_daily_record(resident_id=b.id, activity_type_id=other_activity.id, notes="tidur siang")

    assert [x.notes for x in records.list_daily_records(resident_id=a.id)] == ["makan siang"]
    assert [x.notes for x in records.list_daily_records(activity_type_id=other_activity.id)] == ["tidur siang"]


def test_notes_are_required(make_resident, activity):
    r = make_resident()
    with pytest.raises(ValidationError) as exc:
        records.create_daily_record(resident_id=r.id, activity_type_id=activity.id, notes="   ")
    assert exc.value.field == "notes"
    assert DailyRecord.objects.count() == 0


def test_references_must_exist(make_resident, activity):
    r = make_resident()
    with pytest.raises(ValidationError):
        records.create_daily_record(resident_id=999, activity_type_id=activity.id, notes="x")
    with pytest.raises(ValidationError):
        records.create_daily_record(resident_id=r.id, activity_type_id=999, notes="x")


def test_defaults(make_resident, activity, staff_user):
    r = make_resident()
    rec = records.create_daily_record(resident_id=r.id, activity_type_id=activity.id, notes="<b>ok</b>")
    assert rec.recorded_by == "System"
    assert rec.condition == "Baik"
    assert rec.notes == "ok"
    rec2 = records.create_daily_record(resident_id=r.id, activity_type_id=activity.id, notes="ok", user=staff_user)
    assert rec2.recorded_by == "Staff Demo"


def test_delete(make_resident, activity):
    rec = records.create_daily_record(resident_id=make_resident().id, activity_type_id=activity.id, notes="x")
    records.delete_daily_record(rec.id)
    assert not DailyRecord.objects.exists()
    with pytest.raises(NotFoundError):
        records.delete_daily_record(rec.id)


def test_condition_must_be_known(make_resident, activity):
    r = make_resident()
    with pytest.raises(ValidationError) as exc:
        records.create_daily_record(resident_id=r.id, activity_type_id=activity.id, notes="x", condition="Parah")
    assert exc.value.field == "condition"
    assert DailyRecord.objects.count() == 0
