import datetime as dt

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from facility.exceptions import CapacityExceededError, ValidationError
from facility.models import Guardian, HealthRecord, Medication, Resident, Room
from facility.services import identifiers, residents

pytestmark = pytest.mark.django_db


def _profile(**overrides):
    profile = {
        "name": "Siti Aminah",
        "gender": "female",
        "birth_date": dt.date(1948, 5, 20),
        "join_date": dt.date(2024, 2, 1),
        "condition": "Cukup Sehat",
    }
    profile.update(overrides)
    return profile


def _uploaded_files(settings):
    root = settings.MEDIA_ROOT
    return [p for p in root.rglob("*") if p.is_file()] if root.exists() else []


def test_age_counts_birthday_itself():
    born = dt.date(2000, 6, 15)
    assert residents.calculate_age(born, today=dt.date(2024, 6, 14)) == 23
    assert residents.calculate_age(born, today=dt.date(2024, 6, 15)) == 24


def test_create_resident_writes_full_aggregate():
    result = residents.create_resident(
        _profile(),
        guardians=[
            {"name": "Budi", "phone": "0812", "relationship": "Anak", "is_primary": True},
            {"name": "Tanpa Telepon", "phone": ""},
        ],
        medications=[{"medication_name": "Amlodipine", "dosage": "5mg"}, {"medication_name": ""}],
        readings={"hemoglobin": "12.5", "blood_sugar_fasting": "110"},
    )
    assert result["resident_id"] == "R-001"
    resident = Resident.objects.get(pk=result["id"])
    assert result["age"] == residents.calculate_age(dt.date(1948, 5, 20))
    assert resident.status == "Aktif"

    assert list(Guardian.objects.filter(resident=resident).values_list("name", flat=True)) == ["Budi"]
    meds = list(Medication.objects.filter(resident=resident))
    assert len(meds) == 1
    assert meds[0].status == "Active"
    assert meds[0].start_date == dt.date(2024, 2, 1)

    records = {r.record_type: r for r in HealthRecord.objects.filter(resident=resident)}
    assert set(records) == {"hematology", "blood_sugar"}
    assert records["hematology"].hemoglobin == "12.5"
    assert records["blood_sugar"].recorded_date == dt.date(2024, 2, 1)
    assert records["blood_sugar"].recorded_by == "system"


def test_no_readings_means_no_health_records():
    result = residents.create_resident(_profile(), readings={"hemoglobin": "", "leukocyte": None})
    assert not HealthRecord.objects.filter(resident_id=result["id"]).exists()


def test_codes_are_sequential():
    first = residents.create_resident(_profile())
    second = residents.create_resident(_profile(name="Ahmad", gender="male"))
    assert (first["resident_id"], second["resident_id"]) == ("R-001", "R-002")


def test_missing_required_field_persists_nothing(settings):
    with pytest.raises(ValidationError) as exc:
        residents.create_resident(
            _profile(birth_date=None),
            guardians=[{"name": "Budi", "phone": "0812"}],
            photo=SimpleUploadedFile("face.jpg", b"jpegdata", content_type="image/jpeg"),
        )
    assert exc.value.field == "birth_date"
    assert Resident.objects.count() == 0
    assert Guardian.objects.count() == 0
    assert _uploaded_files(settings) == []


def test_uploads_are_stored_and_removed_on_failure(settings):
    full = Room.objects.create(room_name="Merpati", capacity=1, current_occupants=1)
    with pytest.raises(CapacityExceededError):
        residents.create_resident(
            _profile(room_id=full.id),
            photo=SimpleUploadedFile("face.png", b"pngdata", content_type="image/png"),
            audio=SimpleUploadedFile("voice.mp3", b"mp3data", content_type="audio/mpeg"),
        )
    assert Resident.objects.count() == 0
    assert _uploaded_files(settings) == []

    result = residents.create_resident(
        _profile(), photo=SimpleUploadedFile("face.png", b"pngdata", content_type="image/png"),
    )
    resident = Resident.objects.get(pk=result["id"])
    assert resident.photo.name.startswith("photos/photo-")
    assert resident.photo.name.endswith(".png")
    assert len(_uploaded_files(settings)) == 1


def test_wrong_upload_type_is_rejected():
    with pytest.raises(ValidationError) as exc:
        residents.create_resident(
            _profile(), audio=SimpleUploadedFile("voice.exe", b"x", content_type="application/octet-stream"),
        )
    assert exc.value.field == "audio"
    assert Resident.objects.count() == 0


def test_create_with_room_takes_a_bed(room):
    result = residents.create_resident(_profile(room_id=room.id))
    room.refresh_from_db()
    assert room.current_occupants == 1
    assert Resident.objects.get(pk=result["id"]).room_id == room.id


def test_list_filters_and_orders_by_name(make_resident):
    make_resident(name="Wati", gender="female")
    make_resident(name="Bambang", gender="male", resident_id="R-010")
    make_resident(name="Ani", gender="female", status="Keluar")

    assert [r.name for r in residents.list_residents()] == ["Ani", "Bambang", "Wati"]
    assert [r.name for r in residents.list_residents(gender_type="Opa")] == ["Bambang"]
    assert [r.name for r in residents.list_residents(gender_type="Oma", status="Aktif")] == ["Wati"]
    assert [r.name for r in residents.list_residents(search="R-010")] == ["Bambang"]
    with pytest.raises(ValidationError):
        residents.list_residents(gender_type="Kakek")


def test_update_recomputes_age(make_resident):
    r = make_resident(birth_date=dt.date(1950, 1, 1), age=0)
    updated = residents.update_resident(r.id, {"birth_date": dt.date(1960, 1, 1), "status": "Perlu Perhatian"})
    assert updated.age == residents.calculate_age(dt.date(1960, 1, 1))
    assert updated.status == "Perlu Perhatian"


def test_detail_picks_latest_readings(make_resident):
    r = make_resident()
    HealthRecord.objects.create(resident=r, record_type="hematology", hemoglobin="11", recorded_date=dt.date(2024, 1, 1))
    HealthRecord.objects.create(resident=r, record_type="hematology", hemoglobin="13", recorded_date=dt.date(2024, 3, 1))
    Guardian.objects.create(resident=r, name="Kedua", phone="1")
    Guardian.objects.create(resident=r, name="Utama", phone="2", is_primary=True)

    detail = residents.resident_detail(r.id)
    assert detail["hematology"].hemoglobin == "13"
    assert detail["blood_sugar"] is None
    assert [g.name for g in detail["guardians"]] == ["Utama", "Kedua"]


def test_failure_after_dependents_rolls_back_rows_and_files(settings, monkeypatch):
    def lost_lab_sheet(resident, readings):
        raise RuntimeError("lab sheet lost")

    monkeypatch.setattr(residents, "_build_readings", lost_lab_sheet)
    with pytest.raises(RuntimeError):
        residents.create_resident(
            _profile(),
            guardians=[{"name": "Budi", "phone": "0812"}],
            medications=[{"medication_name": "Amlodipine"}],
            readings={"hemoglobin": "12.5"},
            photo=SimpleUploadedFile("face.jpg", b"jpegdata", content_type="image/jpeg"),
        )
    assert Resident.objects.count() == 0
    assert Guardian.objects.count() == 0
    assert Medication.objects.count() == 0
    assert HealthRecord.objects.count() == 0
    assert _uploaded_files(settings) == []


@pytest.mark.parametrize("medication, field", [
    ({"medication_name": "X", "status": "Bogus"}, "medications"),
    ({"medication_name": "X", "end_date": "not-a-date"}, "medications"),
])
def test_invalid_medication_values_are_rejected(medication, field):
    with pytest.raises(ValidationError) as exc:
        residents.create_resident(_profile(), medications=[medication])
    assert exc.value.field == field
    assert Resident.objects.count() == 0
    assert Medication.objects.count() == 0


def test_invalid_guardian_flag_is_rejected():
    with pytest.raises(ValidationError) as exc:
        residents.create_resident(_profile(), guardians=[{"name": "Budi", "phone": "0812", "is_primary": "yes"}])
    assert exc.value.field == "guardians"
    assert Resident.objects.count() == 0


def test_codes_stay_gap_free_when_reads_go_stale(monkeypatch):
    real_next = identifiers.next_code
    taken = []
    state = {"stale": False, "collisions": 0}

    def racing_next(model, *, field, prefix):
        if state["stale"] and taken:
            # the first read of each creation misses the row a competing writer just committed
            state["stale"] = False
            state["collisions"] += 1
            return taken[-1]
        return real_next(model, field=field, prefix=prefix)

    monkeypatch.setattr(identifiers, "next_code", racing_next)
    for n in range(6):
        state["stale"] = True
        taken.append(residents.create_resident(_profile(name=f"Penghuni {n}"))["resident_id"])

    assert taken == [f"R-{n:03d}" for n in range(1, 7)]
    assert Resident.objects.count() == 6
    assert state["collisions"] == 5


def test_same_name_residents_keep_insertion_order(make_resident):
    first = make_resident(name="Sri")
    second = make_resident(name="Sri")
    assert [r.id for r in residents.list_residents(search="Sri")] == [first.id, second.id]
