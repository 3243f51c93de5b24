import pytest

from facility.exceptions import CapacityExceededError, ConflictError, NotFoundError, ValidationError
from facility.models import Room
from facility.services import rooms

pytestmark = pytest.mark.django_db


def _counts(*room_objs):
    return [Room.objects.get(pk=r.pk).current_occupants for r in room_objs]


def test_assign_increments_target_room(room, make_resident):
    r = make_resident()
    rooms.assign_room(r.id, room.id)
    r.refresh_from_db()
    assert r.room_id == room.id
    assert _counts(room) == [1]


def test_move_between_rooms_keeps_counters_in_step(room, make_resident):
    other = Room.objects.create(room_name="Pipit", room_type="shared", capacity=2)
    r = make_resident()
    rooms.assign_room(r.id, room.id)
    rooms.assign_room(r.id, other.id, room.id)
    assert _counts(room, other) == [0, 1]
    for rm in (room, other):
        assert Room.objects.get(pk=rm.pk).current_occupants == rm.residents.count()


def test_reassigning_same_room_is_a_no_op(room, make_resident):
    r = make_resident()
    rooms.assign_room(r.id, room.id)
    rooms.assign_room(r.id, room.id, room.id)
    assert _counts(room) == [1]


def test_unassign_decrements(room, make_resident):
    r = make_resident()
    rooms.assign_room(r.id, room.id)
    rooms.assign_room(r.id, None, room.id)
    r.refresh_from_db()
    assert r.room_id is None
    assert _counts(room) == [0]


def test_full_room_rejects_and_changes_nothing(make_resident):
    single = Room.objects.create(room_name="Merpati", capacity=1)
    first, second = make_resident(), make_resident()
    rooms.assign_room(first.id, single.id)
    with pytest.raises(CapacityExceededError):
        rooms.assign_room(second.id, single.id)
    second.refresh_from_db()
    assert second.room_id is None
    assert _counts(single) == [1]


def test_stale_previous_room_is_rejected(room, make_resident):
    other = Room.objects.create(room_name="Jalak", capacity=1)
    r = make_resident()
    rooms.assign_room(r.id, room.id)
    with pytest.raises(ConflictError):
        rooms.assign_room(r.id, other.id, other.id)
    assert _counts(room, other) == [1, 0]


def test_unknown_room_or_resident(room, make_resident):
    r = make_resident()
    with pytest.raises(NotFoundError):
        rooms.assign_room(r.id, 999999)
    with pytest.raises(NotFoundError):
        rooms.assign_room(999999, room.id)


def test_delete_room_with_residents_conflicts(room, make_resident):
    rooms.assign_room(make_resident().id, room.id)
    with pytest.raises(ConflictError):
        rooms.delete_room(room.id)
    assert Room.objects.filter(pk=room.pk).exists()


def test_delete_empty_room(room):
    rooms.delete_room(room.id)
    assert not Room.objects.filter(pk=room.pk).exists()


def test_capacity_cannot_drop_below_occupants(room, make_resident):
    rooms.assign_room(make_resident().id, room.id)
    rooms.assign_room(make_resident().id, room.id)
    with pytest.raises(ValidationError):
        rooms.update_room(room.id, {"capacity": 1})
    updated = rooms.update_room(room.id, {"capacity": 3, "status": "occupied"})
    assert updated.capacity == 3 and updated.status == "occupied"


def test_reports_count_from_residents(room, make_resident):
    Room.objects.create(room_name="Elang", capacity=1)
    rooms.assign_room(make_resident(name="Siti").id, room.id)
    rooms.assign_room(make_resident(name="Ani", status="Keluar").id, room.id)

    listing = {r["room_name"]: r for r in rooms.list_rooms()}
    assert listing["Kenari"]["current_occupants"] == 2
    assert listing["Kenari"]["resident_names"] == "Ani, Siti"
    assert listing["Kenari"]["available_beds"] == 0
    assert listing["Elang"]["is_available"] is True

    assert [r["room_name"] for r in rooms.available_rooms()] == ["Elang"]

    report = {r["room_name"]: r for r in rooms.occupancy_report()}
    # only active residents count in the occupancy report
    assert report["Kenari"]["current_occupants"] == 1
    assert report["Kenari"]["occupancy_status"] == "partially_occupied"
    assert report["Elang"]["occupancy_status"] == "empty"


def test_reconcile_repairs_drift(room, make_resident):
    make_resident(room=room)
    Room.objects.filter(pk=room.pk).update(current_occupants=2)
    fixed = rooms.reconcile_occupancy()
    assert fixed == [("Kenari", 2, 1)]
    assert _counts(room) == [1]
    assert rooms.reconcile_occupancy() == []
