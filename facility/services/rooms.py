"""
Rooms and the occupancy ledger.

``Room.current_occupants`` must always equal the number of residents
referencing the room.  Every assignment change goes through
:func:`assign_room`, which locks the rows involved, checks capacity and
moves the counters in the same transaction as the resident update.
Reads that report occupancy recount from the resident relation, and
:func:`reconcile_occupancy` repairs any counter that drifted anyway.
"""
from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import Count, F, Q

from facility.exceptions import CapacityExceededError, ConflictError, NotFoundError, ValidationError
from facility.models import Resident, Room
from facility.services.audit import log_action

logger = logging.getLogger(__name__)

ROOM_FIELDS = ('room_name', 'room_type', 'capacity', 'notes', 'status')


def _lock_rooms(*room_ids: int | None) -> dict[int, Room]:
    ids = sorted({rid for rid in room_ids if rid is not None})
    if not ids:
        return {}
    # lock in id order so two concurrent moves cannot deadlock
    rooms = {r.id: r for r in Room.objects.select_for_update().filter(id__in=ids).order_by('id')}
    for rid in ids:
        if rid not in rooms:
            raise NotFoundError(f"Room {rid} not found", field='room_id')
    return rooms


def _occupy(room: Room) -> None:
    """Increment the counter of a locked room, enforcing its capacity."""
    if room.current_occupants >= room.capacity:
        raise CapacityExceededError(
            f"Room {room.room_name} is full ({room.current_occupants}/{room.capacity})", field='room_id'
        )
    Room.objects.filter(id=room.id).update(current_occupants=F('current_occupants') + 1)
    room.current_occupants += 1


def _vacate(room: Room) -> None:
    updated = Room.objects.filter(id=room.id, current_occupants__gt=0).update(
        current_occupants=F('current_occupants') - 1
    )
    if updated:
        room.current_occupants -= 1
    else:
        logger.warning("Room %s counter already at zero while vacating", room.room_name)


def take_bed(room_id: int) -> Room:
    """Reserve one bed in a room for a resident being created.  Caller holds the transaction."""
    room = _lock_rooms(room_id)[room_id]
    _occupy(room)
    return room


def assign_room(resident_id: int, new_room_id: int | None, previous_room_id: int | None = None, *,
                user=None) -> Resident:
    """Move a resident to ``new_room_id`` (``None`` unassigns).

    ``previous_room_id`` is optional; when given it must match the room the
    resident currently occupies, otherwise the move is rejected so a stale
    client cannot corrupt the counters.
    """
    with transaction.atomic():
        resident = Resident.objects.select_for_update().filter(id=resident_id).first()
        if resident is None:
            raise NotFoundError("Resident not found")
        current_id = resident.room_id
        if previous_room_id is not None and previous_room_id != current_id:
            raise ConflictError(
                "Resident is no longer in the given previous room", field='previous_room_id'
            )
        if new_room_id == current_id:
            return resident

        rooms = _lock_rooms(current_id, new_room_id)
        if new_room_id is not None:
            _occupy(rooms[new_room_id])
        if current_id is not None:
            _vacate(rooms[current_id])
        resident.room = rooms.get(new_room_id) if new_room_id is not None else None
        resident.save(update_fields=['room', 'updated_at'])

        log_action(user=user, action='room_assign', object_type='resident', object_id=resident.id,
                   detail={'from': current_id, 'to': new_room_id})
    logger.info("Resident %s moved from room %s to %s", resident.resident_id, current_id, new_room_id)
    return resident


# ---------------------------------------------------------------------
# Room CRUD
# ---------------------------------------------------------------------
def create_room(data: dict) -> Room:
    room = Room(**{k: v for k, v in data.items() if k in ROOM_FIELDS})
    room.current_occupants = 0
    room.save()
    logger.info("Room %s created", room.room_name)
    return room


def update_room(room_id: int, data: dict) -> Room:
    with transaction.atomic():
        room = Room.objects.select_for_update().filter(id=room_id).first()
        if room is None:
            raise NotFoundError("Room not found")
        occupants = room.residents.count()
        capacity = data.get('capacity', room.capacity)
        if capacity < occupants:
            raise ValidationError(
                f"Capacity cannot be lower than current occupants ({occupants})", field='capacity'
            )
        for key in ROOM_FIELDS:
            if key in data:
                setattr(room, key, data[key])
        room.save()
    return room


def delete_room(room_id: int) -> None:
    with transaction.atomic():
        room = Room.objects.select_for_update().filter(id=room_id).first()
        if room is None:
            raise NotFoundError("Room not found")
        occupants = room.residents.count()
        if occupants:
            raise ConflictError(f"Room {room.room_name} still has {occupants} resident(s)")
        room.delete()
    logger.info("Room %s deleted", room.room_name)


# ---------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------
def list_rooms() -> list[dict]:
    rooms = Room.objects.annotate(occupants=Count('residents')).prefetch_related('residents').order_by('room_name')
    result = []
    for room in rooms:
        result.append({
            'id': room.id,
            'room_name': room.room_name,
            'room_type': room.room_type,
            'capacity': room.capacity,
            'current_occupants': room.occupants,
            'status': room.status,
            'notes': room.notes,
            'resident_names': ', '.join(sorted(r.name for r in room.residents.all())),
            'is_available': room.occupants < room.capacity,
            'available_beds': max(room.capacity - room.occupants, 0),
            'created_at': room.created_at,
            'updated_at': room.updated_at,
        })
    return result


def available_rooms() -> list[dict]:
    return [r for r in list_rooms() if r['is_available']]


def occupancy_report() -> list[dict]:
    rooms = Room.objects.annotate(
        active_occupants=Count('residents', filter=Q(residents__status='Aktif'))
    ).order_by('room_name')
    report = []
    for room in rooms:
        occupied = room.active_occupants
        if occupied == 0:
            label = 'empty'
        elif occupied < room.capacity:
            label = 'partially_occupied'
        else:
            label = 'full'
        report.append({
            'id': room.id,
            'room_name': room.room_name,
            'room_type': room.room_type,
            'capacity': room.capacity,
            'current_occupants': occupied,
            'status': room.status,
            'occupancy_status': label,
        })
    return report


def reconcile_occupancy() -> list[tuple[str, int, int]]:
    """Reset every counter to the real resident count; return the corrections made."""
    fixed = []
    with transaction.atomic():
        rooms = list(Room.objects.select_for_update().order_by('id'))
        counts = dict(
            Resident.objects.filter(room__isnull=False).values('room').annotate(n=Count('id')).values_list('room', 'n')
        )
        for room in rooms:
            real = counts.get(room.id, 0)
            if room.current_occupants != real:
                fixed.append((room.room_name, room.current_occupants, real))
                Room.objects.filter(id=room.id).update(current_occupants=real)
                logger.warning(
                    "Room %s occupancy drift: stored %d, actual %d", room.room_name, room.current_occupants, real
                )
    return fixed
