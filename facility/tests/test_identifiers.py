import pytest

from facility.exceptions import DataIntegrityError
from facility.models import Resident
from facility.services.identifiers import create_with_code, format_code, next_code

pytestmark = pytest.mark.django_db


def test_first_code_starts_at_one():
    assert next_code(Resident, field="resident_id", prefix="R") == "R-001"


def test_next_code_follows_most_recent_row(make_resident):
    make_resident(resident_id="R-001")
    make_resident(resident_id="R-002")
    assert next_code(Resident, field="resident_id", prefix="R") == "R-003"


def test_next_code_uses_insertion_order_not_highest_value(make_resident):
    make_resident(resident_id="R-009")
    make_resident(resident_id="R-004")
    assert next_code(Resident, field="resident_id", prefix="R") == "R-005"


def test_other_prefixes_are_ignored(make_resident):
    make_resident(resident_id="R-007")
    make_resident(resident_id="X-100")
    assert next_code(Resident, field="resident_id", prefix="R") == "R-008"


def test_width_is_a_minimum():
    assert format_code("R", 999) == "R-999"
    assert format_code("R", 1000) == "R-1000"


def test_malformed_suffix_is_reported(make_resident):
    make_resident(resident_id="R-abc")
    with pytest.raises(DataIntegrityError):
        next_code(Resident, field="resident_id", prefix="R")


def test_create_with_code_regenerates_on_collision(make_resident, monkeypatch):
    make_resident(resident_id="R-001")
    from facility.services import identifiers

    calls = []
    real_next = identifiers.next_code

    def stale_then_real(model, *, field, prefix):
        calls.append(1)
        # first attempt sees a stale snapshot and proposes a taken code
        return "R-001" if len(calls) == 1 else real_next(model, field=field, prefix=prefix)

    monkeypatch.setattr(identifiers, "next_code", stale_then_real)

    def build(code):
        return Resident(resident_id=code, name="Baru", gender="male", birth_date="1950-01-01",
                        join_date="2024-01-01", condition="Sehat")

    resident = create_with_code(Resident, field="resident_id", prefix="R", build=build)
    assert resident.resident_id == "R-002"
    assert len(calls) == 2


def test_non_ascii_digits_are_malformed(make_resident):
    make_resident(resident_id="R-²")
    with pytest.raises(DataIntegrityError):
        next_code(Resident, field="resident_id", prefix="R")
