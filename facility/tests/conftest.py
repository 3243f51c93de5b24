import datetime as dt

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from facility.models import ActivityType, DonationCategory, Resident, Room, User


@pytest.fixture(autouse=True)
def _isolated(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "uploads"
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username="admin", password="admin123", role="admin",
                                    full_name="Administrator Utama")


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(username="staff", password="staff123", role="staff", full_name="Staff Demo")


@pytest.fixture
def admin_client(admin_user):
    c = APIClient()
    c.force_authenticate(user=admin_user)
    return c


@pytest.fixture
def staff_client(staff_user):
    c = APIClient()
    c.force_authenticate(user=staff_user)
    return c


@pytest.fixture
def room(db):
    return Room.objects.create(room_name="Kenari", room_type="shared", capacity=2)


@pytest.fixture
def activity(db):
    return ActivityType.objects.create(name="Makan", category="routine", color="#fd7e14", icon="fa-utensils")


@pytest.fixture
def income_category(db):
    return DonationCategory.objects.create(name="Donasi Umum", type="income")


@pytest.fixture
def expense_category(db):
    return DonationCategory.objects.create(name="Utilitas", type="expense")


@pytest.fixture
def make_resident(db):
    counter = {"n": 0}

    def _make(**kwargs):
        counter["n"] += 1
        values = {
            "resident_id": f"T-{counter['n']:03d}",
            "name": f"Penghuni {counter['n']}",
            "gender": "female",
            "birth_date": dt.date(1945, 3, 1),
            "join_date": dt.date(2024, 1, 10),
            "condition": "Sehat",
        }
        values.update(kwargs)
        return Resident.objects.create(**values)

    return _make
