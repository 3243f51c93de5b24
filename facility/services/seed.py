"""
Reference data and default accounts.

Seeding is idempotent: rows are looked up by their natural key and only
inserted when absent.  Existing rows (and existing passwords) are never
overwritten, so running it on every start is safe.
"""
from __future__ import annotations

import logging

from django.contrib.auth import get_user_model

from facility.models import ActivityType, DonationCategory, Room
from facility.services import reference

logger = logging.getLogger(__name__)

User = get_user_model()

ACTIVITY_TYPES = [
    # name, category, color, icon
    ('Kegiatan Rutin', 'routine', '#007bff', 'fa-calendar-check'),
    ('Konsumsi Obat', 'medical', '#dc3545', 'fa-pills'),
    ('Pemeriksaan Medis', 'medical', '#17a2b8', 'fa-stethoscope'),
    ('Kunjungan Keluarga', 'visit', '#28a745', 'fa-users'),
    ('Kegiatan Khusus', 'special', '#ffc107', 'fa-star'),
    ('Makan', 'routine', '#fd7e14', 'fa-utensils'),
    ('Istirahat', 'routine', '#6f42c1', 'fa-bed'),
    ('Fisioterapi', 'medical', '#20c997', 'fa-hands-helping'),
    ('Konseling', 'medical', '#e83e8c', 'fa-comments'),
]

DONATION_CATEGORIES = [
    ('Donasi Umum', 'income', 'Donasi dari masyarakat umum'),
    ('Donasi Keluarga', 'income', 'Donasi dari keluarga penghuni'),
    ('Donasi Yayasan', 'income', 'Donasi dari yayasan/organisasi'),
    ('Donasi Perusahaan', 'income', 'Donasi dari perusahaan'),
    ('Bantuan Pemerintah', 'income', 'Bantuan dari pemerintah'),
    ('Lainnya (Pemasukan)', 'income', 'Pemasukan lainnya'),
    ('Medis & Obat-obatan', 'expense', 'Biaya pengobatan dan obat'),
    ('Makanan & Konsumsi', 'expense', 'Biaya makanan sehari-hari'),
    ('Gaji Staff', 'expense', 'Gaji pegawai dan perawat'),
    ('Utilitas', 'expense', 'Listrik, air, gas, internet'),
    ('Perawatan Gedung', 'expense', 'Perbaikan dan perawatan'),
    ('Transportasi', 'expense', 'Biaya transportasi'),
    ('Administrasi', 'expense', 'Biaya administrasi'),
    ('Lainnya (Pengeluaran)', 'expense', 'Pengeluaran lainnya'),
]

ROOMS = [
    ('Merpati', 'private', 1, 'Kamar dengan AC dan kamar mandi dalam'),
    ('Kakatua', 'private', 1, 'Kamar dengan jendela besar dan taman view'),
    ('Elang', 'private', 1, 'Kamar untuk lansia dengan kebutuhan khusus'),
    ('Kenari', 'shared', 2, 'Kamar bersama dengan 2 tempat tidur'),
    ('Cendrawasih', 'shared', 2, 'Kamar bersama dengan fasilitas lengkap'),
    ('Jalak', 'private', 1, 'Kamar standar dengan ventilasi baik'),
    ('Kutilang', 'private', 1, 'Kamar nyaman dengan akses mudah'),
    ('Murai', 'special', 1, 'Kamar untuk perawatan intensif'),
    ('Pipit', 'shared', 2, 'Kamar ekonomi untuk 2 orang'),
    ('Perkutut', 'private', 1, 'Kamar dengan akses ke teras'),
]

DEFAULT_USERS = [
    # username, password, full name, role, email
    ('admin', 'admin123', 'Administrator Utama', 'admin', 'admin@pantiwk.com'),
    ('staff', 'staff123', 'Staff Demo', 'staff', 'staff@pantiwk.com'),
]


def seed_activity_types() -> int:
    created = 0
    for name, category, color, icon in ACTIVITY_TYPES:
        _, new = ActivityType.objects.get_or_create(
            name=name, defaults={'category': category, 'color': color, 'icon': icon}
        )
        created += new
    return created


def seed_donation_categories() -> int:
    created = 0
    for name, type_, description in DONATION_CATEGORIES:
        _, new = DonationCategory.objects.get_or_create(
            name=name, type=type_, defaults={'description': description}
        )
        created += new
    return created


def seed_rooms() -> int:
    created = 0
    for name, room_type, capacity, notes in ROOMS:
        _, new = Room.objects.get_or_create(
            room_name=name, defaults={'room_type': room_type, 'capacity': capacity, 'notes': notes}
        )
        created += new
    return created


def seed_default_users() -> int:
    created = 0
    for username, password, full_name, role, email in DEFAULT_USERS:
        if User.objects.filter(username=username).exists():
            continue
        User.objects.create_user(username=username, password=password, full_name=full_name, role=role, email=email)
        logger.warning("Created default account %r; change its password", username)
        created += 1
    return created


def seed_all(*, users: bool = True) -> dict[str, int]:
    counts = {
        'activity_types': seed_activity_types(),
        'donation_categories': seed_donation_categories(),
        'rooms': seed_rooms(),
        'users': seed_default_users() if users else 0,
    }
    reference.invalidate()
    logger.info("Seeding finished: %s", counts)
    return counts
