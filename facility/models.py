"""
Database models for the care facility backend.

The schema covers residents of the facility together with their
guardians, medications and health readings, the rooms they live in,
daily activity records, the donation/expense ledger and the staff
accounts that operate the system.  Enumerated values keep the
Indonesian labels used by the facility staff (e.g. ``Aktif``).
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.core.validators import MinValueValidator
from django.db import models


class User(AbstractUser):
    """Staff account with a role.

    ``admin`` has full access; ``staff``, ``doctor`` and ``nurse`` operate
    on residents, rooms and daily records only (see
    :mod:`facility.permissions`).
    """
    ROLE_CHOICES = [
        ('admin', 'Administrator'),
        ('staff', 'Staff'),
        ('doctor', 'Doctor'),
        ('nurse', 'Nurse'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='staff', db_index=True)
    full_name = models.CharField(max_length=100)
    phone = models.CharField(max_length=20, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Room(models.Model):
    TYPE_CHOICES = [
        ('private', 'Private'),
        ('shared', 'Shared'),
        ('special', 'Special'),
    ]
    STATUS_CHOICES = [
        ('available', 'Available'),
        ('occupied', 'Occupied'),
        ('maintenance', 'Maintenance'),
        ('reserved', 'Reserved'),
    ]
    room_name = models.CharField(max_length=50, unique=True)
    room_type = models.CharField(max_length=10, choices=TYPE_CHOICES, default='private')
    capacity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    # Maintained by facility.services.rooms; reconcile_occupancy repairs drift
    current_occupants = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default='available')
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['room_name']

    def __str__(self) -> str:
        return f"{self.room_name} ({self.current_occupants}/{self.capacity})"


class Resident(models.Model):
    """A person living in the facility.

    ``resident_id`` is the human-facing code (``R-001``) generated by
    :func:`facility.services.identifiers.next_code`; ``id`` stays the
    internal key.
    """
    GENDER_CHOICES = [('male', 'Male'), ('female', 'Female')]
    CONDITION_CHOICES = [
        ('Sehat', 'Sehat'),
        ('Cukup Sehat', 'Cukup Sehat'),
        ('Kurang Sehat', 'Kurang Sehat'),
    ]
    STATUS_CHOICES = [
        ('Aktif', 'Aktif'),
        ('Perlu Perhatian', 'Perlu Perhatian'),
        ('Keluar', 'Keluar'),
        ('Meninggal', 'Meninggal'),
    ]

    resident_id = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=100, db_index=True)
    gender = models.CharField(max_length=6, choices=GENDER_CHOICES)
    birth_date = models.DateField()
    birth_place = models.CharField(max_length=100, blank=True)
    age = models.PositiveIntegerField(null=True, blank=True)
    address = models.TextField(blank=True)
    religion = models.CharField(max_length=50, blank=True)
    join_date = models.DateField()
    condition = models.CharField(max_length=15, choices=CONDITION_CHOICES)
    medical_history = models.TextField(blank=True)
    allergies = models.TextField(blank=True)
    smoking = models.CharField(max_length=50, blank=True)
    alcohol = models.CharField(max_length=50, blank=True)
    functional_walking = models.CharField(max_length=50, default='Mandiri')
    functional_eating = models.CharField(max_length=50, default='Mandiri')
    mental_emotion = models.CharField(max_length=50, default='Stabil')
    mental_consciousness = models.CharField(max_length=50, default='Compos Mentis')
    photo = models.FileField(upload_to='photos/', max_length=255, blank=True)
    audio = models.FileField(upload_to='audio/', max_length=255, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Aktif', db_index=True)
    room = models.ForeignKey(
        Room, null=True, blank=True, on_delete=models.PROTECT, related_name='residents'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.resident_id})"


class Guardian(models.Model):
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='guardians')
    name = models.CharField(max_length=100)
    id_number = models.CharField(max_length=50, blank=True)
    email = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=20)
    relationship = models.CharField(max_length=50, blank=True)
    address = models.TextField(blank=True)
    is_primary = models.BooleanField(default=False)
    emergency_contact = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.name} for {self.resident_id}"


class Medication(models.Model):
    STATUS_CHOICES = [
        ('Active', 'Active'),
        ('Completed', 'Completed'),
        ('Stopped', 'Stopped'),
        ('Changed', 'Changed'),
    ]
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='medications')
    medication_name = models.CharField(max_length=100)
    dosage = models.CharField(max_length=50, blank=True)
    schedule = models.CharField(max_length=100, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='Active')
    prescribing_doctor = models.CharField(max_length=100, blank=True)
    pharmacy = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.medication_name} ({self.status})"


class HealthRecord(models.Model):
    """A dated set of readings.  Lab values are free text as written on the lab sheet."""
    TYPE_CHOICES = [
        ('hematology', 'Hematology'),
        ('blood_sugar', 'Blood sugar'),
        ('blood_pressure', 'Blood pressure'),
        ('general', 'General'),
        ('initial', 'Initial'),
    ]
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='health_records')
    record_type = models.CharField(max_length=15, choices=TYPE_CHOICES)
    hemoglobin = models.CharField(max_length=20, blank=True)
    leukocyte = models.CharField(max_length=20, blank=True)
    erythrocyte = models.CharField(max_length=20, blank=True)
    blood_sugar_random = models.CharField(max_length=20, blank=True)
    blood_sugar_fasting = models.CharField(max_length=20, blank=True)
    blood_sugar_two_hour = models.CharField(max_length=20, blank=True)
    systolic = models.PositiveIntegerField(null=True, blank=True)
    diastolic = models.PositiveIntegerField(null=True, blank=True)
    heart_rate = models.PositiveIntegerField(null=True, blank=True)
    temperature = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True)
    weight = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    height = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    bmi = models.DecimalField(max_digits=4, decimal_places=2, null=True, blank=True)
    notes = models.TextField(blank=True)
    recorded_date = models.DateField()
    recorded_by = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['resident', 'record_type', 'recorded_date'], name='health_resident_type_date_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.record_type} {self.recorded_date} ({self.resident_id})"


class ActivityType(models.Model):
    CATEGORY_CHOICES = [
        ('routine', 'Routine'),
        ('medical', 'Medical'),
        ('visit', 'Visit'),
        ('special', 'Special'),
    ]
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=10, choices=CATEGORY_CHOICES, default='routine')
    color = models.CharField(max_length=7, default='#6c757d')
    icon = models.CharField(max_length=50, default='fa-calendar')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.name


class DailyRecord(models.Model):
    CONDITION_CHOICES = [
        ('Baik', 'Baik'),
        ('Cukup Baik', 'Cukup Baik'),
        ('Kurang Baik', 'Kurang Baik'),
    ]
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='daily_records')
    activity_type = models.ForeignKey(ActivityType, on_delete=models.PROTECT, related_name='records')
    record_datetime = models.DateTimeField(db_index=True)
    condition = models.CharField(max_length=12, choices=CONDITION_CHOICES, default='Baik')
    notes = models.TextField()
    recorded_by = models.CharField(max_length=100, default='System')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.activity_type} @ {self.record_datetime} ({self.resident_id})"


class DonationCategory(models.Model):
    TYPE_CHOICES = [('income', 'Income'), ('expense', 'Expense')]
    name = models.CharField(max_length=100)
    type = models.CharField(max_length=7, choices=TYPE_CHOICES)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['name', 'type'], name='uniq_donation_category_name_type'),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.type})"


class Transaction(models.Model):
    """One income or expense entry; direction comes from its category."""
    PAYMENT_CHOICES = [
        ('cash', 'Cash'),
        ('transfer', 'Transfer'),
        ('check', 'Check'),
        ('other', 'Other'),
    ]
    transaction_id = models.CharField(max_length=20, unique=True)
    category = models.ForeignKey(DonationCategory, on_delete=models.PROTECT, related_name='transactions')
    amount = models.DecimalField(max_digits=15, decimal_places=2)
    transaction_date = models.DateField(db_index=True)
    source = models.CharField(max_length=200, blank=True)
    description = models.TextField(blank=True)
    payment_method = models.CharField(max_length=10, choices=PAYMENT_CHOICES, default='cash')
    reference_number = models.CharField(max_length=100, blank=True)
    attachment = models.FileField(upload_to='transactions/', max_length=255, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.transaction_id} {self.amount}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]
