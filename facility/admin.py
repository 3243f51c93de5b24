"""
Django admin registrations for the facility models.

Mostly useful during development to inspect what the API wrote.
Occupancy counters are read-only here; move residents through the API
so the counters stay consistent.
"""

from django.contrib import admin

from .models import (
    ActivityType,
    AuditEvent,
    DailyRecord,
    DonationCategory,
    Guardian,
    HealthRecord,
    Medication,
    Resident,
    Room,
    Transaction,
    User,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'full_name', 'role', 'is_active', 'last_login')
    list_filter = ('role', 'is_active')
    search_fields = ('username', 'full_name', 'email')
    exclude = ('password',)


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ('room_name', 'room_type', 'capacity', 'current_occupants', 'status')
    list_filter = ('room_type', 'status')
    readonly_fields = ('current_occupants',)


class GuardianInline(admin.TabularInline):
    model = Guardian
    extra = 0


class MedicationInline(admin.TabularInline):
    model = Medication
    extra = 0


@admin.register(Resident)
class ResidentAdmin(admin.ModelAdmin):
    list_display = ('resident_id', 'name', 'gender', 'age', 'condition', 'status', 'room')
    list_filter = ('status', 'gender', 'condition')
    search_fields = ('resident_id', 'name')
    readonly_fields = ('resident_id', 'age', 'room')
    inlines = [GuardianInline, MedicationInline]


@admin.register(HealthRecord)
class HealthRecordAdmin(admin.ModelAdmin):
    list_display = ('resident', 'record_type', 'recorded_date', 'recorded_by')
    list_filter = ('record_type',)


@admin.register(ActivityType)
class ActivityTypeAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'color', 'icon')


@admin.register(DailyRecord)
class DailyRecordAdmin(admin.ModelAdmin):
    list_display = ('resident', 'activity_type', 'record_datetime', 'condition', 'recorded_by')
    list_filter = ('activity_type', 'condition')


@admin.register(DonationCategory)
class DonationCategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'type')
    list_filter = ('type',)


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ('transaction_id', 'category', 'amount', 'transaction_date', 'payment_method')
    list_filter = ('category__type', 'payment_method')
    search_fields = ('transaction_id', 'source', 'reference_number')
    readonly_fields = ('transaction_id',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action',)
