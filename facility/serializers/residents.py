from rest_framework import serializers

from facility.models import Medication, Resident

from .fields import BlankableDateField, CleanCharField, JSONListField


class ResidentProfileSerializer(serializers.Serializer):
    # Required fields are checked by services.residents so the error names the field
    name = CleanCharField(required=False, allow_blank=True, max_length=100)
    gender = serializers.ChoiceField(choices=Resident.GENDER_CHOICES, required=False, allow_blank=True)
    birth_date = BlankableDateField(required=False, allow_null=True)
    birth_place = CleanCharField(required=False, allow_blank=True, max_length=100)
    address = CleanCharField(required=False, allow_blank=True)
    religion = CleanCharField(required=False, allow_blank=True, max_length=50)
    join_date = BlankableDateField(required=False, allow_null=True)
    condition = serializers.ChoiceField(choices=Resident.CONDITION_CHOICES, required=False, allow_blank=True)
    medical_history = CleanCharField(required=False, allow_blank=True)
    allergies = CleanCharField(required=False, allow_blank=True)
    smoking = CleanCharField(required=False, allow_blank=True, max_length=50)
    alcohol = CleanCharField(required=False, allow_blank=True, max_length=50)
    functional_walking = CleanCharField(required=False, allow_blank=True, max_length=50)
    functional_eating = CleanCharField(required=False, allow_blank=True, max_length=50)
    mental_emotion = CleanCharField(required=False, allow_blank=True, max_length=50)
    mental_consciousness = CleanCharField(required=False, allow_blank=True, max_length=50)
    status = serializers.ChoiceField(choices=Resident.STATUS_CHOICES, required=False)
    photo = serializers.FileField(required=False, allow_null=True)
    audio = serializers.FileField(required=False, allow_null=True)


class GuardianSerializer(serializers.Serializer):
    # name and phone may be blank; such guardians are skipped by services.residents
    name = CleanCharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    id_number = CleanCharField(required=False, allow_blank=True, max_length=50)
    email = CleanCharField(required=False, allow_blank=True, max_length=100)
    phone = CleanCharField(required=False, allow_blank=True, allow_null=True, max_length=20)
    relationship = CleanCharField(required=False, allow_blank=True, max_length=50)
    address = CleanCharField(required=False, allow_blank=True)
    is_primary = serializers.BooleanField(required=False)
    emergency_contact = serializers.BooleanField(required=False)


class MedicationSerializer(serializers.Serializer):
    medication_name = CleanCharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    name = CleanCharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    dosage = CleanCharField(required=False, allow_blank=True, max_length=50)
    schedule = CleanCharField(required=False, allow_blank=True, max_length=100)
    end_date = BlankableDateField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=Medication.STATUS_CHOICES, required=False, allow_blank=True)
    prescribing_doctor = CleanCharField(required=False, allow_blank=True, max_length=100)
    pharmacy = CleanCharField(required=False, allow_blank=True, max_length=100)
    notes = CleanCharField(required=False, allow_blank=True)


class ResidentCreateSerializer(ResidentProfileSerializer):
    room_id = serializers.IntegerField(required=False, allow_null=True)
    guardians = JSONListField(required=False, item_serializer=GuardianSerializer)
    medications = JSONListField(required=False, item_serializer=MedicationSerializer)
    hemoglobin = serializers.CharField(required=False, allow_blank=True, max_length=20)
    leukocyte = serializers.CharField(required=False, allow_blank=True, max_length=20)
    erythrocyte = serializers.CharField(required=False, allow_blank=True, max_length=20)
    blood_sugar_random = serializers.CharField(required=False, allow_blank=True, max_length=20)
    blood_sugar_fasting = serializers.CharField(required=False, allow_blank=True, max_length=20)
    blood_sugar_two_hour = serializers.CharField(required=False, allow_blank=True, max_length=20)


class AssignRoomSerializer(serializers.Serializer):
    room_id = serializers.IntegerField(allow_null=True)
    previous_room_id = serializers.IntegerField(required=False, allow_null=True)
