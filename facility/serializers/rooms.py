from rest_framework import serializers

from facility.models import Room

from .fields import CleanCharField


class RoomSerializer(serializers.Serializer):
    room_name = CleanCharField(max_length=50)
    room_type = serializers.ChoiceField(choices=Room.TYPE_CHOICES, default='private')
    capacity = serializers.IntegerField(min_value=1, default=1)
    notes = CleanCharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=Room.STATUS_CHOICES, required=False)

    def validate_room_name(self, v):
        v = v.strip()
        if not v:
            raise serializers.ValidationError('Room name is required')
        qs = Room.objects.filter(room_name=v)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('Room name already exists')
        return v
