from rest_framework import serializers

from facility.models import DailyRecord


class DailyRecordCreateSerializer(serializers.Serializer):
    resident_id = serializers.IntegerField()
    activity_type_id = serializers.IntegerField()
    record_datetime = serializers.DateTimeField(
        required=False, allow_null=True,
        input_formats=['%Y-%m-%dT%H:%M', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%d %H:%M', '%Y-%m-%d %H:%M:%S', 'iso-8601'],
    )
    condition = serializers.ChoiceField(choices=DailyRecord.CONDITION_CHOICES, default='Baik')
    notes = serializers.CharField(allow_blank=True)
    recorded_by = serializers.CharField(required=False, allow_blank=True, max_length=100)


class DailyRecordFilterSerializer(serializers.Serializer):
    resident_id = serializers.IntegerField(required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    activity_type_id = serializers.IntegerField(required=False)

    def validate(self, attrs):
        start, end = attrs.get('date_from'), attrs.get('date_to')
        if start and end and start > end:
            raise serializers.ValidationError({'date_from': 'date_from must not be after date_to'})
        return attrs
