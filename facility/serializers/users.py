from rest_framework import serializers

from facility.models import User

from .fields import CleanCharField


class UserCreateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(trim_whitespace=False)
    full_name = CleanCharField(max_length=100)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, default='staff')
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=20)

    def validate_username(self, v):
        v = v.strip()
        if not v:
            raise serializers.ValidationError('Username is required')
        return v


class PasswordChangeSerializer(serializers.Serializer):
    newPassword = serializers.CharField(trim_whitespace=False)
