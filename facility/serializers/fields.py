"""Shared serializer fields for multipart form payloads."""
from __future__ import annotations

import json

import bleach
from rest_framework import serializers


class JSONListField(serializers.Field):
    """A list of objects sent either as JSON or as a JSON-encoded form string.

    With ``item_serializer`` every object is validated by that serializer
    and the list holds its ``validated_data``.
    """

    default_error_messages = {
        'invalid': 'Expected a JSON list of objects.',
    }

    def __init__(self, *, item_serializer=None, **kwargs):
        self.item_serializer = item_serializer
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            if not data.strip():
                return []
            try:
                data = json.loads(data)
            except ValueError:
                self.fail('invalid')
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            self.fail('invalid')
        if self.item_serializer is None:
            return data

        items = []
        for index, item in enumerate(data):
            s = self.item_serializer(data=item)
            if not s.is_valid():
                key, messages = next(iter(s.errors.items()))
                message = messages[0] if isinstance(messages, list) and messages else messages
                raise serializers.ValidationError(f"item {index + 1}, {key}: {message}")
            items.append(dict(s.validated_data))
        return items

    def to_representation(self, value):
        return value


class CleanCharField(serializers.CharField):
    """CharField with HTML stripped out."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return bleach.clean(value, tags=[], strip=True)


class BlankableDateField(serializers.DateField):
    """Treats an empty form value as missing."""

    def validate_empty_values(self, data):
        if data == '':
            data = None
        return super().validate_empty_values(data)
