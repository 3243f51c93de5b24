from rest_framework import serializers

from facility.models import DonationCategory, Transaction

from .fields import CleanCharField


class TransactionCreateSerializer(serializers.Serializer):
    category_id = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0)
    transaction_date = serializers.DateField()
    source = CleanCharField(required=False, allow_blank=True, max_length=200)
    description = CleanCharField(required=False, allow_blank=True)
    payment_method = serializers.ChoiceField(choices=Transaction.PAYMENT_CHOICES, default='cash')
    reference_number = CleanCharField(required=False, allow_blank=True, max_length=100)
    notes = CleanCharField(required=False, allow_blank=True)
    attachment = serializers.FileField(required=False, allow_null=True)


class TransactionFilterSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=DonationCategory.TYPE_CHOICES, required=False)
    month = serializers.RegexField(r'^\d{4}-\d{2}$', required=False)
    category_id = serializers.IntegerField(required=False)
