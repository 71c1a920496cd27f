from decimal import Decimal

from rest_framework import serializers

from .models import Payment, Withdrawal


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = [
            'id', 'preference_id', 'payment_id', 'external_reference', 'amount',
            'platform_fee', 'business_amount', 'customer_name', 'customer_email',
            'customer_phone', 'payment_method', 'items', 'status', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class PaymentRefreshSerializer(serializers.Serializer):
    payment_id = serializers.CharField(max_length=255, required=False, allow_blank=True)


class BankInfoSerializer(serializers.Serializer):
    bank = serializers.CharField(max_length=100, required=False, allow_blank=True)
    agency = serializers.CharField(max_length=20, required=False, allow_blank=True)
    account = serializers.CharField(max_length=30, required=False, allow_blank=True)
    pix_key = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get('pix_key') and not (attrs.get('bank') and attrs.get('account')):
            raise serializers.ValidationError("Provide a Pix key or bank and account.")
        return attrs


class WithdrawalSerializer(serializers.ModelSerializer):
    business_name = serializers.CharField(source='business.name', read_only=True)
    bank_info = BankInfoSerializer()
    processed_by_name = serializers.SerializerMethodField()

    class Meta:
        model = Withdrawal
        fields = [
            'id', 'business', 'business_name', 'amount', 'bank_info', 'status',
            'reason', 'processed_at', 'processed_by_name', 'created_at'
        ]
        read_only_fields = ['id', 'business', 'status', 'reason', 'processed_at', 'created_at']

    def get_processed_by_name(self, obj):
        return obj.processed_by.name if obj.processed_by else None

    def validate_amount(self, value):
        if value <= Decimal('0'):
            raise serializers.ValidationError("Amount must be greater than zero.")
        return value

    def create(self, validated_data):
        return Withdrawal.objects.create(**validated_data)


class WithdrawalReviewSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True)
