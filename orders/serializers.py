from rest_framework import serializers

from .board import STATUS_CONFIG, allowed_transitions
from .checkout import PAYMENT_METHODS
from .models import KitchenOrder, Customer, CustomerOrder


class CartAddSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()


class CartRemoveSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()


class CheckoutSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=30)
    # Compared verbatim with the delivery zone names
    neighborhood = serializers.CharField(max_length=255, trim_whitespace=False)
    address = serializers.CharField(max_length=500)
    payment_method = serializers.ChoiceField(choices=list(PAYMENT_METHODS))
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_phone(self, value):
        if not any(ch.isdigit() for ch in value):
            raise serializers.ValidationError("Enter a valid phone number.")
        return value


class KitchenOrderSerializer(serializers.ModelSerializer):
    order_number = serializers.CharField(source='short_number', read_only=True)
    status_title = serializers.SerializerMethodField()
    next_status = serializers.SerializerMethodField()
    can_cancel = serializers.SerializerMethodField()

    class Meta:
        model = KitchenOrder
        fields = [
            'id', 'order_number', 'customer_name', 'items', 'total', 'status',
            'status_title', 'next_status', 'can_cancel', 'order_time', 'order_type',
            'payment_method', 'delivery_address', 'notes', 'is_demo', 'updated_at'
        ]
        read_only_fields = fields

    def get_status_title(self, obj):
        return STATUS_CONFIG[obj.status]['title']

    def get_next_status(self, obj):
        return STATUS_CONFIG[obj.status]['next']

    def get_can_cancel(self, obj):
        return KitchenOrder.STATUS_CANCELLED in allowed_transitions(obj.status)


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=KitchenOrder.STATUS_CHOICES)


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = [
            'id', 'name', 'phone', 'neighborhood', 'address', 'total_orders',
            'total_spent', 'last_order_date', 'created_at'
        ]
        read_only_fields = fields


class CustomerOrderSerializer(serializers.ModelSerializer):
    kitchen_order_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = CustomerOrder
        fields = [
            'id', 'customer', 'kitchen_order_id', 'customer_name', 'customer_phone',
            'customer_neighborhood', 'customer_address', 'items', 'subtotal',
            'delivery_fee', 'total', 'payment_method', 'notes', 'order_date'
        ]
        read_only_fields = fields
