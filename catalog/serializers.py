from django.conf import settings
from rest_framework import serializers

from .models import BusinessSettings, Category, Product, DeliveryZone


def _context_business(serializer):
    business = serializer.context.get('business')
    if business is None:
        request = serializer.context.get('request')
        business = getattr(request, 'user_business', None)
    return business


class BusinessSettingsSerializer(serializers.ModelSerializer):
    business_name = serializers.CharField(source='business.name', read_only=True)
    business_slug = serializers.CharField(source='business.slug', read_only=True)
    has_payment_credentials = serializers.SerializerMethodField()

    class Meta:
        model = BusinessSettings
        fields = [
            'business_name', 'business_slug', 'is_open', 'description', 'address',
            'phone', 'whatsapp', 'logo_url', 'banner_url', 'min_order_value',
            'delivery_fee', 'whatsapp_quick_replies', 'view_count',
            'mercadopago_public_key', 'mercadopago_access_token',
            'has_payment_credentials', 'updated_at'
        ]
        read_only_fields = ['view_count', 'updated_at']
        extra_kwargs = {
            'mercadopago_access_token': {'write_only': True},
        }

    def get_has_payment_credentials(self, obj):
        return bool(obj.mercadopago_access_token)

    def validate_whatsapp_quick_replies(self, value):
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Quick replies must be a list of strings.")
        return value


class PublicSettingsSerializer(serializers.ModelSerializer):
    """Storefront settings safe to show to customers"""

    class Meta:
        model = BusinessSettings
        fields = [
            'is_open', 'description', 'address', 'phone', 'whatsapp', 'logo_url',
            'banner_url', 'min_order_value', 'delivery_fee', 'mercadopago_public_key'
        ]


class CategorySerializer(serializers.ModelSerializer):
    products_count = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = ['id', 'name', 'order_index', 'products_count', 'created_at']
        read_only_fields = ['order_index', 'created_at']

    def get_products_count(self, obj):
        return obj.products.count()

    def validate_name(self, value):
        """Validate unique category name within business"""
        business = _context_business(self)
        if business is not None:
            queryset = Category.objects.filter(business=business, name__iexact=value)
            if self.instance:
                queryset = queryset.exclude(id=self.instance.id)
            if queryset.exists():
                raise serializers.ValidationError("Category with this name already exists in your business.")
        return value


class ProductSerializer(serializers.ModelSerializer):
    category_name = serializers.SerializerMethodField()
    effective_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'category', 'category_name', 'name', 'description', 'price',
            'promotional_price', 'effective_price', 'image_url', 'available',
            'order_index', 'created_at'
        ]
        read_only_fields = ['order_index', 'created_at']

    def get_category_name(self, obj):
        return obj.category.name if obj.category_id else None

    def validate_category(self, value):
        business = _context_business(self)
        if value is not None and business is not None and value.business_id != business.id:
            raise serializers.ValidationError("Category not found in your business.")
        return value

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return value

    def validate_promotional_price(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Promotional price cannot be negative.")
        return value


class PublicProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            'id', 'category', 'name', 'description', 'price', 'promotional_price',
            'image_url', 'available', 'order_index'
        ]


class PublicCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'order_index']


class DeliveryZoneSerializer(serializers.ModelSerializer):
    class Meta:
        model = DeliveryZone
        fields = ['id', 'neighborhood_name', 'fee', 'created_at']
        read_only_fields = ['created_at']

    def validate_neighborhood_name(self, value):
        """Neighborhood names are unique per business, ignoring case"""
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Neighborhood name is required.")
        business = _context_business(self)
        if business is not None:
            queryset = DeliveryZone.objects.filter(business=business, neighborhood_name__iexact=value)
            if self.instance:
                queryset = queryset.exclude(id=self.instance.id)
            if queryset.exists():
                raise serializers.ValidationError("This neighborhood is already registered.")
        return value

    def validate_fee(self, value):
        if value < 0:
            raise serializers.ValidationError("Fee cannot be negative.")
        return value


class ReorderSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)

    def validate_ids(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Duplicated ids.")
        return value


class ImageUploadSerializer(serializers.Serializer):
    PURPOSES = (
        ('products', 'Products'),
        ('logo', 'Logo'),
        ('banner', 'Banner'),
    )

    file = serializers.FileField()
    purpose = serializers.ChoiceField(choices=PURPOSES, default='products')

    def validate_file(self, value):
        content_type = getattr(value, 'content_type', '') or ''
        if not content_type.startswith('image/'):
            raise serializers.ValidationError("Only image files are allowed.")
        max_size = settings.PEDINU['IMAGE_MAX_UPLOAD_SIZE']
        if value.size > max_size:
            raise serializers.ValidationError(
                f"Image must be at most {max_size // (1024 * 1024)}MB."
            )
        return value
