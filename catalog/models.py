from decimal import Decimal

from django.db import models
from django.db.models.functions import Lower

from authentication.models import Business, TimeStampedModel


class BusinessSettings(TimeStampedModel):
    """Storefront settings, one row per business. Created with defaults on first load."""
    business = models.OneToOneField(Business, on_delete=models.CASCADE, related_name='settings')
    is_open = models.BooleanField(default=True)
    description = models.TextField(blank=True)
    address = models.CharField(max_length=500, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    whatsapp = models.CharField(max_length=30, blank=True)
    logo_url = models.TextField(blank=True)
    banner_url = models.TextField(blank=True)
    min_order_value = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    delivery_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    whatsapp_quick_replies = models.JSONField(default=list, blank=True)
    view_count = models.PositiveIntegerField(default=0)

    # Mercado Pago credentials of the business (seller account)
    mercadopago_public_key = models.CharField(max_length=255, blank=True)
    mercadopago_access_token = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = 'business_settings'
        verbose_name_plural = 'Business settings'

    def __str__(self):
        return f"Settings for {self.business.name}"

    @classmethod
    def load(cls, business):
        settings, created = cls.objects.get_or_create(
            business=business,
            defaults={
                'is_open': True,
                'description': f"Bem-vindo ao {business.name or 'seu negócio'}!",
                'whatsapp_quick_replies': [],
            }
        )
        return settings

    @property
    def order_phone(self):
        """Digits of the number that receives WhatsApp orders"""
        raw = self.whatsapp or self.phone or ''
        return ''.join(ch for ch in raw if ch.isdigit())


class Category(TimeStampedModel):
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name='categories')
    name = models.CharField(max_length=255)
    order_index = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'categories'
        ordering = ['order_index', 'created_at']
        verbose_name_plural = 'Categories'

    def __str__(self):
        return self.name


class Product(TimeStampedModel):
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name='products')
    # Deleting a category keeps its products, uncategorised
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, null=True, blank=True, related_name='products')
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    promotional_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    image_url = models.TextField(blank=True)
    available = models.BooleanField(default=True)
    order_index = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'products'
        ordering = ['order_index', 'created_at']

    def __str__(self):
        return self.name

    @property
    def effective_price(self):
        if self.promotional_price is not None:
            return self.promotional_price
        return self.price


class DeliveryZone(TimeStampedModel):
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name='delivery_zones')
    neighborhood_name = models.CharField(max_length=255)
    fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    class Meta:
        db_table = 'delivery_zones'
        ordering = ['neighborhood_name']
        constraints = [
            models.UniqueConstraint(
                Lower('neighborhood_name'), models.F('business'),
                name='unique_zone_neighborhood_per_business',
            ),
        ]

    def __str__(self):
        return f"{self.neighborhood_name} (R$ {self.fee})"
