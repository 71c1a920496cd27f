import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone

from authentication.models import Business


class KitchenOrder(models.Model):
    """Order as the kitchen sees it. Never deleted; cancelling is a status."""
    STATUS_RECEIVED = 'received'
    STATUS_PREPARING = 'preparing'
    STATUS_READY = 'ready'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = (
        (STATUS_RECEIVED, 'Em análise'),
        (STATUS_PREPARING, 'Em produção'),
        (STATUS_READY, 'Prontos para entrega'),
        (STATUS_COMPLETED, 'Finalizados'),
        (STATUS_CANCELLED, 'Cancelados'),
    )

    ORDER_TYPE_CHOICES = (
        ('delivery', 'Delivery'),
        ('pickup', 'Pickup'),
    )

    PAYMENT_METHOD_CHOICES = (
        ('pix', 'Pix'),
        ('cash', 'Dinheiro'),
        ('credit_card', 'Cartão de Crédito'),
        ('debit_card', 'Cartão de Débito'),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name='kitchen_orders')
    customer_name = models.CharField(max_length=255)
    # Snapshot: [{"name", "quantity", "price"}], not live product references
    items = models.JSONField(default=list)
    total = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_RECEIVED)
    order_time = models.DateTimeField(default=timezone.now)
    order_type = models.CharField(max_length=20, choices=ORDER_TYPE_CHOICES, default='delivery')
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default='cash')
    delivery_address = models.TextField(blank=True)
    notes = models.TextField(null=True, blank=True)
    is_demo = models.BooleanField(default=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'kitchen_orders'
        ordering = ['-order_time']

    def __str__(self):
        return f"#{self.short_number} - {self.customer_name} ({self.status})"

    @property
    def short_number(self):
        """Human-readable order number: last 4 characters of the id"""
        return str(self.id)[-4:]


class Customer(models.Model):
    """Customer of a business, matched by phone. Counters cover CustomerOrder rows."""
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name='customers')
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=30)
    neighborhood = models.CharField(max_length=255, blank=True)
    address = models.CharField(max_length=500, blank=True)
    total_orders = models.PositiveIntegerField(default=0)
    total_spent = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    last_order_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'customers'
        ordering = ['-last_order_date']
        unique_together = ['business', 'phone']

    def __str__(self):
        return f"{self.name} ({self.phone})"


class CustomerOrder(models.Model):
    """Customer-history copy of an order"""
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name='customer_orders')
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='orders')
    kitchen_order = models.ForeignKey(
        KitchenOrder, on_delete=models.SET_NULL, null=True, blank=True, related_name='customer_orders'
    )
    customer_name = models.CharField(max_length=255)
    customer_phone = models.CharField(max_length=30)
    customer_neighborhood = models.CharField(max_length=255, blank=True)
    customer_address = models.CharField(max_length=500, blank=True)
    items = models.JSONField(default=list)
    subtotal = models.DecimalField(max_digits=10, decimal_places=2)
    delivery_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=10, decimal_places=2)
    payment_method = models.CharField(max_length=50)
    notes = models.TextField(null=True, blank=True)
    order_date = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'customer_orders'
        ordering = ['-order_date']

    def __str__(self):
        return f"{self.customer_name} - R$ {self.total}"
