import uuid

from django.conf import settings
from django.db import models

from authentication.models import Business, TimeStampedModel


class Payment(TimeStampedModel):
    """Hosted checkout created on the gateway with the platform fee split off"""
    STATUS_CHOICES = (
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('in_process', 'In process'),
        ('rejected', 'Rejected'),
        ('cancelled', 'Cancelled'),
        ('refunded', 'Refunded'),
    )
    FAILED_STATUSES = ('rejected', 'cancelled')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name='payments')
    preference_id = models.CharField(max_length=255, unique=True)
    payment_id = models.CharField(max_length=255, blank=True)
    external_reference = models.CharField(max_length=255, blank=True)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    platform_fee = models.DecimalField(max_digits=10, decimal_places=2)
    business_amount = models.DecimalField(max_digits=10, decimal_places=2)
    customer_name = models.CharField(max_length=255)
    customer_email = models.EmailField(blank=True)
    customer_phone = models.CharField(max_length=30, blank=True)
    payment_method = models.CharField(max_length=50)
    items = models.JSONField(default=list)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')

    class Meta:
        db_table = 'payments'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.preference_id} - R$ {self.amount} ({self.status})"


class Withdrawal(TimeStampedModel):
    """Request from a business to withdraw its balance, reviewed by a platform admin"""
    STATUS_CHOICES = (
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    )

    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name='withdrawals')
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    bank_info = models.JSONField(default=dict)  # {"bank", "agency", "account", "pix_key"}
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    reason = models.TextField(blank=True)
    processed_at = models.DateTimeField(null=True, blank=True)
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='processed_withdrawals'
    )

    class Meta:
        db_table = 'withdrawals'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.business.name} - R$ {self.amount} ({self.status})"

    @property
    def is_pending(self):
        return self.status == 'pending'

