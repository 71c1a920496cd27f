from django.contrib import admin

from .models import Payment, Withdrawal


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['preference_id', 'business', 'amount', 'platform_fee', 'status', 'created_at']
    list_filter = ['status', 'payment_method']
    search_fields = ['preference_id', 'payment_id', 'customer_name', 'customer_email']


@admin.register(Withdrawal)
class WithdrawalAdmin(admin.ModelAdmin):
    list_display = ['business', 'amount', 'status', 'processed_at', 'created_at']
    list_filter = ['status']
    search_fields = ['business__name']
