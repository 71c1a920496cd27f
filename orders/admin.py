from django.contrib import admin

from .models import KitchenOrder, Customer, CustomerOrder


@admin.register(KitchenOrder)
class KitchenOrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'business', 'customer_name', 'total', 'status', 'payment_method', 'order_time', 'is_demo']
    list_filter = ['status', 'payment_method', 'order_type', 'is_demo']
    search_fields = ['customer_name']


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['name', 'phone', 'business', 'total_orders', 'total_spent', 'last_order_date']
    search_fields = ['name', 'phone']


@admin.register(CustomerOrder)
class CustomerOrderAdmin(admin.ModelAdmin):
    list_display = ['customer_name', 'business', 'total', 'payment_method', 'order_date']
    search_fields = ['customer_name', 'customer_phone']
