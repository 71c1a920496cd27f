from django.contrib import admin

from .models import BusinessSettings, Category, Product, DeliveryZone


@admin.register(BusinessSettings)
class BusinessSettingsAdmin(admin.ModelAdmin):
    list_display = ['business', 'is_open', 'whatsapp', 'view_count']
    list_filter = ['is_open']
    exclude = ['mercadopago_access_token']


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'business', 'order_index']
    list_filter = ['business']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'business', 'category', 'price', 'promotional_price', 'available']
    list_filter = ['available', 'business']
    search_fields = ['name']


@admin.register(DeliveryZone)
class DeliveryZoneAdmin(admin.ModelAdmin):
    list_display = ['neighborhood_name', 'business', 'fee']
    list_filter = ['business']
