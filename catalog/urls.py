from django.urls import path
from . import views


urlpatterns = [
    # Business settings
    path('settings/', views.BusinessSettingsView.as_view(), name='business-settings'),
    path('settings/toggle-open/', views.toggle_open, name='business-toggle-open'),

    # Categories
    path('categories/', views.CategoryListCreateView.as_view(), name='category-list-create'),
    path('categories/reorder/', views.reorder_categories, name='category-reorder'),
    path('categories/<int:pk>/', views.CategoryDetailView.as_view(), name='category-detail'),
    path('categories/<int:category_id>/products/reorder/', views.reorder_products, name='product-reorder'),

    # Products
    path('products/', views.ProductListCreateView.as_view(), name='product-list-create'),
    path('products/<int:pk>/', views.ProductDetailView.as_view(), name='product-detail'),

    # Delivery zones
    path('delivery-zones/', views.DeliveryZoneListCreateView.as_view(), name='delivery-zone-list-create'),
    path('delivery-zones/<int:pk>/', views.DeliveryZoneDetailView.as_view(), name='delivery-zone-detail'),

    # Images
    path('images/', views.upload_image, name='image-upload'),

    # Public storefront
    path('public/<slug:slug>/', views.public_catalog, name='public-catalog'),
    path('public/<slug:slug>/zones/', views.public_delivery_zones, name='public-delivery-zones'),
]
