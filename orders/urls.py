from django.urls import path
from . import views

app_name = 'orders'

urlpatterns = [
    # Public storefront cart & checkout
    path('public/<slug:slug>/cart/', views.cart_detail, name='cart-detail'),
    path('public/<slug:slug>/cart/add/', views.cart_add, name='cart-add'),
    path('public/<slug:slug>/cart/remove/', views.cart_remove, name='cart-remove'),
    path('public/<slug:slug>/checkout/', views.checkout, name='checkout'),

    # Kitchen
    path('kitchen/', views.kitchen_board, name='kitchen-board'),
    path('kitchen/orders/', views.KitchenOrderListView.as_view(), name='kitchen-order-list'),
    path('kitchen/orders/<uuid:pk>/', views.KitchenOrderDetailView.as_view(), name='kitchen-order-detail'),
    path('kitchen/orders/<uuid:pk>/status/', views.update_order_status, name='kitchen-order-status'),
    path('kitchen/orders/<uuid:pk>/cancel/', views.cancel_kitchen_order, name='kitchen-order-cancel'),

    # Customers
    path('customers/', views.CustomerListView.as_view(), name='customer-list'),
    path('customers/statistics/', views.customer_stats, name='customer-statistics'),
    path('customers/orders/', views.CustomerOrderListView.as_view(), name='customer-order-list'),
    path('customers/orders/export/', views.export_customer_orders, name='customer-order-export'),
    path('customers/<int:customer_id>/orders/', views.CustomerOrderListView.as_view(), name='customer-orders'),
]
