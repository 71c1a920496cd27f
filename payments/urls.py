from django.urls import path
from . import views

app_name = 'payments'

urlpatterns = [
    # Business owner
    path('', views.payment_list, name='payment-list'),
    path('<str:preference_id>/refresh/', views.refresh_payment_status, name='payment-refresh'),
    path('withdrawals/', views.WithdrawalListCreateView.as_view(), name='withdrawal-list'),

    # Platform admin
    path('admin/withdrawals/', views.AdminWithdrawalListView.as_view(), name='admin-withdrawal-list'),
    path('admin/withdrawals/<int:pk>/approve/', views.approve_withdrawal, name='admin-withdrawal-approve'),
    path('admin/withdrawals/<int:pk>/reject/', views.reject_withdrawal, name='admin-withdrawal-reject'),
    path('admin/stats/', views.platform_stats, name='platform-stats'),
]
