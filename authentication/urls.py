from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from . import views

urlpatterns = [
    # =============== API DOCUMENTATION ===============
    path('schema/', SpectacularAPIView.as_view(), name='schema'),
    path('docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # =============== AUTHENTICATION ===============
    path('auth/login/', views.CustomTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('auth/register/', views.register_business, name='register_business'),

    # =============== USER PROFILE ===============
    path('profile/', views.MyProfileView.as_view(), name='my_profile'),

    # =============== PLATFORM ADMIN ===============
    path('platform/users/', views.PlatformUserListView.as_view(), name='platform_user_list'),
    path('platform/users/<uuid:user_id>/', views.delete_platform_user, name='platform_user_delete'),
    path('platform/admins/', views.create_platform_admin, name='platform_admin_create'),

    # =============== SYSTEM ===============
    path('health/', views.health_check, name='health_check'),
]
