import logging

from rest_framework import generics, status, permissions, filters
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView
from django.db import connection, DatabaseError
from django.utils import timezone
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, OpenApiExample
from rest_framework.exceptions import ValidationError

from .models import CustomUser
from .serializers import (
    UserSerializer, LoginSerializer, BusinessSerializer, RegistrationSerializer,
    PlatformUserSerializer, AdminCreateSerializer
)
from .permissions import IsPlatformAdmin

logger = logging.getLogger(__name__)


# =============== AUTHENTICATION VIEWS ===============

class CustomTokenObtainPairView(TokenObtainPairView):
    """
    JWT login. Returns the tokens together with the user and, for business
    owners, the business they manage.
    """
    serializer_class = LoginSerializer

    @extend_schema(
        summary="User Login with JWT Token",
        request=LoginSerializer,
        responses={
            200: {
                'type': 'object',
                'properties': {
                    'refresh': {'type': 'string', 'description': 'JWT refresh token'},
                    'access': {'type': 'string', 'description': 'JWT access token'},
                    'user': {'type': 'object', 'description': 'User information'},
                    'business': {'type': 'object', 'description': 'Business information (owners only)'},
                }
            },
            400: {'description': 'Invalid credentials'},
        },
        examples=[
            OpenApiExample(
                'Owner Login',
                value={"email": "dono@pizzaria.com", "password": "SenhaSegura123"}
            )
        ]
    )
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data['user']
        business = serializer.validated_data['business']

        user.last_login_at = timezone.now()
        user.save(update_fields=['last_login_at'])

        refresh = RefreshToken.for_user(user)
        if business is not None:
            refresh['business_slug'] = business.slug
            refresh['business_id'] = str(business.id)
        refresh['is_super_admin'] = user.is_super_admin

        return Response({
            'refresh': str(refresh),
            'access': str(refresh.access_token),
            'user': UserSerializer(user).data,
            'business': BusinessSerializer(business).data if business else None,
        }, status=status.HTTP_200_OK)


@extend_schema(
    summary="Register New Business",
    description="Creates the owner account, the business (with a unique slug) and its default settings.",
    request=RegistrationSerializer,
    responses={201: {'type': 'object'}, 400: {'description': 'Validation errors'}},
    examples=[
        OpenApiExample(
            'Business Registration',
            value={
                "name": "Maria Souza",
                "business_name": "Pizzaria da Maria",
                "email": "maria@pizzaria.com",
                "password": "SenhaSegura123"
            }
        )
    ]
)
@api_view(['POST'])
@permission_classes([permissions.AllowAny])
def register_business(request):
    serializer = RegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    result = serializer.save()

    logger.info("Registered business %s for %s", result['business'].slug, result['owner'].email)
    return Response({
        'message': 'Business registered successfully',
        'business': BusinessSerializer(result['business']).data,
        'owner': UserSerializer(result['owner']).data,
    }, status=status.HTTP_201_CREATED)


# =============== USER PROFILE ===============

class MyProfileView(generics.RetrieveUpdateAPIView):
    """
    get: Current user's profile
    put/patch: Update name, phone or password (email cannot be changed here)
    """
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user


# =============== PLATFORM ADMIN ===============

class PlatformUserListView(generics.ListAPIView):
    """List platform accounts with their business"""
    serializer_class = PlatformUserSerializer
    permission_classes = [IsPlatformAdmin]
    queryset = CustomUser.objects.select_related('business')
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'email', 'business__name']
    ordering_fields = ['date_joined', 'name', 'email']
    ordering = ['-date_joined']


@extend_schema(summary="Delete a user account and its business", responses={204: None})
@api_view(['DELETE'])
@permission_classes([IsPlatformAdmin])
def delete_platform_user(request, user_id):
    user = get_object_or_404(CustomUser, id=user_id)
    if user == request.user:
        raise ValidationError("You cannot delete your own account.")

    logger.warning("Platform admin %s deleted user %s", request.user.email, user.email)
    user.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(summary="Create a platform admin", request=AdminCreateSerializer, responses={201: PlatformUserSerializer})
@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def create_platform_admin(request):
    serializer = AdminCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    admin_user = serializer.save()

    logger.info("Platform admin %s created admin %s", request.user.email, admin_user.email)
    return Response(PlatformUserSerializer(admin_user).data, status=status.HTTP_201_CREATED)


# =============== SYSTEM ===============

@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def health_check(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return Response({
            'status': 'healthy',
            'timestamp': timezone.now().isoformat(),
            'database': 'connected',
            'version': '1.0.0'
        })
    except DatabaseError as e:
        logger.error("Health check failed: %s", e)
        return Response({
            'status': 'unhealthy',
            'timestamp': timezone.now().isoformat(),
            'database': 'disconnected',
            'error': str(e)
        }, status=status.HTTP_503_SERVICE_UNAVAILABLE)
