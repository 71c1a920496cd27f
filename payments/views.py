import logging

from rest_framework import status, generics, filters
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.exceptions import ValidationError
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from authentication.mixins import BusinessContextMixin
from authentication.models import Business
from authentication.permissions import IsBusinessOwner, IsPlatformAdmin, get_request_business
from orders.models import KitchenOrder
from .gateway import MercadoPagoGateway, get_business_payments, get_platform_stats, update_payment_status
from .models import Payment, Withdrawal
from .serializers import (
    PaymentSerializer, PaymentRefreshSerializer, WithdrawalSerializer, WithdrawalReviewSerializer
)

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_REASON = 'Não especificado'


# =============== PAYMENTS ===============

@swagger_auto_schema(
    method='get',
    manual_parameters=[
        openapi.Parameter('limit', openapi.IN_QUERY, description="Max payments (default 50)", type=openapi.TYPE_INTEGER),
    ],
    responses={200: PaymentSerializer(many=True)}
)
@api_view(['GET'])
@permission_classes([IsBusinessOwner])
def payment_list(request):
    try:
        limit = int(request.GET.get('limit', 50))
    except ValueError:
        raise ValidationError({'limit': ["A valid integer is required."]})
    payments = get_business_payments(get_request_business(request), limit=max(1, min(limit, 200)))
    return Response(PaymentSerializer(payments, many=True).data)


@swagger_auto_schema(
    method='post',
    operation_description="Ask the gateway for the payment status and store it",
    request_body=PaymentRefreshSerializer,
    responses={200: PaymentSerializer}
)
@api_view(['POST'])
@permission_classes([IsBusinessOwner])
def refresh_payment_status(request, preference_id):
    business = get_request_business(request)
    payment = get_object_or_404(Payment, preference_id=preference_id, business=business)
    serializer = PaymentRefreshSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    payment_id = serializer.validated_data.get('payment_id') or payment.payment_id
    if not payment_id:
        raise ValidationError({'payment_id': ["The gateway has not reported a payment for this checkout yet."]})

    remote = MercadoPagoGateway().get_payment_status(payment_id)
    new_status = remote.get('status')
    if new_status not in dict(Payment.STATUS_CHOICES):
        logger.warning("Unknown payment status %r for preference %s", new_status, preference_id)
        raise ValidationError({'status': [f"Unknown payment status: {new_status}"]})

    payment = update_payment_status(preference_id, new_status, payment_id=payment_id)
    return Response(PaymentSerializer(payment).data)


# =============== WITHDRAWALS ===============

class WithdrawalListCreateView(BusinessContextMixin, generics.ListCreateAPIView):
    """Withdrawal requests of the user's business"""
    queryset = Withdrawal.objects.select_related('business', 'processed_by')
    serializer_class = WithdrawalSerializer
    permission_classes = [IsBusinessOwner]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['status']
    ordering = ['-created_at']


class AdminWithdrawalListView(generics.ListAPIView):
    """All withdrawal requests on the platform"""
    queryset = Withdrawal.objects.select_related('business', 'processed_by')
    serializer_class = WithdrawalSerializer
    permission_classes = [IsPlatformAdmin]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'business']
    search_fields = ['business__name', 'business__slug']
    ordering_fields = ['created_at', 'amount']
    ordering = ['-created_at']


def _review_withdrawal(request, pk, new_status):
    withdrawal = get_object_or_404(Withdrawal, pk=pk)
    if not withdrawal.is_pending:
        raise ValidationError({'status': [f"Withdrawal is already {withdrawal.status}."]})

    serializer = WithdrawalReviewSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    reason = serializer.validated_data.get('reason', '')
    if new_status == 'rejected' and not reason:
        reason = DEFAULT_REJECTION_REASON

    withdrawal.status = new_status
    withdrawal.reason = reason
    withdrawal.processed_at = timezone.now()
    withdrawal.processed_by = request.user
    withdrawal.save(update_fields=['status', 'reason', 'processed_at', 'processed_by', 'updated_at'])
    logger.info("Withdrawal %s %s by %s", withdrawal.pk, new_status, request.user.email)
    return Response(WithdrawalSerializer(withdrawal).data)


@swagger_auto_schema(method='post', request_body=WithdrawalReviewSerializer, responses={200: WithdrawalSerializer})
@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def approve_withdrawal(request, pk):
    return _review_withdrawal(request, pk, 'approved')


@swagger_auto_schema(method='post', request_body=WithdrawalReviewSerializer, responses={200: WithdrawalSerializer})
@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def reject_withdrawal(request, pk):
    return _review_withdrawal(request, pk, 'rejected')


# =============== PLATFORM ===============

@swagger_auto_schema(
    method='get',
    responses={
        200: openapi.Response(
            description="Platform-wide payment statistics",
            schema=openapi.Schema(
                type=openapi.TYPE_OBJECT,
                properties={
                    'total_revenue': openapi.Schema(type=openapi.TYPE_NUMBER),
                    'total_fees': openapi.Schema(type=openapi.TYPE_NUMBER),
                    'successful_payments': openapi.Schema(type=openapi.TYPE_INTEGER),
                    'pending_payments': openapi.Schema(type=openapi.TYPE_INTEGER),
                    'failed_payments': openapi.Schema(type=openapi.TYPE_INTEGER),
                    'total_businesses': openapi.Schema(type=openapi.TYPE_INTEGER),
                    'active_businesses': openapi.Schema(type=openapi.TYPE_INTEGER),
                    'total_orders': openapi.Schema(type=openapi.TYPE_INTEGER),
                    'pending_withdrawals': openapi.Schema(type=openapi.TYPE_INTEGER),
                }
            )
        )
    }
)
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def platform_stats(request):
    stats = get_platform_stats()
    stats.update({
        'total_businesses': Business.objects.count(),
        'active_businesses': Business.objects.filter(is_active=True).count(),
        'total_orders': KitchenOrder.objects.filter(is_demo=False).count(),
        'pending_withdrawals': Withdrawal.objects.filter(status='pending').count(),
    })
    return Response(stats, status=status.HTTP_200_OK)
