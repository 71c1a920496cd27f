"""
Mercado Pago integration.

Checkout preferences are created with the business's own access token and
carry the platform fee as the marketplace fee, so the gateway splits the
amount. Status look-ups use the platform token.
"""
import logging
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

import mercadopago
from django.conf import settings
from django.db.models import Sum, Count, Q
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import APIException

from .models import Payment

logger = logging.getLogger(__name__)

CENTS = Decimal('0.01')


class PaymentGatewayError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Payment gateway error.'
    default_code = 'payment_gateway_error'


class PaymentCredentialsMissing(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Payment credentials are not configured for this business. Please contact support.'
    default_code = 'payment_credentials_missing'


def calculate_split(amount, percentage=None):
    """Return (platform_fee, business_amount); the two always add up to amount."""
    if percentage is None:
        percentage = settings.PEDINU['PLATFORM_FEE_PERCENTAGE']
    amount = Decimal(str(amount)).quantize(CENTS, rounding=ROUND_HALF_UP)
    platform_fee = (amount * Decimal(str(percentage)) / 100).quantize(CENTS, rounding=ROUND_HALF_UP)
    return platform_fee, amount - platform_fee


class MercadoPagoGateway:
    """
    Thin wrapper over the mercadopago SDK. ``sdk_factory`` builds an SDK
    client from an access token and is swapped out in tests.
    """

    def __init__(self, sdk_factory=None, config=None):
        self.sdk_factory = sdk_factory or mercadopago.SDK
        self.config = config or settings.PEDINU

    def _call(self, action, request):
        try:
            result = request()
        except OSError as exc:
            logger.error("Mercado Pago %s failed: %s", action, exc)
            raise PaymentGatewayError(f"Payment gateway unavailable: {exc}") from exc

        response = result.get('response') or {}
        if result.get('status') not in (200, 201):
            message = response.get('message') if isinstance(response, dict) else None
            logger.warning("Mercado Pago %s rejected (%s): %s", action, result.get('status'), response)
            raise PaymentGatewayError(f"Mercado Pago {action} failed: {message or 'unknown error'}")
        return response

    def build_preference(self, payment_data, business_name, external_reference, platform_fee):
        app_url = self.config['APP_URL'].rstrip('/')
        method = payment_data['payment_method']
        is_pix = method == 'Pix'
        expires_at = timezone.now() + timedelta(minutes=self.config['PAYMENT_EXPIRATION_MINUTES'])

        items = [
            {
                'title': item['name'],
                'quantity': item['quantity'],
                'unit_price': float(item['price']),
                'currency_id': 'BRL',
            }
            for item in payment_data['items']
        ]
        delivery_fee = Decimal(str(payment_data.get('delivery_fee') or 0))
        if delivery_fee > 0:
            items.append({
                'title': 'Taxa de entrega',
                'quantity': 1,
                'unit_price': float(delivery_fee),
                'currency_id': 'BRL',
            })

        return {
            'items': items,
            'payer': {
                'name': payment_data['customer_name'],
                'email': payment_data['customer_email'],
                'phone': {'number': payment_data.get('customer_phone', '')},
            },
            'payment_methods': {
                'excluded_payment_types': [] if is_pix else [{'id': 'ticket'}],
                'excluded_payment_methods': [] if is_pix else [{'id': 'pix'}],
                'installments': 12 if method == 'Cartão de Crédito' else 1,
            },
            'marketplace_fee': float(platform_fee),
            'external_reference': external_reference,
            'notification_url': f"{app_url}/api/payment-webhook",
            'back_urls': {
                'success': f"{app_url}/payment/success",
                'failure': f"{app_url}/payment/failure",
                'pending': f"{app_url}/payment/pending",
            },
            'auto_return': 'approved',
            'expires': True,
            'expiration_date_to': expires_at.isoformat(timespec='milliseconds'),
            'statement_descriptor': business_name or self.config['STATEMENT_DESCRIPTOR'],
        }

    def create_payment_with_split(self, payment_data, business_settings):
        """
        Create a hosted checkout for ``payment_data`` (amount, description,
        customer_name, customer_email, customer_phone, payment_method, items,
        delivery_fee) and record it as a pending Payment.
        """
        business = business_settings.business
        access_token = business_settings.mercadopago_access_token
        if not access_token:
            raise PaymentCredentialsMissing()

        amount = Decimal(str(payment_data['amount']))
        platform_fee, business_amount = calculate_split(amount, self.config['PLATFORM_FEE_PERCENTAGE'])
        stamp = int(timezone.now().timestamp() * 1000)
        external_reference = f"order_{stamp}_{business.id}"

        preference = self.build_preference(payment_data, business.name, external_reference, platform_fee)
        sdk = self.sdk_factory(access_token)
        response = self._call('preference', lambda: sdk.preference().create(preference))

        payment = Payment.objects.create(
            business=business,
            preference_id=response['id'],
            external_reference=external_reference,
            amount=amount,
            platform_fee=platform_fee,
            business_amount=business_amount,
            customer_name=payment_data['customer_name'],
            customer_email=payment_data['customer_email'],
            customer_phone=payment_data.get('customer_phone', ''),
            payment_method=payment_data['payment_method'],
            items=payment_data['items'],
            status='pending',
        )
        logger.info(
            "Created payment preference %s for business %s (amount %s, fee %s)",
            payment.preference_id, business.slug, amount, platform_fee
        )

        return {
            'preference_id': payment.preference_id,
            'init_point': response.get('init_point'),
            'sandbox_init_point': response.get('sandbox_init_point'),
            'checkout_url': response.get('init_point') or response.get('sandbox_init_point'),
            'platform_fee': platform_fee,
            'business_amount': business_amount,
        }

    def get_payment_status(self, payment_id):
        """Payment as reported by the gateway, looked up with the platform token"""
        access_token = self.config['PLATFORM_ACCESS_TOKEN']
        if not access_token:
            raise PaymentCredentialsMissing('Platform payment credentials are not configured.')
        sdk = self.sdk_factory(access_token)
        return self._call('payment lookup', lambda: sdk.payment().get(payment_id))


def update_payment_status(preference_id, new_status, payment_id=None):
    payment = Payment.objects.get(preference_id=preference_id)
    payment.status = new_status
    update_fields = ['status', 'updated_at']
    if payment_id:
        payment.payment_id = str(payment_id)
        update_fields.append('payment_id')
    payment.save(update_fields=update_fields)
    return payment


def get_business_payments(business, limit=50):
    return Payment.objects.filter(business=business).order_by('-created_at')[:limit]


def get_platform_stats():
    approved = Q(status='approved')
    totals = Payment.objects.aggregate(
        total_revenue=Sum('amount', filter=approved),
        total_fees=Sum('platform_fee', filter=approved),
        successful=Count('id', filter=approved),
        pending=Count('id', filter=Q(status='pending')),
        failed=Count('id', filter=Q(status__in=Payment.FAILED_STATUSES)),
    )
    return {
        'total_revenue': float(totals['total_revenue'] or 0),
        'total_fees': float(totals['total_fees'] or 0),
        'successful_payments': totals['successful'],
        'pending_payments': totals['pending'],
        'failed_payments': totals['failed'],
    }
