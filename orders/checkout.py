"""
Checkout of a storefront cart.

Pix and card payments go to a hosted payment page and leave the cart as it
is; no kitchen order is created there. Cash orders are saved for the
kitchen, recorded in the customer history and handed to the business as a
WhatsApp message link, and only then is the cart cleared.
"""
import logging
import re
from contextlib import contextmanager

from django.conf import settings
from django.core.cache import cache
from django.db import transaction, DatabaseError
from rest_framework.exceptions import ValidationError

from catalog.models import BusinessSettings, DeliveryZone
from payments.gateway import MercadoPagoGateway
from .customers import record_customer_order
from .exceptions import OrderPersistenceError, CheckoutInProgress
from .models import KitchenOrder
from .whatsapp import build_order_message, build_whatsapp_url, only_digits
from .zones import resolve_delivery_fee

logger = logging.getLogger(__name__)

# Display label chosen by the customer -> KitchenOrder.payment_method
PAYMENT_METHODS = {
    'Pix': 'pix',
    'Dinheiro': 'cash',
    'Cartão de Crédito': 'credit_card',
    'Cartão de Débito': 'debit_card',
}
GATEWAY_PAYMENT_METHODS = ('Pix', 'Cartão de Crédito', 'Cartão de Débito')


def map_payment_method(label):
    return PAYMENT_METHODS.get(label, 'cash')


def customer_email_for(name):
    """Synthesized payer email: 'Ana Maria' -> 'ana.maria@pedinu.com'"""
    local = re.sub(r'\s+', '.', name.strip().lower())
    return f"{local}@{settings.PEDINU['CUSTOMER_EMAIL_DOMAIN']}"


@contextmanager
def processing_guard(key, timeout=None):
    """
    Refuse a second checkout for the same session while one is running.
    This is a per-session debounce, not a lock across sessions.
    """
    if not key:
        yield
        return
    if timeout is None:
        timeout = settings.PEDINU['CHECKOUT_LOCK_SECONDS']
    if not cache.add(key, True, timeout):
        raise CheckoutInProgress()
    try:
        yield
    finally:
        cache.delete(key)


class CheckoutService:
    """
    Orchestrates one checkout for ``business``.

    ``session_cart`` is the visitor's SessionCart, ``gateway`` the payment
    gateway client and ``guard_key`` identifies the visitor's session for
    the in-flight guard.
    """

    def __init__(self, business, session_cart, gateway=None, guard_key=None):
        self.business = business
        self.session_cart = session_cart
        self.gateway = gateway or MercadoPagoGateway()
        self.guard_key = guard_key

    @property
    def cart(self):
        return self.session_cart.cart

    def checkout(self, details):
        """``details`` is validated CheckoutSerializer data."""
        business_settings = BusinessSettings.load(self.business)
        if not business_settings.is_open:
            raise ValidationError("The business is closed and is not accepting orders right now.")
        if self.cart.is_empty:
            raise ValidationError({'cart': ["Your cart is empty."]})

        zones = DeliveryZone.objects.filter(business=self.business)
        _, delivery_fee = resolve_delivery_fee(zones, details['neighborhood'])
        if delivery_fee is None:
            raise ValidationError({'neighborhood': ["Select a valid neighborhood from the list."]})

        subtotal = self.cart.total
        total = subtotal + delivery_fee
        items = [
            {'name': line.name, 'quantity': line.quantity, 'price': float(line.unit_price)}
            for line in self.cart.lines
        ]

        with processing_guard(self.guard_key):
            if details['payment_method'] in GATEWAY_PAYMENT_METHODS:
                return self._pay_online(business_settings, details, items, subtotal, delivery_fee, total)
            return self._order_by_whatsapp(business_settings, details, items, subtotal, delivery_fee, total)

    def _pay_online(self, business_settings, details, items, subtotal, delivery_fee, total):
        payment_data = {
            'amount': total,
            'description': f"Pedido - {self.business.name}",
            'customer_name': details['name'],
            'customer_email': customer_email_for(details['name']),
            'customer_phone': details['phone'],
            'payment_method': details['payment_method'],
            'items': items,
            'delivery_fee': delivery_fee,
            'business_id': str(self.business.id),
        }
        payment = self.gateway.create_payment_with_split(payment_data, business_settings)

        return {
            'flow': 'payment',
            'payment_url': payment['checkout_url'],
            'preference_id': payment['preference_id'],
            'subtotal': float(subtotal),
            'delivery_fee': float(delivery_fee),
            'total': float(total),
        }

    def _order_by_whatsapp(self, business_settings, details, items, subtotal, delivery_fee, total):
        phone_digits = business_settings.order_phone
        if not phone_digits:
            raise ValidationError("WhatsApp number is not configured for this business.")

        try:
            with transaction.atomic():
                order = KitchenOrder.objects.create(
                    business=self.business,
                    customer_name=details['name'],
                    items=items,
                    total=total,
                    status=KitchenOrder.STATUS_RECEIVED,
                    order_type='delivery',
                    payment_method=map_payment_method(details['payment_method']),
                    delivery_address=f"{details['address']}, {details['neighborhood']}",
                    notes=details.get('notes') or None,
                )
        except DatabaseError as exc:
            logger.error(
                "Kitchen order insert failed for business %s: %s", self.business.slug, exc
            )
            raise OrderPersistenceError.from_database_error(exc) from exc

        record_customer_order(
            self.business,
            details,
            items,
            subtotal,
            delivery_fee,
            total,
            details['payment_method'],
            kitchen_order=order,
        )

        message = build_order_message(
            self.business.name,
            {
                'name': details['name'],
                'phone': details['phone'],
                'neighborhood': details['neighborhood'],
                'address': details['address'],
                'payment_method': details['payment_method'],
                'notes': details.get('notes'),
            },
            items, subtotal, delivery_fee, total,
        )
        whatsapp_url = build_whatsapp_url(only_digits(phone_digits), message)

        self.session_cart.clear()
        logger.info("Order #%s received for business %s", order.short_number, self.business.slug)

        return {
            'flow': 'whatsapp',
            'order_id': str(order.id),
            'order_number': order.short_number,
            'whatsapp_url': whatsapp_url,
            'message': message,
            'subtotal': float(subtotal),
            'delivery_fee': float(delivery_fee),
            'total': float(total),
        }
