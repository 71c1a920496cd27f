"""
Customer bookkeeping for the business: one Customer per phone number with
running totals, plus a CustomerOrder history row per checkout.

Recording is best-effort. A failure here must not block the order, so it is
logged with the business and order ids for operators and otherwise ignored.
"""
import logging
from decimal import Decimal

from django.db import transaction, DatabaseError
from django.db.models import F, Sum, Count
from django.utils import timezone

from .models import Customer, CustomerOrder

logger = logging.getLogger(__name__)


@transaction.atomic
def save_customer_order(business, customer_data, items, subtotal, delivery_fee, total,
                        payment_method, kitchen_order=None):
    """
    Upsert the customer and write the history row in one transaction, so
    the counters never move without a matching CustomerOrder.
    """
    now = timezone.now()
    phone = customer_data['phone']

    customer = Customer.objects.select_for_update().filter(business=business, phone=phone).first()
    if customer is None:
        customer = Customer.objects.create(
            business=business,
            name=customer_data['name'],
            phone=phone,
            neighborhood=customer_data.get('neighborhood', ''),
            address=customer_data.get('address', ''),
            total_orders=1,
            total_spent=total,
            last_order_date=now,
        )
    else:
        Customer.objects.filter(pk=customer.pk).update(
            name=customer_data['name'],
            neighborhood=customer_data.get('neighborhood', ''),
            address=customer_data.get('address', ''),
            total_orders=F('total_orders') + 1,
            total_spent=F('total_spent') + total,
            last_order_date=now,
        )

    return CustomerOrder.objects.create(
        business=business,
        customer=customer,
        kitchen_order=kitchen_order,
        customer_name=customer_data['name'],
        customer_phone=phone,
        customer_neighborhood=customer_data.get('neighborhood', ''),
        customer_address=customer_data.get('address', ''),
        items=items,
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        total=total,
        payment_method=payment_method,
        notes=customer_data.get('notes') or None,
        order_date=now,
    )


def record_customer_order(business, customer_data, items, subtotal, delivery_fee, total,
                          payment_method, kitchen_order=None):
    """save_customer_order that logs instead of raising. Returns None on failure."""
    try:
        return save_customer_order(
            business, customer_data, items, subtotal, delivery_fee, total,
            payment_method, kitchen_order=kitchen_order,
        )
    except DatabaseError:
        logger.exception(
            "Customer stats not recorded for order",
            extra={
                'business_id': str(business.id),
                'kitchen_order_id': str(kitchen_order.id) if kitchen_order else None,
                'customer_phone': customer_data.get('phone'),
            }
        )
        return None


def customer_statistics(business):
    totals = Customer.objects.filter(business=business).aggregate(
        total_customers=Count('id'),
        total_orders=Sum('total_orders'),
        total_revenue=Sum('total_spent'),
    )
    total_orders = totals['total_orders'] or 0
    total_revenue = totals['total_revenue'] or Decimal('0.00')
    average = (total_revenue / total_orders).quantize(Decimal('0.01')) if total_orders else Decimal('0.00')

    return {
        'total_customers': totals['total_customers'],
        'total_orders': total_orders,
        'total_revenue': float(total_revenue),
        'average_order_value': float(average),
    }
