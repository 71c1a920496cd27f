"""
Kitchen board: the status pipeline of kitchen orders.

received -> preparing -> ready -> completed, and cancelled from any state
that is not final. completed and cancelled accept no further change.
"""
import uuid

from django.db import transaction
from django.db.models import Q

from .exceptions import InvalidStatusTransition
from .models import KitchenOrder

PIPELINE = [
    KitchenOrder.STATUS_RECEIVED,
    KitchenOrder.STATUS_PREPARING,
    KitchenOrder.STATUS_READY,
    KitchenOrder.STATUS_COMPLETED,
]

STATUS_CONFIG = {
    KitchenOrder.STATUS_RECEIVED: {
        'title': 'Em análise', 'icon': 'bell', 'color': 'red',
        'next': KitchenOrder.STATUS_PREPARING,
    },
    KitchenOrder.STATUS_PREPARING: {
        'title': 'Em produção', 'icon': 'utensils', 'color': 'orange',
        'next': KitchenOrder.STATUS_READY,
    },
    KitchenOrder.STATUS_READY: {
        'title': 'Prontos para entrega', 'icon': 'check-circle', 'color': 'green',
        'next': KitchenOrder.STATUS_COMPLETED,
    },
    KitchenOrder.STATUS_COMPLETED: {
        'title': 'Finalizados', 'icon': 'shopping-bag', 'color': 'gray',
        'next': None,
    },
    KitchenOrder.STATUS_CANCELLED: {
        'title': 'Cancelados', 'icon': 'x-circle', 'color': 'slate',
        'next': None,
    },
}

TERMINAL_STATUSES = {KitchenOrder.STATUS_COMPLETED, KitchenOrder.STATUS_CANCELLED}


def allowed_transitions(current):
    if current in TERMINAL_STATUSES:
        return []
    return [STATUS_CONFIG[current]['next'], KitchenOrder.STATUS_CANCELLED]


def can_transition(current, new_status):
    return new_status in allowed_transitions(current)


def update_status(order, new_status):
    """Move ``order`` to ``new_status`` if the pipeline allows it."""
    with transaction.atomic():
        locked = KitchenOrder.objects.select_for_update().get(pk=order.pk)
        if not can_transition(locked.status, new_status):
            raise InvalidStatusTransition(
                f"Cannot change order #{locked.short_number} from '{locked.status}' to '{new_status}'."
            )
        locked.status = new_status
        locked.save(update_fields=['status', 'updated_at'])
    return locked


def cancel_order(order):
    return update_status(order, KitchenOrder.STATUS_CANCELLED)


def search_orders(orders, search):
    """Case-insensitive match on order id or customer name, done in the database"""
    needle = (search or '').strip()
    if not needle:
        return orders
    condition = Q(customer_name__icontains=needle) | Q(id__icontains=needle)
    try:
        condition |= Q(id=uuid.UUID(needle))
    except ValueError:
        pass
    return orders.filter(condition)


def build_board(orders, search='', serialize=None):
    """
    One column per pipeline status, newest orders first, plus the cancelled
    orders in their own bucket. ``orders`` is a KitchenOrder queryset.
    """
    serialize = serialize or (lambda order: order)
    orders = list(search_orders(orders, search).order_by('-order_time'))

    grouped = {status: [] for status in STATUS_CONFIG}
    for order in orders:
        grouped.setdefault(order.status, []).append(order)

    columns = []
    for status in PIPELINE:
        config = STATUS_CONFIG[status]
        columns.append({
            'status': status,
            'title': config['title'],
            'icon': config['icon'],
            'color': config['color'],
            'next': config['next'],
            'count': len(grouped[status]),
            'orders': [serialize(order) for order in grouped[status]],
        })

    cancelled = grouped[KitchenOrder.STATUS_CANCELLED]
    return {
        'columns': columns,
        'cancelled': {
            'status': KitchenOrder.STATUS_CANCELLED,
            'title': STATUS_CONFIG[KitchenOrder.STATUS_CANCELLED]['title'],
            'count': len(cancelled),
            'orders': [serialize(order) for order in cancelled],
        },
        'total': len(orders),
    }
