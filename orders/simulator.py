"""
Demo order generator for showing the kitchen board without real customers.

Orders it creates are flagged is_demo. It refuses to run unless the
DEMO_ORDERS_ENABLED setting is on.
"""
import logging
import random
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from catalog.models import BusinessSettings
from .models import KitchenOrder

logger = logging.getLogger(__name__)

SAMPLE_ITEMS = [
    ('Pizza Calabresa', 2),
    ('X-Tudo', 1),
    ('Açaí 500ml', 2),
    ('Refrigerante 2L', 1),
]
SAMPLE_CUSTOMERS = ['Roberto Alves', 'Fernanda Costa', 'Lucas Martins', 'Beatriz Santos']
SAMPLE_PAYMENT_METHODS = ['pix', 'credit_card', 'cash']


class DemoOrderSimulator:
    def __init__(self, business, probability=0.15, rng=None):
        if not settings.PEDINU['DEMO_ORDERS_ENABLED']:
            raise ImproperlyConfigured("Demo orders are disabled. Set DEMO_ORDERS_ENABLED to use the simulator.")
        self.business = business
        self.probability = probability
        self.rng = rng or random.Random()

    def make_order(self):
        rng = self.rng
        items = []
        for _ in range(rng.randint(1, 2)):
            name, max_quantity = rng.choice(SAMPLE_ITEMS)
            items.append({'name': name, 'quantity': rng.randint(1, max_quantity)})

        order_type = rng.choice(['delivery', 'pickup'])
        return KitchenOrder.objects.create(
            business=self.business,
            customer_name=rng.choice(SAMPLE_CUSTOMERS),
            items=items,
            total=Decimal(rng.randint(20, 99)),
            status=KitchenOrder.STATUS_RECEIVED,
            order_type=order_type,
            delivery_address=f"Rua Exemplo, {rng.randint(1, 1000)}",
            payment_method=rng.choice(SAMPLE_PAYMENT_METHODS),
            is_demo=True,
        )

    def tick(self):
        """Maybe create one demo order. Only while the business is open."""
        if not BusinessSettings.load(self.business).is_open:
            return None
        if self.rng.random() >= self.probability:
            return None
        order = self.make_order()
        logger.info("Demo order #%s created for %s", order.short_number, self.business.slug)
        return order
