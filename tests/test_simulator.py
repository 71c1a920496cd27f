import random

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.core.management import call_command
from django.core.management.base import CommandError

from orders.models import KitchenOrder
from orders.simulator import DemoOrderSimulator


@pytest.fixture
def demo_enabled(settings):
    settings.PEDINU = {**settings.PEDINU, 'DEMO_ORDERS_ENABLED': True}


@pytest.mark.django_db
def test_simulator_is_disabled_by_default(business):
    with pytest.raises(ImproperlyConfigured):
        DemoOrderSimulator(business)


@pytest.mark.django_db
def test_tick_creates_demo_order(demo_enabled, business, shop_settings):
    simulator = DemoOrderSimulator(business, probability=1.0, rng=random.Random(7))

    order = simulator.tick()

    assert order.is_demo is True
    assert order.status == KitchenOrder.STATUS_RECEIVED
    assert 1 <= len(order.items) <= 2


@pytest.mark.django_db
def test_no_orders_while_closed(demo_enabled, business, shop_settings):
    shop_settings.is_open = False
    shop_settings.save()

    assert DemoOrderSimulator(business, probability=1.0).tick() is None
    assert KitchenOrder.objects.count() == 0


@pytest.mark.django_db
def test_probability_zero_never_creates(demo_enabled, business, shop_settings):
    assert DemoOrderSimulator(business, probability=0.0).tick() is None


@pytest.mark.django_db
def test_command_runs_fixed_iterations(demo_enabled, business, shop_settings):
    call_command('simulate_orders', business.slug, '--iterations', '3', '--probability', '1', '--interval', '0')

    assert KitchenOrder.objects.filter(business=business, is_demo=True).count() == 3


@pytest.mark.django_db
def test_command_refuses_when_disabled(business):
    with pytest.raises(CommandError):
        call_command('simulate_orders', business.slug, '--iterations', '1')
