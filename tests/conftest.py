from decimal import Decimal

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from authentication.models import CustomUser, Business
from catalog.models import BusinessSettings, Category, Product, DeliveryZone


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def owner(db):
    return CustomUser.objects.create_user(
        email='maria@pizzaria.com', password='SenhaSegura123', name='Maria Souza'
    )


@pytest.fixture
def business(owner):
    return Business.objects.create(owner=owner, name='Pizzaria da Maria', slug='pizzaria-da-maria')


@pytest.fixture
def shop_settings(business):
    settings = BusinessSettings.load(business)
    settings.whatsapp = '(11) 98888-7777'
    settings.mercadopago_access_token = 'TEST-seller-token'
    settings.save()
    return settings


@pytest.fixture
def category(business):
    return Category.objects.create(business=business, name='Pizzas', order_index=0)


@pytest.fixture
def product(business, category):
    return Product.objects.create(
        business=business, category=category, name='X', price=Decimal('10.00'), order_index=0
    )


@pytest.fixture
def zones(business):
    return [
        DeliveryZone.objects.create(business=business, neighborhood_name='Centro', fee=Decimal('5.00')),
        DeliveryZone.objects.create(business=business, neighborhood_name='Norte', fee=Decimal('8.00')),
    ]


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def owner_client(owner, business):
    client = APIClient()
    client.force_authenticate(user=owner)
    return client


@pytest.fixture
def platform_admin(db):
    return CustomUser.objects.create_user(
        email='admin@pedinu.com', password='SenhaSegura123', name='Admin', is_super_admin=True
    )


@pytest.fixture
def admin_client(platform_admin):
    client = APIClient()
    client.force_authenticate(user=platform_admin)
    return client


@pytest.fixture
def other_business(db):
    other = CustomUser.objects.create_user(
        email='joao@lanches.com', password='SenhaSegura123', name='João'
    )
    return Business.objects.create(owner=other, name='Lanches do João', slug='lanches-do-joao')
