import io
from decimal import Decimal

import openpyxl
import pytest

from orders.customers import customer_statistics, save_customer_order
from orders.models import Customer, CustomerOrder

ITEMS = [{'name': 'X', 'quantity': 2, 'price': 10.0}]


def customer_data(**overrides):
    data = {'name': 'Ana', 'phone': '11999990000', 'neighborhood': 'Centro', 'address': 'Rua A, 10'}
    data.update(overrides)
    return data


def record(business, total, **overrides):
    total = Decimal(total)
    return save_customer_order(business, customer_data(**overrides), ITEMS, total, Decimal('0.00'), total, 'Dinheiro')


@pytest.mark.django_db
def test_first_order_creates_customer(business):
    order = record(business, '25.00')

    customer = Customer.objects.get(business=business)
    assert customer.total_orders == 1
    assert customer.total_spent == Decimal('25.00')
    assert customer.last_order_date == order.order_date
    assert order.customer == customer
    assert order.payment_method == 'Dinheiro'


@pytest.mark.django_db
def test_repeat_orders_update_counters_and_latest_details(business):
    record(business, '25.00')
    record(business, '15.50', name='Ana Souza', address='Rua B, 20')

    customer = Customer.objects.get(business=business)
    assert customer.total_orders == 2
    assert customer.total_spent == Decimal('40.50')
    assert customer.name == 'Ana Souza'
    assert customer.address == 'Rua B, 20'
    assert CustomerOrder.objects.filter(customer=customer).count() == 2


@pytest.mark.django_db
def test_same_phone_in_another_business_is_another_customer(business, other_business):
    record(business, '10.00')
    record(other_business, '10.00')

    assert Customer.objects.count() == 2


@pytest.mark.django_db
def test_customer_statistics(business):
    record(business, '25.00')
    record(business, '15.00')
    record(business, '20.00', phone='11888880000')

    stats = customer_statistics(business)

    assert stats == {
        'total_customers': 2,
        'total_orders': 3,
        'total_revenue': 60.0,
        'average_order_value': 20.0,
    }


@pytest.mark.django_db
def test_statistics_without_customers(business):
    assert customer_statistics(business) == {
        'total_customers': 0,
        'total_orders': 0,
        'total_revenue': 0.0,
        'average_order_value': 0.0,
    }


@pytest.mark.django_db
def test_customer_endpoints(owner_client, business):
    record(business, '25.00')
    customer = Customer.objects.get(business=business)

    customers = owner_client.get('/orders/customers/').json()
    history = owner_client.get(f'/orders/customers/{customer.id}/orders/').json()
    stats = owner_client.get('/orders/customers/statistics/').json()

    assert customers[0]['phone'] == '11999990000'
    assert len(history) == 1
    assert stats['total_orders'] == 1


@pytest.mark.django_db
def test_order_history_excel_export(owner_client, business):
    record(business, '25.00')
    record(business, '15.00', phone='11888880000', name='Bruno')

    response = owner_client.get('/orders/customers/orders/export/')

    assert response.status_code == 200
    assert response['Content-Type'].startswith('application/vnd.openxmlformats')
    sheet = openpyxl.load_workbook(io.BytesIO(response.content)).active
    assert sheet['A1'].value == 'Pizzaria da Maria - Orders Report'
    assert [sheet.cell(row=r, column=2).value for r in (5, 6)] == ['Ana', 'Bruno']
    assert sheet.cell(row=8, column=8).value == 40.0


@pytest.mark.django_db
def test_export_rejects_bad_dates(owner_client, business):
    response = owner_client.get('/orders/customers/orders/export/', {'start_date': '31/12/2025'})

    assert response.status_code == 400
