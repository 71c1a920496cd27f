from decimal import Decimal

import pytest

from payments.gateway import (
    MercadoPagoGateway, PaymentCredentialsMissing, PaymentGatewayError, calculate_split,
    get_platform_stats, update_payment_status
)
from payments.models import Payment, Withdrawal


class FakeResource:
    def __init__(self, result, calls):
        self.result = result
        self.calls = calls

    def create(self, data):
        self.calls.append(('create', data))
        return self.result

    def get(self, payment_id):
        self.calls.append(('get', payment_id))
        return self.result


class FakeSDK:
    """Stands in for mercadopago.SDK(access_token)"""
    result = {'status': 201, 'response': {'id': 'pref-1', 'init_point': 'https://mp.test/checkout/pref-1'}}

    def __init__(self, access_token):
        self.access_token = access_token
        self.calls = []
        FakeSDK.last = self

    def preference(self):
        return FakeResource(self.result, self.calls)

    def payment(self):
        return FakeResource(self.result, self.calls)


def payment_data(**overrides):
    data = {
        'amount': Decimal('25.00'),
        'description': 'Pedido - Pizzaria da Maria',
        'customer_name': 'Ana',
        'customer_email': 'ana@pedinu.com',
        'customer_phone': '11999990000',
        'payment_method': 'Pix',
        'items': [{'name': 'X', 'quantity': 2, 'price': 10.0}],
        'delivery_fee': Decimal('5.00'),
    }
    data.update(overrides)
    return data


def make_payment(business, preference_id, status, amount='100.00'):
    platform_fee, business_amount = calculate_split(amount)
    return Payment.objects.create(
        business=business, preference_id=preference_id, amount=Decimal(amount),
        platform_fee=platform_fee, business_amount=business_amount,
        customer_name='Ana', payment_method='Pix', status=status,
    )


def test_split_adds_up_to_amount():
    assert calculate_split(Decimal('25.00')) == (Decimal('1.25'), Decimal('23.75'))
    fee, rest = calculate_split('10.01')
    assert fee == Decimal('0.50')
    assert fee + rest == Decimal('10.01')


def test_preference_uses_unit_prices_and_delivery_line():
    preference = MercadoPagoGateway(sdk_factory=FakeSDK).build_preference(
        payment_data(), 'Pizzaria da Maria', 'order_1_abc', Decimal('1.25')
    )

    assert preference['items'] == [
        {'title': 'X', 'quantity': 2, 'unit_price': 10.0, 'currency_id': 'BRL'},
        {'title': 'Taxa de entrega', 'quantity': 1, 'unit_price': 5.0, 'currency_id': 'BRL'},
    ]
    assert preference['marketplace_fee'] == 1.25
    assert preference['payment_methods']['installments'] == 1
    assert preference['payment_methods']['excluded_payment_methods'] == []
    assert preference['auto_return'] == 'approved'
    assert preference['statement_descriptor'] == 'Pizzaria da Maria'


def test_credit_card_preference_allows_installments_and_excludes_pix():
    preference = MercadoPagoGateway(sdk_factory=FakeSDK).build_preference(
        payment_data(payment_method='Cartão de Crédito', delivery_fee=0), 'Loja', 'ref', Decimal('0')
    )

    assert preference['payment_methods']['installments'] == 12
    assert preference['payment_methods']['excluded_payment_methods'] == [{'id': 'pix'}]
    assert len(preference['items']) == 1


@pytest.mark.django_db
def test_create_payment_with_split_records_pending_payment(business, shop_settings):
    result = MercadoPagoGateway(sdk_factory=FakeSDK).create_payment_with_split(payment_data(), shop_settings)

    assert result['checkout_url'] == 'https://mp.test/checkout/pref-1'
    assert result['platform_fee'] == Decimal('1.25')
    assert FakeSDK.last.access_token == 'TEST-seller-token'

    payment = Payment.objects.get(preference_id='pref-1')
    assert payment.status == 'pending'
    assert payment.business_amount == Decimal('23.75')
    assert payment.external_reference.endswith(f'_{business.id}')


@pytest.mark.django_db
def test_missing_business_token(business, shop_settings):
    shop_settings.mercadopago_access_token = ''

    with pytest.raises(PaymentCredentialsMissing):
        MercadoPagoGateway(sdk_factory=FakeSDK).create_payment_with_split(payment_data(), shop_settings)


@pytest.mark.django_db
def test_gateway_rejection(business, shop_settings, monkeypatch):
    monkeypatch.setattr(FakeSDK, 'result', {'status': 400, 'response': {'message': 'invalid token'}})

    with pytest.raises(PaymentGatewayError, match='invalid token'):
        MercadoPagoGateway(sdk_factory=FakeSDK).create_payment_with_split(payment_data(), shop_settings)
    assert Payment.objects.count() == 0


@pytest.mark.django_db
def test_update_status_and_platform_stats(business):
    make_payment(business, 'p1', 'pending')
    make_payment(business, 'p2', 'rejected')
    make_payment(business, 'p3', 'pending', amount='50.00')

    payment = update_payment_status('p1', 'approved', payment_id=987)

    assert payment.payment_id == '987'
    assert get_platform_stats() == {
        'total_revenue': 100.0,
        'total_fees': 5.0,
        'successful_payments': 1,
        'pending_payments': 1,
        'failed_payments': 1,
    }


@pytest.mark.django_db
def test_refresh_payment_status_endpoint(owner_client, business, settings, monkeypatch):
    settings.PEDINU = {**settings.PEDINU, 'PLATFORM_ACCESS_TOKEN': 'platform-token'}
    monkeypatch.setattr('payments.gateway.mercadopago.SDK', FakeSDK)
    monkeypatch.setattr(FakeSDK, 'result', {'status': 200, 'response': {'id': 555, 'status': 'approved'}})
    make_payment(business, 'pref-9', 'pending')

    response = owner_client.post('/payments/pref-9/refresh/', {'payment_id': '555'}, format='json')

    assert response.status_code == 200
    assert response.json()['status'] == 'approved'
    assert FakeSDK.last.access_token == 'platform-token'


@pytest.mark.django_db
def test_payment_list_is_per_business(owner_client, business, other_business):
    make_payment(business, 'mine', 'pending')
    make_payment(other_business, 'theirs', 'pending')

    response = owner_client.get('/payments/')

    assert [p['preference_id'] for p in response.json()] == ['mine']


@pytest.mark.django_db
def test_owner_requests_withdrawal(owner_client, business):
    response = owner_client.post(
        '/payments/withdrawals/', {'amount': '100.00', 'bank_info': {'pix_key': 'maria@pix'}}, format='json'
    )

    assert response.status_code == 201
    withdrawal = Withdrawal.objects.get(business=business)
    assert withdrawal.status == 'pending'
    assert withdrawal.bank_info == {'pix_key': 'maria@pix'}


@pytest.mark.django_db
def test_withdrawal_needs_bank_details(owner_client, business):
    response = owner_client.post('/payments/withdrawals/', {'amount': '100.00', 'bank_info': {}}, format='json')

    assert response.status_code == 400


@pytest.mark.django_db
def test_admin_rejects_with_default_reason(admin_client, business):
    withdrawal = Withdrawal.objects.create(business=business, amount=Decimal('50.00'), bank_info={'pix_key': 'x'})

    response = admin_client.post(f'/payments/admin/withdrawals/{withdrawal.id}/reject/', {}, format='json')

    assert response.status_code == 200
    withdrawal.refresh_from_db()
    assert withdrawal.status == 'rejected'
    assert withdrawal.reason == 'Não especificado'
    assert withdrawal.processed_at is not None


@pytest.mark.django_db
def test_only_pending_withdrawals_change(admin_client, business):
    withdrawal = Withdrawal.objects.create(
        business=business, amount=Decimal('50.00'), bank_info={'pix_key': 'x'}, status='rejected'
    )

    response = admin_client.post(f'/payments/admin/withdrawals/{withdrawal.id}/approve/', {}, format='json')

    assert response.status_code == 400
    withdrawal.refresh_from_db()
    assert withdrawal.status == 'rejected'


@pytest.mark.django_db
def test_withdrawal_admin_endpoints_need_platform_admin(owner_client, business):
    assert owner_client.get('/payments/admin/withdrawals/').status_code == 403
    assert owner_client.get('/payments/admin/stats/').status_code == 403


@pytest.mark.django_db
def test_platform_stats_endpoint(admin_client, business):
    make_payment(business, 'p1', 'approved')

    data = admin_client.get('/payments/admin/stats/').json()

    assert data['total_revenue'] == 100.0
    assert data['total_businesses'] == 1
    assert data['total_orders'] == 0
