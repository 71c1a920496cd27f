from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from orders.board import allowed_transitions, build_board, cancel_order, search_orders, update_status
from orders.exceptions import InvalidStatusTransition
from orders.models import KitchenOrder


def make_order(business, name='Ana', status=KitchenOrder.STATUS_RECEIVED, minutes_ago=0):
    return KitchenOrder.objects.create(
        business=business,
        customer_name=name,
        items=[{'name': 'X', 'quantity': 1, 'price': 10.0}],
        total=Decimal('10.00'),
        status=status,
        order_time=timezone.now() - timedelta(minutes=minutes_ago),
    )


def test_allowed_transitions():
    assert allowed_transitions('received') == ['preparing', 'cancelled']
    assert allowed_transitions('ready') == ['completed', 'cancelled']
    assert allowed_transitions('completed') == []
    assert allowed_transitions('cancelled') == []


@pytest.mark.django_db
def test_order_moves_forward_through_pipeline(business):
    order = make_order(business)

    for status in ('preparing', 'ready', 'completed'):
        order = update_status(order, status)
        assert order.status == status

    order.refresh_from_db()
    assert order.status == 'completed'


@pytest.mark.django_db
def test_skipping_a_step_is_refused(business):
    order = make_order(business)

    with pytest.raises(InvalidStatusTransition):
        update_status(order, 'ready')

    order.refresh_from_db()
    assert order.status == 'received'


@pytest.mark.django_db
def test_final_orders_cannot_change(business):
    completed = make_order(business, status='completed')
    cancelled = make_order(business, status='cancelled')

    with pytest.raises(InvalidStatusTransition):
        cancel_order(completed)
    with pytest.raises(InvalidStatusTransition):
        update_status(cancelled, 'received')


@pytest.mark.django_db
def test_cancel_from_any_open_status(business):
    order = make_order(business, status='ready')

    assert cancel_order(order).status == 'cancelled'


@pytest.mark.django_db
def test_board_groups_orders_newest_first(business):
    older = make_order(business, name='Bruno', minutes_ago=10)
    newer = make_order(business, name='Carla', minutes_ago=1)
    make_order(business, name='Davi', status='preparing')
    make_order(business, name='Eva', status='cancelled')

    board = build_board(KitchenOrder.objects.filter(business=business))

    columns = {column['status']: column for column in board['columns']}
    assert [column['status'] for column in board['columns']] == ['received', 'preparing', 'ready', 'completed']
    assert columns['received']['orders'] == [newer, older]
    assert columns['received']['title'] == 'Em análise'
    assert columns['preparing']['count'] == 1
    assert board['cancelled']['count'] == 1
    assert board['total'] == 4


@pytest.mark.django_db
def test_board_search_by_name_or_id(business):
    ana = make_order(business, name='Ana Paula')
    make_order(business, name='Bruno')

    by_name = build_board(KitchenOrder.objects.all(), search='ana')
    by_id = build_board(KitchenOrder.objects.all(), search=str(ana.id).upper())

    assert by_name['total'] == 1
    assert by_id['columns'][0]['orders'] == [ana]


@pytest.mark.django_db
def test_kitchen_board_endpoint(owner_client, business):
    make_order(business)

    response = owner_client.get('/orders/kitchen/')

    assert response.status_code == 200
    data = response.json()
    assert len(data['columns']) == 4
    received = data['columns'][0]['orders'][0]
    assert received['status_title'] == 'Em análise'
    assert received['next_status'] == 'preparing'
    assert received['can_cancel'] is True


@pytest.mark.django_db
def test_status_endpoint_rejects_invalid_transition(owner_client, business):
    order = make_order(business)

    response = owner_client.post(f'/orders/kitchen/orders/{order.id}/status/', {'status': 'completed'}, format='json')

    assert response.status_code == 400
    assert "Cannot change order" in response.json()['message']


@pytest.mark.django_db
def test_status_and_cancel_endpoints(owner_client, business):
    order = make_order(business)

    response = owner_client.post(f'/orders/kitchen/orders/{order.id}/status/', {'status': 'preparing'}, format='json')
    assert response.status_code == 200
    assert response.json()['status'] == 'preparing'

    response = owner_client.post(f'/orders/kitchen/orders/{order.id}/cancel/')
    assert response.status_code == 200
    assert response.json()['status'] == 'cancelled'


@pytest.mark.django_db
def test_orders_of_other_businesses_are_hidden(owner_client, other_business):
    foreign = make_order(other_business)

    assert owner_client.get(f'/orders/kitchen/orders/{foreign.id}/').status_code == 404
    assert owner_client.post(f'/orders/kitchen/orders/{foreign.id}/cancel/').status_code == 404
    assert owner_client.get('/orders/kitchen/orders/').json() == []


@pytest.mark.django_db
def test_board_search_and_ordering_run_in_one_query(business, django_assert_num_queries):
    make_order(business, name='Ana Paula', minutes_ago=5)
    make_order(business, name='Bruno', minutes_ago=1)
    newest_ana = make_order(business, name='ANA', status='preparing')

    matches = search_orders(KitchenOrder.objects.filter(business=business), 'ana')
    assert matches.filter(customer_name='Bruno').count() == 0

    with django_assert_num_queries(1):
        board = build_board(KitchenOrder.objects.filter(business=business), search='ana')

    assert board['total'] == 2
    assert board['columns'][1]['orders'] == [newest_ana]


@pytest.mark.django_db
def test_board_search_by_full_id_in_the_database(business):
    target = make_order(business, name='Carla')
    make_order(business, name='Davi')

    matches = search_orders(KitchenOrder.objects.all(), f' {target.id} ')

    assert list(matches) == [target]
