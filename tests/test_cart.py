import itertools
from decimal import Decimal
from types import SimpleNamespace

from django.contrib.sessions.backends.signed_cookies import SessionStore

from orders.cart import Cart, SessionCart


def make_product(pk, price, promotional_price=None, name=None):
    return SimpleNamespace(id=pk, name=name or f'Product {pk}', price=Decimal(price),
                           promotional_price=None if promotional_price is None else Decimal(promotional_price))


def test_adding_same_product_increments_quantity():
    cart = Cart()
    product = make_product(1, '10.00')

    cart.add(product)
    cart.add(product)

    assert len(cart.lines) == 1
    assert cart.item_count == 2
    assert cart.total == Decimal('20.00')


def test_promotional_price_is_used_when_set():
    cart = Cart()
    cart.add(make_product(1, '10.00', promotional_price='7.50'))
    cart.add(make_product(2, '3.00'))

    assert cart.total == Decimal('10.50')


def test_zero_promotional_price_still_counts_as_promotion():
    cart = Cart()
    cart.add(make_product(1, '10.00', promotional_price='0.00'))

    assert cart.total == Decimal('0.00')


def test_remove_decrements_then_drops_line():
    cart = Cart()
    product = make_product(1, '10.00')
    cart.add(product)
    cart.add(product)

    cart.remove(1)
    assert cart.item_count == 1

    cart.remove(1)
    assert cart.is_empty
    assert cart.total == Decimal('0.00')

    cart.add(product)
    assert cart.item_count == 1


def test_remove_unknown_product_is_a_no_op():
    cart = Cart()
    cart.add(make_product(1, '10.00'))

    assert cart.remove(99) is None
    assert cart.item_count == 1


def test_session_cart_is_kept_per_business():
    session = SessionStore()
    first = SessionCart(session, 'pizzaria')
    first.cart.add(make_product(1, '10.00'))
    first.save()

    assert SessionCart(session, 'pizzaria').cart.item_count == 1
    assert SessionCart(session, 'lanchonete').cart.is_empty


def test_session_cart_clear():
    session = SessionStore()
    session_cart = SessionCart(session, 'pizzaria')
    session_cart.cart.add(make_product(1, '10.00'))
    session_cart.save()

    session_cart.clear()

    assert SessionCart(session, 'pizzaria').cart.is_empty


def test_summary_serializes_money_as_strings():
    cart = Cart()
    cart.add(make_product(1, '10.00', name='X'))
    cart.add(make_product(1, '10.00', name='X'))

    summary = cart.summary()

    assert summary['item_count'] == 2
    assert summary['total'] == '20.00'
    assert summary['items'][0]['line_total'] == '20.00'


def test_interleaving_operations_on_distinct_products_gives_same_cart():
    products = {
        1: make_product(1, '10.00'),
        2: make_product(2, '4.50', promotional_price='3.00'),
        3: make_product(3, '7.25'),
    }
    operations = [('add', 1), ('add', 1), ('add', 2), ('remove', 2), ('add', 2), ('remove', 3), ('add', 3)]

    def keeps_per_product_order(ordering):
        for product_id in products:
            positions = [index for index in ordering if operations[index][1] == product_id]
            if positions != sorted(positions):
                return False
        return True

    outcomes = set()
    for ordering in itertools.permutations(range(len(operations))):
        if not keeps_per_product_order(ordering):
            continue
        cart = Cart()
        for index in ordering:
            action, product_id = operations[index]
            if action == 'add':
                cart.add(products[product_id])
            else:
                cart.remove(product_id)
            assert cart.item_count == sum(line.quantity for line in cart.lines)
            assert cart.item_count >= 0
        outcomes.add((cart.item_count, cart.total))

    assert outcomes == {(4, Decimal('30.25'))}


def test_removing_more_than_added_never_goes_negative():
    cart = Cart()
    product = make_product(1, '10.00')

    for action in ['remove', 'add', 'remove', 'remove', 'add', 'add', 'remove']:
        if action == 'add':
            cart.add(product)
        else:
            cart.remove(product.id)
        assert cart.item_count == sum(line.quantity for line in cart.lines)
        assert cart.item_count >= 0

    assert cart.item_count == 1
    assert cart.total == Decimal('10.00')
