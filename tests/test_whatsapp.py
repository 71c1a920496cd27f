from orders.whatsapp import build_order_message, build_whatsapp_url, format_brl, only_digits

CUSTOMER = {
    'name': 'Ana',
    'phone': '11999990000',
    'neighborhood': 'Centro',
    'address': 'Rua A, 10',
    'payment_method': 'Dinheiro',
}


def test_format_brl_uses_comma_and_two_decimals():
    assert format_brl(25) == '25,00'
    assert format_brl('7.5') == '7,50'


def test_only_digits():
    assert only_digits('(11) 98888-7777') == '11988887777'
    assert only_digits(None) == ''


def test_message_lists_items_and_totals():
    items = [{'name': 'X', 'quantity': 2, 'price': 10.0}]

    message = build_order_message('Pizzaria', CUSTOMER, items, 20, 5, 25)

    assert message.startswith('🛍️ *NOVO PEDIDO - Pizzaria*\n\n')
    assert '👤 *Cliente:* Ana\n' in message
    assert '• 2x X - R$ 10,00\n' in message
    assert 'Subtotal: R$ 20,00\n' in message
    assert 'Taxa de entrega: R$ 5,00\n' in message
    assert '*Total: R$ 25,00*' in message
    assert 'Observações' not in message


def test_message_includes_notes_when_present():
    customer = dict(CUSTOMER, notes='Sem cebola')

    message = build_order_message('Pizzaria', customer, [], 0, 0, 0)

    assert message.endswith('📝 *Observações:* Sem cebola')


def test_whatsapp_url_encodes_message_like_uri_components():
    url = build_whatsapp_url('11988887777', "*Total* (1x) it's\nok")

    assert url == "https://wa.me/5511988887777?text=*Total*%20(1x)%20it's%0Aok"


def test_whatsapp_url_encodes_non_ascii_as_utf8():
    url = build_whatsapp_url('1', 'ç', country_code='55')

    assert url.endswith('?text=%C3%A7')
