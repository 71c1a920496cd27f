"""
WhatsApp order notification: a pre-filled https://wa.me/ link the customer
opens to send the order to the business. There is no API call and no
delivery confirmation.
"""
import re
from decimal import Decimal, ROUND_HALF_UP
from urllib.parse import quote

from django.conf import settings

# Characters encodeURIComponent leaves untouched
URI_COMPONENT_SAFE = "-_.!~*'()"


def only_digits(value):
    return re.sub(r'\D', '', value or '')


def format_brl(value):
    """25 -> '25,00'"""
    amount = Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    return f"{amount:.2f}".replace('.', ',')


def build_order_message(business_name, customer, items, subtotal, delivery_fee, total):
    """
    ``customer`` holds name, phone, neighborhood, address, payment_method
    (display label) and optionally notes. ``items`` are dicts with name,
    quantity and unit price.
    """
    message = f"🛍️ *NOVO PEDIDO - {business_name}*\n\n"
    message += f"👤 *Cliente:* {customer['name']}\n"
    message += f"📱 *Telefone:* {customer['phone']}\n"
    message += f"📍 *Bairro:* {customer['neighborhood']}\n"
    message += f"🏠 *Endereço:* {customer['address']}\n"
    message += f"💳 *Pagamento:* {customer['payment_method']}\n\n"

    message += "📋 *ITENS DO PEDIDO:*\n"
    for item in items:
        message += f"• {item['quantity']}x {item['name']} - R$ {format_brl(item['price'])}\n"

    message += "\n💰 *RESUMO:*\n"
    message += f"Subtotal: R$ {format_brl(subtotal)}\n"
    message += f"Taxa de entrega: R$ {format_brl(delivery_fee)}\n"
    message += f"*Total: R$ {format_brl(total)}*\n"

    if customer.get('notes'):
        message += f"\n📝 *Observações:* {customer['notes']}"

    return message


def build_whatsapp_url(phone_digits, message, country_code=None):
    if country_code is None:
        country_code = settings.PEDINU['WHATSAPP_COUNTRY_CODE']
    return f"https://wa.me/{country_code}{phone_digits}?text={quote(message, safe=URI_COMPONENT_SAFE)}"
