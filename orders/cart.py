"""
Shopping cart of a storefront visitor.

A cart lives in the Django session, one per business slug, and is never
written to the database. Lines keep a snapshot of the product as it was
when added.
"""
from decimal import Decimal

SESSION_KEY = 'carts'


def _to_decimal(value):
    if value is None or value == '':
        return None
    return Decimal(str(value))


class CartLine:
    def __init__(self, product_id, name, price, promotional_price=None, quantity=1):
        self.product_id = product_id
        self.name = name
        self.price = _to_decimal(price)
        self.promotional_price = _to_decimal(promotional_price)
        self.quantity = quantity

    @property
    def unit_price(self):
        if self.promotional_price is not None:
            return self.promotional_price
        return self.price

    @property
    def line_total(self):
        return self.unit_price * self.quantity

    def to_dict(self):
        return {
            'product_id': self.product_id,
            'name': self.name,
            'price': str(self.price),
            'promotional_price': None if self.promotional_price is None else str(self.promotional_price),
            'quantity': self.quantity,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            product_id=data['product_id'],
            name=data['name'],
            price=data['price'],
            promotional_price=data.get('promotional_price'),
            quantity=int(data.get('quantity', 1)),
        )


class Cart:
    def __init__(self, lines=None):
        self.lines = list(lines or [])

    def _find(self, product_id):
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def add(self, product):
        """Add one unit of ``product`` (anything with id, name, price, promotional_price)."""
        line = self._find(product.id)
        if line is not None:
            line.quantity += 1
        else:
            line = CartLine(
                product_id=product.id,
                name=product.name,
                price=product.price,
                promotional_price=product.promotional_price,
                quantity=1,
            )
            self.lines.append(line)
        return line

    def remove(self, product_id):
        """Take one unit away; the line disappears when nothing is left."""
        line = self._find(product_id)
        if line is None:
            return None
        if line.quantity <= 1:
            self.lines.remove(line)
            return None
        line.quantity -= 1
        return line

    def clear(self):
        self.lines = []

    @property
    def total(self):
        return sum((line.line_total for line in self.lines), Decimal('0.00'))

    @property
    def item_count(self):
        return sum(line.quantity for line in self.lines)

    @property
    def is_empty(self):
        return not self.lines

    def to_data(self):
        return [line.to_dict() for line in self.lines]

    @classmethod
    def from_data(cls, data):
        return cls(CartLine.from_dict(item) for item in data or [])

    def summary(self):
        return {
            'items': [
                dict(line.to_dict(), unit_price=str(line.unit_price), line_total=str(line.line_total))
                for line in self.lines
            ],
            'item_count': self.item_count,
            'total': str(self.total),
        }


class SessionCart:
    """Binds a Cart to the visitor's session for one business."""

    def __init__(self, session, business_slug):
        self.session = session
        self.business_slug = business_slug
        carts = session.get(SESSION_KEY, {})
        self.cart = Cart.from_data(carts.get(business_slug))

    def save(self):
        carts = self.session.get(SESSION_KEY, {})
        carts[self.business_slug] = self.cart.to_data()
        self.session[SESSION_KEY] = carts
        self.session.modified = True

    def clear(self):
        self.cart.clear()
        self.save()
