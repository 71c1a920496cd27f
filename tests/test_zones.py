from decimal import Decimal
from types import SimpleNamespace

from orders.zones import resolve_delivery_fee, match_zone

ZONES = [
    SimpleNamespace(neighborhood_name='Centro', fee=Decimal('5.00')),
    SimpleNamespace(neighborhood_name='Norte', fee=Decimal('8.00')),
]


def test_fee_of_matching_zone():
    zone, fee = resolve_delivery_fee(ZONES, 'Norte')

    assert zone.neighborhood_name == 'Norte'
    assert fee == Decimal('8.00')


def test_unmatched_neighborhood_has_no_fee():
    assert resolve_delivery_fee(ZONES, 'Sul') == (None, None)


def test_no_zones_means_free_delivery():
    zone, fee = resolve_delivery_fee([], 'Qualquer')

    assert zone is None
    assert fee == Decimal('0.00')


def test_match_is_case_sensitive_by_default():
    assert match_zone(ZONES, 'centro') is None
    assert match_zone(ZONES, 'Centro ') is None


def test_case_insensitive_match_when_configured(settings):
    settings.PEDINU = {**settings.PEDINU, 'NEIGHBORHOOD_MATCH_CASE_SENSITIVE': False}

    zone, fee = resolve_delivery_fee(ZONES, 'CENTRO')

    assert zone.neighborhood_name == 'Centro'
    assert fee == Decimal('5.00')


def test_empty_neighborhood_never_matches():
    assert match_zone(ZONES, '') is None
