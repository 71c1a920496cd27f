"""
Matching of the customer's neighborhood against the delivery zones of a
business.
"""
from decimal import Decimal

from django.conf import settings


def neighborhood_equals(zone_name, neighborhood, case_sensitive=None):
    if case_sensitive is None:
        case_sensitive = settings.PEDINU['NEIGHBORHOOD_MATCH_CASE_SENSITIVE']
    if case_sensitive:
        return zone_name == neighborhood
    return zone_name.casefold() == neighborhood.casefold()


def match_zone(zones, neighborhood, case_sensitive=None):
    """Zone whose name equals ``neighborhood``, or None."""
    if not neighborhood:
        return None
    for zone in zones:
        if neighborhood_equals(zone.neighborhood_name, neighborhood, case_sensitive):
            return zone
    return None


def resolve_delivery_fee(zones, neighborhood, case_sensitive=None):
    """
    Return (zone, fee) for a neighborhood.

    With no zones configured delivery is free and any neighborhood is
    accepted. Otherwise an unmatched neighborhood gives (None, None).
    """
    zones = list(zones)
    if not zones:
        return None, Decimal('0.00')
    zone = match_zone(zones, neighborhood, case_sensitive)
    if zone is None:
        return None, None
    return zone, zone.fee
