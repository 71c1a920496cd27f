"""
Read side of the catalog: the public menu payload, its search filter and
the view counter.
"""
import logging

from django.db import DatabaseError
from django.db.models import F

from .models import BusinessSettings, Category, Product, DeliveryZone
from .serializers import (
    PublicSettingsSerializer, PublicCategorySerializer, PublicProductSerializer,
    DeliveryZoneSerializer
)

logger = logging.getLogger(__name__)


def product_matches(product, search):
    if not search:
        return True
    needle = search.lower()
    return needle in product.name.lower() or needle in (product.description or '').lower()


def build_sections(categories, products, search=''):
    """
    Group available products under their categories for the storefront.

    Categories with no available product matching ``search`` are dropped and
    the rest keep their order_index order.
    """
    by_category = {}
    for product in sorted(products, key=lambda p: p.order_index):
        if not product.available or not product_matches(product, search):
            continue
        by_category.setdefault(product.category_id, []).append(product)

    sections = []
    for category in sorted(categories, key=lambda c: c.order_index):
        items = by_category.get(category.id)
        if items:
            sections.append({'category': category, 'products': items})
    return sections


def filter_zones(zones, search):
    """Case-insensitive substring filter used by the neighborhood picker"""
    if not search:
        return list(zones)
    needle = search.strip().lower()
    return [zone for zone in zones if needle in zone.neighborhood_name.lower()]


def load_public_catalog(business, search=''):
    """Everything the public storefront needs in one payload"""
    settings = BusinessSettings.load(business)
    categories = list(Category.objects.filter(business=business).order_by('order_index', 'created_at'))
    products = list(Product.objects.filter(business=business).order_by('order_index', 'created_at'))
    zones = list(DeliveryZone.objects.filter(business=business).order_by('neighborhood_name'))

    sections = build_sections(categories, products, search)

    return {
        'business_name': business.name,
        'business_slug': business.slug,
        'settings': PublicSettingsSerializer(settings).data,
        'categories': PublicCategorySerializer(categories, many=True).data,
        'products': PublicProductSerializer(products, many=True).data,
        'delivery_zones': DeliveryZoneSerializer(zones, many=True).data,
        'sections': [
            {
                'category': PublicCategorySerializer(section['category']).data,
                'products': PublicProductSerializer(section['products'], many=True).data,
            }
            for section in sections
        ],
    }


def record_menu_view(business):
    """Best-effort analytics counter; a failure never reaches the customer."""
    try:
        BusinessSettings.objects.filter(business=business).update(view_count=F('view_count') + 1)
    except DatabaseError:
        logger.exception(
            "Could not increment menu view counter",
            extra={'business_id': str(business.id)}
        )
