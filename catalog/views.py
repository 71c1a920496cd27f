from rest_framework import generics, status, filters
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from django.db import transaction
from django.db.models import Max
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from authentication.mixins import BusinessContextMixin
from authentication.models import Business
from authentication.permissions import IsBusinessOwner, get_request_business
from .models import BusinessSettings, Category, Product, DeliveryZone
from .serializers import (
    BusinessSettingsSerializer, CategorySerializer, ProductSerializer,
    DeliveryZoneSerializer, ReorderSerializer, ImageUploadSerializer
)
from .services import load_public_catalog, record_menu_view, filter_zones
from .storage import store_image


# =============== BUSINESS SETTINGS ===============

class BusinessSettingsView(generics.RetrieveUpdateAPIView):
    """
    get: Settings of the user's business (created with defaults if missing)
    put/patch: Update settings
    """
    serializer_class = BusinessSettingsSerializer
    permission_classes = [IsBusinessOwner]

    def get_object(self):
        return BusinessSettings.load(get_request_business(self.request))


@swagger_auto_schema(method='post', operation_description="Open or close the business for orders")
@api_view(['POST'])
@permission_classes([IsBusinessOwner])
def toggle_open(request):
    settings = BusinessSettings.load(get_request_business(request))
    settings.is_open = not settings.is_open
    settings.save(update_fields=['is_open', 'updated_at'])
    return Response({'is_open': settings.is_open})


# =============== CATEGORIES ===============

class CategoryListCreateView(BusinessContextMixin, generics.ListCreateAPIView):
    """
    get: List categories in display order
    post: Create a category at the end of the list
    """
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    permission_classes = [IsBusinessOwner]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering = ['order_index', 'created_at']

    def perform_create(self, serializer):
        business = self.get_user_business()
        max_index = Category.objects.filter(business=business).aggregate(m=Max('order_index'))['m']
        serializer.save(business=business, order_index=0 if max_index is None else max_index + 1)


class CategoryDetailView(BusinessContextMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    get: Category details
    put/patch: Rename category
    delete: Delete category; its products stay, without a category
    """
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    permission_classes = [IsBusinessOwner]

    @transaction.atomic
    def perform_destroy(self, instance):
        instance.products.update(category=None)
        instance.delete()


def _apply_order(queryset, ids):
    """Set order_index to each id's position. Every id must belong to queryset."""
    items = {item.id: item for item in queryset.filter(id__in=ids)}
    missing = [pk for pk in ids if pk not in items]
    if missing:
        return missing

    with transaction.atomic():
        for position, pk in enumerate(ids):
            item = items[pk]
            if item.order_index != position:
                item.order_index = position
                item.save(update_fields=['order_index', 'updated_at'])
    return []


@swagger_auto_schema(method='post', request_body=ReorderSerializer)
@api_view(['POST'])
@permission_classes([IsBusinessOwner])
def reorder_categories(request):
    business = get_request_business(request)
    serializer = ReorderSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    missing = _apply_order(Category.objects.filter(business=business), serializer.validated_data['ids'])
    if missing:
        return Response(
            {"detail": f"Categories not found: {missing}"},
            status=status.HTTP_400_BAD_REQUEST
        )

    categories = Category.objects.filter(business=business).order_by('order_index')
    return Response(CategorySerializer(categories, many=True).data)


# =============== PRODUCTS ===============

class ProductListCreateView(BusinessContextMixin, generics.ListCreateAPIView):
    """
    get: List products ordered by category and position
    post: Create a product at the end of its category
    """
    queryset = Product.objects.select_related('category')
    serializer_class = ProductSerializer
    permission_classes = [IsBusinessOwner]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['category', 'available']
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'price', 'created_at']
    ordering = ['category__order_index', 'order_index']

    def perform_create(self, serializer):
        business = self.get_user_business()
        category = serializer.validated_data.get('category')
        position = Product.objects.filter(business=business, category=category).count()
        serializer.save(business=business, order_index=position)


class ProductDetailView(BusinessContextMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    get: Product details
    put/patch: Update product
    delete: Delete product
    """
    queryset = Product.objects.select_related('category')
    serializer_class = ProductSerializer
    permission_classes = [IsBusinessOwner]


@swagger_auto_schema(method='post', request_body=ReorderSerializer)
@api_view(['POST'])
@permission_classes([IsBusinessOwner])
def reorder_products(request, category_id):
    business = get_request_business(request)
    category = get_object_or_404(Category, id=category_id, business=business)
    serializer = ReorderSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    missing = _apply_order(category.products.all(), serializer.validated_data['ids'])
    if missing:
        return Response(
            {"detail": f"Products not found in this category: {missing}"},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response(ProductSerializer(category.products.order_by('order_index'), many=True).data)


# =============== DELIVERY ZONES ===============

class DeliveryZoneListCreateView(BusinessContextMixin, generics.ListCreateAPIView):
    queryset = DeliveryZone.objects.all()
    serializer_class = DeliveryZoneSerializer
    permission_classes = [IsBusinessOwner]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['neighborhood_name']
    ordering_fields = ['neighborhood_name', 'fee']
    ordering = ['neighborhood_name']


class DeliveryZoneDetailView(BusinessContextMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = DeliveryZone.objects.all()
    serializer_class = DeliveryZoneSerializer
    permission_classes = [IsBusinessOwner]


# =============== IMAGES ===============

@swagger_auto_schema(
    method='post',
    operation_description="Upload a product, logo or banner image (max 2MB)",
    manual_parameters=[
        openapi.Parameter('file', openapi.IN_FORM, type=openapi.TYPE_FILE, required=True),
        openapi.Parameter('purpose', openapi.IN_FORM, type=openapi.TYPE_STRING, enum=['products', 'logo', 'banner']),
    ],
    responses={201: openapi.Response(description="Public URL of the image")}
)
@api_view(['POST'])
@permission_classes([IsBusinessOwner])
@parser_classes([MultiPartParser, FormParser])
def upload_image(request):
    serializer = ImageUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    url = store_image(
        serializer.validated_data['file'],
        owner_id=request.user.id,
        purpose=serializer.validated_data['purpose'],
        request=request,
    )
    return Response({'url': url}, status=status.HTTP_201_CREATED)


# =============== PUBLIC CATALOG ===============

@swagger_auto_schema(
    method='get',
    operation_description="Public menu of a business: settings, categories, products and delivery zones",
    manual_parameters=[
        openapi.Parameter('search', openapi.IN_QUERY, description="Filter products by name or description", type=openapi.TYPE_STRING),
    ]
)
@api_view(['GET'])
@permission_classes([AllowAny])
def public_catalog(request, slug):
    business = get_object_or_404(Business, slug=slug, is_active=True)
    payload = load_public_catalog(business, search=request.GET.get('search', '').strip())
    record_menu_view(business)
    return Response(payload)


@swagger_auto_schema(
    method='get',
    operation_description="Delivery zones of a business, filtered by neighborhood",
    manual_parameters=[
        openapi.Parameter('search', openapi.IN_QUERY, type=openapi.TYPE_STRING),
    ]
)
@api_view(['GET'])
@permission_classes([AllowAny])
def public_delivery_zones(request, slug):
    business = get_object_or_404(Business, slug=slug, is_active=True)
    zones = filter_zones(
        DeliveryZone.objects.filter(business=business).order_by('neighborhood_name'),
        request.GET.get('search', '')
    )
    return Response(DeliveryZoneSerializer(zones, many=True).data)
