from rest_framework import status, generics, filters
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.exceptions import ValidationError
from django.shortcuts import get_object_or_404
from django.utils.dateparse import parse_date
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from authentication.mixins import BusinessContextMixin
from authentication.models import Business
from authentication.permissions import IsBusinessOwner, get_request_business
from catalog.models import Product
from .board import build_board, update_status, cancel_order
from .cart import SessionCart
from .checkout import CheckoutService
from .customers import customer_statistics
from .models import KitchenOrder, Customer, CustomerOrder
from .reports import orders_excel_response
from .serializers import (
    CartAddSerializer, CartRemoveSerializer, CheckoutSerializer, KitchenOrderSerializer,
    StatusUpdateSerializer, CustomerSerializer, CustomerOrderSerializer
)


def _public_business(slug):
    return get_object_or_404(Business, slug=slug, is_active=True)


def _session_key(request):
    if not request.session.session_key:
        request.session.save()
    return request.session.session_key


# =============== PUBLIC CART ===============

@swagger_auto_schema(method='get', operation_description="Cart of the visitor for this business")
@swagger_auto_schema(method='delete', operation_description="Empty the cart")
@api_view(['GET', 'DELETE'])
@permission_classes([AllowAny])
def cart_detail(request, slug):
    business = _public_business(slug)
    session_cart = SessionCart(request.session, business.slug)
    if request.method == 'DELETE':
        session_cart.clear()
    return Response(session_cart.cart.summary())


@swagger_auto_schema(method='post', request_body=CartAddSerializer)
@api_view(['POST'])
@permission_classes([AllowAny])
def cart_add(request, slug):
    business = _public_business(slug)
    serializer = CartAddSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    product = get_object_or_404(Product, id=serializer.validated_data['product_id'], business=business)
    if not product.available:
        raise ValidationError({'product_id': ["This product is not available."]})

    session_cart = SessionCart(request.session, business.slug)
    session_cart.cart.add(product)
    session_cart.save()
    return Response(session_cart.cart.summary())


@swagger_auto_schema(method='post', request_body=CartRemoveSerializer)
@api_view(['POST'])
@permission_classes([AllowAny])
def cart_remove(request, slug):
    business = _public_business(slug)
    serializer = CartRemoveSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    session_cart = SessionCart(request.session, business.slug)
    session_cart.cart.remove(serializer.validated_data['product_id'])
    session_cart.save()
    return Response(session_cart.cart.summary())


# =============== PUBLIC CHECKOUT ===============

@swagger_auto_schema(
    method='post',
    operation_description=(
        "Check out the cart. Cash orders return a WhatsApp link and clear the cart; "
        "Pix and card orders return the hosted payment URL and keep the cart."
    ),
    request_body=CheckoutSerializer,
    responses={
        200: openapi.Response(description="whatsapp_url or payment_url to open"),
        400: openapi.Response(description="Validation error"),
        409: openapi.Response(description="A checkout is already in progress"),
    }
)
@api_view(['POST'])
@permission_classes([AllowAny])
def checkout(request, slug):
    business = _public_business(slug)
    serializer = CheckoutSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    service = CheckoutService(
        business,
        SessionCart(request.session, business.slug),
        guard_key=f"checkout:{business.slug}:{_session_key(request)}",
    )
    result = service.checkout(serializer.validated_data)
    return Response(result, status=status.HTTP_200_OK)


# =============== KITCHEN ===============

@swagger_auto_schema(
    method='get',
    operation_description="Kitchen board: one column per status plus the cancelled orders",
    manual_parameters=[
        openapi.Parameter('search', openapi.IN_QUERY, description="Order id or customer name", type=openapi.TYPE_STRING),
    ]
)
@api_view(['GET'])
@permission_classes([IsBusinessOwner])
def kitchen_board(request):
    business = get_request_business(request)
    board = build_board(
        KitchenOrder.objects.filter(business=business),
        search=request.GET.get('search', ''),
        serialize=lambda order: KitchenOrderSerializer(order).data,
    )
    return Response(board)


class KitchenOrderListView(BusinessContextMixin, generics.ListAPIView):
    """List kitchen orders of the user's business, newest first"""
    queryset = KitchenOrder.objects.all()
    serializer_class = KitchenOrderSerializer
    permission_classes = [IsBusinessOwner]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'order_type', 'payment_method', 'is_demo']
    search_fields = ['customer_name']
    ordering_fields = ['order_time', 'total']
    ordering = ['-order_time']


class KitchenOrderDetailView(BusinessContextMixin, generics.RetrieveAPIView):
    queryset = KitchenOrder.objects.all()
    serializer_class = KitchenOrderSerializer
    permission_classes = [IsBusinessOwner]


@swagger_auto_schema(method='post', request_body=StatusUpdateSerializer, responses={200: KitchenOrderSerializer})
@api_view(['POST'])
@permission_classes([IsBusinessOwner])
def update_order_status(request, pk):
    business = get_request_business(request)
    order = get_object_or_404(KitchenOrder, pk=pk, business=business)
    serializer = StatusUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    order = update_status(order, serializer.validated_data['status'])
    return Response(KitchenOrderSerializer(order).data)


@swagger_auto_schema(method='post', responses={200: KitchenOrderSerializer})
@api_view(['POST'])
@permission_classes([IsBusinessOwner])
def cancel_kitchen_order(request, pk):
    business = get_request_business(request)
    order = get_object_or_404(KitchenOrder, pk=pk, business=business)
    order = cancel_order(order)
    return Response(KitchenOrderSerializer(order).data)


# =============== CUSTOMERS ===============

class CustomerListView(BusinessContextMixin, generics.ListAPIView):
    """Customers of the user's business, most recent buyers first"""
    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    permission_classes = [IsBusinessOwner]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'phone', 'neighborhood']
    ordering_fields = ['last_order_date', 'total_spent', 'total_orders', 'name']
    ordering = ['-last_order_date']


class CustomerOrderListView(BusinessContextMixin, generics.ListAPIView):
    """Order history of the user's business, optionally for one customer"""
    queryset = CustomerOrder.objects.all()
    serializer_class = CustomerOrderSerializer
    permission_classes = [IsBusinessOwner]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['customer', 'payment_method']
    ordering = ['-order_date']

    def get_queryset(self):
        queryset = super().get_queryset()
        customer_id = self.kwargs.get('customer_id')
        if customer_id is not None:
            queryset = queryset.filter(customer_id=customer_id)
        return queryset


@swagger_auto_schema(
    method='get',
    responses={
        200: openapi.Response(
            description="Customer statistics",
            schema=openapi.Schema(
                type=openapi.TYPE_OBJECT,
                properties={
                    'total_customers': openapi.Schema(type=openapi.TYPE_INTEGER),
                    'total_orders': openapi.Schema(type=openapi.TYPE_INTEGER),
                    'total_revenue': openapi.Schema(type=openapi.TYPE_NUMBER),
                    'average_order_value': openapi.Schema(type=openapi.TYPE_NUMBER),
                }
            )
        )
    }
)
@api_view(['GET'])
@permission_classes([IsBusinessOwner])
def customer_stats(request):
    return Response(customer_statistics(get_request_business(request)))


@swagger_auto_schema(
    method='get',
    operation_description="Download the order history as an Excel sheet",
    manual_parameters=[
        openapi.Parameter('start_date', openapi.IN_QUERY, description="YYYY-MM-DD", type=openapi.TYPE_STRING),
        openapi.Parameter('end_date', openapi.IN_QUERY, description="YYYY-MM-DD", type=openapi.TYPE_STRING),
    ]
)
@api_view(['GET'])
@permission_classes([IsBusinessOwner])
def export_customer_orders(request):
    business = get_request_business(request)
    orders = CustomerOrder.objects.filter(business=business).order_by('order_date')

    dates = {}
    for param in ('start_date', 'end_date'):
        value = request.GET.get(param)
        if value:
            dates[param] = parse_date(value)
            if dates[param] is None:
                raise ValidationError({param: ["Use the YYYY-MM-DD format."]})
    if 'start_date' in dates:
        orders = orders.filter(order_date__date__gte=dates['start_date'])
    if 'end_date' in dates:
        orders = orders.filter(order_date__date__lte=dates['end_date'])

    return orders_excel_response(business, orders, dates.get('start_date'), dates.get('end_date'))
