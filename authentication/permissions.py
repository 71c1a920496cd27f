from rest_framework import permissions
from rest_framework.exceptions import PermissionDenied

from .models import Business


def get_request_business(request):
    """
    Business the authenticated user is acting for.

    Owners always act for their own business. Platform admins may pick a
    tenant with the X-Business-Slug header (see BusinessMiddleware).
    """
    if hasattr(request, 'user_business'):
        return request.user_business

    user = request.user
    business = None
    if user.is_super_admin:
        business = getattr(request, 'current_business', None)
    if business is None:
        try:
            business = Business.objects.get(owner=user, is_active=True)
        except Business.DoesNotExist:
            raise PermissionDenied("You are not associated with any active business.")

    request.user_business = business
    return business


class IsBusinessOwner(permissions.BasePermission):
    """
    Permission to only allow owners of an active business (or platform admins
    acting on a business through the X-Business-Slug header)
    """
    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        if request.user.is_super_admin and getattr(request, 'current_business', None):
            return True

        return Business.objects.filter(owner=request.user, is_active=True).exists()

    def has_object_permission(self, request, view, obj):
        business_id = getattr(obj, 'business_id', None)
        if business_id is None:
            return True
        return business_id == get_request_business(request).id


class IsPlatformAdmin(permissions.BasePermission):
    """
    Permission to only allow platform administrators
    """
    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated and
            request.user.is_super_admin
        )
