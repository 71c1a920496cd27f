from .permissions import get_request_business


class BusinessContextMixin:
    """Mixin to automatically get the user's business and filter queryset"""

    def get_user_business(self):
        return get_request_business(self.request)

    def get_queryset(self):
        """Filter queryset by user's business"""
        if getattr(self, 'swagger_fake_view', False):
            return super().get_queryset().none()
        business = self.get_user_business()
        return super().get_queryset().filter(business=business)

    def perform_create(self, serializer):
        """Add user's business to the created object"""
        business = self.get_user_business()
        serializer.save(business=business)

    def get_serializer_context(self):
        """Add the business to serializer context for per-business validation"""
        context = super().get_serializer_context()
        context['request'] = self.request
        if self.request.user and self.request.user.is_authenticated:
            context['business'] = self.get_user_business()
        return context
