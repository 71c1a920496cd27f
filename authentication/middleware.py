# =============== MIDDLEWARE FOR BUSINESS CONTEXT ===============
from .models import Business


class BusinessMiddleware:
    """
    Resolve the business named by the X-Business-Slug header.

    Only platform admins act on a business other than their own; the views
    decide whether request.current_business is honoured.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        slug = request.META.get('HTTP_X_BUSINESS_SLUG')

        if slug:
            try:
                request.current_business = Business.objects.get(slug=slug, is_active=True)
            except Business.DoesNotExist:
                request.current_business = None
        else:
            request.current_business = None

        response = self.get_response(request)
        return response
