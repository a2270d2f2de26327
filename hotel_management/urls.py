from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from rest_framework.routers import DefaultRouter

from hotel_management.views import BookingViewSet, PaymentViewSet, RoomViewSet

HANDLERS = {
    'rooms': (RoomViewSet, 'room'),
    'bookings': (BookingViewSet, 'booking'),
    'payments': (PaymentViewSet, 'payment'),
}


def build_router(services):
    """Route only the handlers this deployment serves."""
    router = DefaultRouter(trailing_slash=False)
    # A trailing ".xxx" belongs to the id, never a format suffix
    router.include_format_suffixes = False
    for prefix in services:
        if prefix not in HANDLERS:
            raise ImproperlyConfigured(f"Unknown service in ENABLED_SERVICES: {prefix}")
        viewset, basename = HANDLERS[prefix]
        router.register(prefix, viewset, basename=basename)
    return router


urlpatterns = build_router(settings.ENABLED_SERVICES).urls
