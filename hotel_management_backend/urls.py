from django.contrib import admin
from django.urls import path, include
from hotel_management.views import health_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health', health_check, name='health'),
    path('', include('hotel_management.urls')),
]

handler404 = 'hotel_management.views.not_found'
