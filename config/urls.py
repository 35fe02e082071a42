"""
URL configuration for the financial-planning onboarding backend.
"""

from django.contrib import admin
from django.urls import include, path

from apps.core.views import health_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health_check, name='health-check'),
    path('api/', include('apps.clients.urls')),
    path('api/', include('apps.core.urls')),
]
