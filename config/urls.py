"""
URL configuration for the renovation tracker.

All API routes live under ``/api/``; there are no server-rendered pages.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from apps.accounts.urls import admin_urlpatterns
from apps.analytics.views import backfill_homes
from config.views import health_check

urlpatterns = [
    # Health check
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Identity and user administration
    path('api/auth/', include('apps.accounts.urls')),
    path('api/admin/', include((admin_urlpatterns, 'accounts_admin'))),
    path('api/admin/backfill-home-ids/', backfill_homes, name='backfill-home-ids'),

    # API endpoints
    path('api/suppliers/', include('apps.suppliers.urls')),
    path('api/analytics/', include('apps.analytics.urls')),
    path('api/', include('apps.homes.urls')),
    path('api/', include('apps.taxonomy.urls')),
    path('api/', include('apps.purchases.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
