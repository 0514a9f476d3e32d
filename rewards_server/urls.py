"""
URL configuration for rewards_server project.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from apps.exchanges.views import ExchangeProductView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/products/<int:product_id>/exchange/', ExchangeProductView.as_view(), name='product-exchange'),
    path('api/exchange/', include('apps.exchanges.urls')),
    path('api/admin/exchanges/', include('apps.exchanges.admin_urls')),
    path('api/points/', include('apps.points.urls')),
    path('api/', include('apps.common.urls')),
    # OpenAPI documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/schema/swagger-ui/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/schema/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]
