"""Moon Cargo root URL configuration."""

from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),

    # OpenAPI / Interactive Docs
    path("api/schema", SpectacularAPIView.as_view(),                      name="schema"),
    path("api/docs",   SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),

    # Delivery PINs
    path("api/", include("apps.pins.urls")),

    # Core ledger
    path("api/", include("apps.shipments.urls")),
    path("api/", include("apps.payments.urls")),

    # Reporting / site content
    path("api/", include("apps.analytics.urls")),
    path("api/", include("apps.content.urls")),

    # Ops
    path("", include("apps.ops.urls")),

    # Prometheus metrics
    path("", include("django_prometheus.urls")),
]
