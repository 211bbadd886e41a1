from django.urls import path
from .views import ShipmentListCreateView, ShipmentDetailView, ShipmentStatusView

urlpatterns = [
    path("shipments",                  ShipmentListCreateView.as_view(), name="shipment-list"),
    path("shipments/<int:pk>",         ShipmentDetailView.as_view(),     name="shipment-detail"),
    path("shipments/<int:pk>/status",  ShipmentStatusView.as_view(),     name="shipment-status"),
]
