from django.urls import path
from .views import ShipmentPaymentsView

urlpatterns = [
    path("shipments/<int:pk>/payments", ShipmentPaymentsView.as_view(), name="shipment-payments"),
]
