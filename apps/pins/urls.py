from django.urls import path
from .views import PinEnsureView, PinLookupView

urlpatterns = [
    path("pins/ensure", PinEnsureView.as_view(), name="pin-ensure"),
    path("pins/lookup", PinLookupView.as_view(), name="pin-lookup"),
]
