from django.urls import path
from .views import StatsSummaryView

urlpatterns = [
    path("stats/summary", StatsSummaryView.as_view(), name="stats-summary"),
]
