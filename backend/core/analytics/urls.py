from django.urls import path

from analytics.views import AnalyticsSnapshotAPIView, DatabaseStatusAPIView

urlpatterns = [
    path("analytics/", AnalyticsSnapshotAPIView.as_view(), name="analytics-snapshot"),
    path("database/status/", DatabaseStatusAPIView.as_view(), name="database-status"),
]
