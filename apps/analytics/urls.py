# apps/analytics/urls.py
from django.urls import path

from .views import AdminStatsView, SellerAnalyticsView

urlpatterns = [
    path("seller/", SellerAnalyticsView.as_view(), name="analytics-seller"),
    path("admin/", AdminStatsView.as_view(), name="analytics-admin-stats"),
]
