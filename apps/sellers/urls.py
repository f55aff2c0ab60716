from django.urls import path

from .views import (
    AdminSellerListView,
    AdminSellerVerificationView,
    SellerMeView,
    SellerOnboardingView,
    SellerOrderItemListView,
    SellerOrderItemStatusView,
    SellerPayoutListView,
)

urlpatterns = [
    path("onboarding/", SellerOnboardingView.as_view(), name="seller-onboarding"),
    path("me/", SellerMeView.as_view(), name="seller-me"),
    path("order-items/", SellerOrderItemListView.as_view(), name="seller-order-items"),
    path("order-items/<uuid:pk>/status/", SellerOrderItemStatusView.as_view(), name="seller-order-item-status"),
    path("payouts/", SellerPayoutListView.as_view(), name="seller-payouts"),
    path("admin/", AdminSellerListView.as_view(), name="admin-sellers"),
    path("admin/<uuid:pk>/verification/", AdminSellerVerificationView.as_view(), name="admin-seller-verification"),
]
