from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import CartViewSet, CheckoutViewSet, DisputeViewSet, OrderViewSet

# SimpleRouter: the buyer's orders sit at the app root, so no API root view
router = SimpleRouter()
router.register(r'cart', CartViewSet, basename='cart')
router.register(r'checkout', CheckoutViewSet, basename='checkout')
router.register(r'disputes', DisputeViewSet, basename='disputes')
router.register(r'', OrderViewSet, basename='orders')

urlpatterns = [
    path('', include(router.urls)),
]
