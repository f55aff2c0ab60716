from django.urls import path

from .views import MyTransactionListView

urlpatterns = [
    path('transactions/', MyTransactionListView.as_view(), name='my-transactions'),
]
