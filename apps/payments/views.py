from rest_framework import generics
from rest_framework.permissions import IsAuthenticated

from .models import Transaction
from .serializers import TransactionSerializer


class MyTransactionListView(generics.ListAPIView):
    """
    GET /api/v1/payments/transactions/ -> transactions on the buyer's own orders
    """
    permission_classes = [IsAuthenticated]
    serializer_class = TransactionSerializer
    filterset_fields = ["transaction_type", "status"]

    def get_queryset(self):
        return (
            Transaction.objects
            .filter(order__buyer=self.request.user)
            .select_related("order")
            .order_by("-created_at")
        )
