from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import AddressSerializer
from .services import CustomerService


class AddressViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    GET/POST/DELETE /api/v1/customers/addresses/
    """
    serializer_class = AddressSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        return CustomerService.list_addresses(self.request.user)

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        address = CustomerService.create_address(request.user, **serializer.validated_data)
        return Response(self.get_serializer(address).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        CustomerService.delete_address(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="set-default")
    def set_default(self, request, pk=None):
        """
        POST /api/v1/customers/addresses/{id}/set-default/
        """
        address = CustomerService.set_default_address(request.user, pk)
        return Response(self.get_serializer(address).data)
