from rest_framework import viewsets, status
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from apps.accounts.permissions import CanEditOrReadOnly

from .serializers import SupplierSearchSerializer, SupplierSerializer
from .services import (
    create_supplier,
    search_suppliers,
    update_supplier,
    soft_delete_supplier,
)


class SupplierPagination(PageNumberPagination):
    """Custom pagination for suppliers."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class SupplierViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Supplier CRUD operations.

    list: Live suppliers, ?search= matches names and email
    destroy: Soft delete
    """

    serializer_class = SupplierSerializer
    permission_classes = [CanEditOrReadOnly]
    pagination_class = SupplierPagination

    def get_queryset(self):
        params = SupplierSearchSerializer(data=self.request.query_params)
        params.is_valid(raise_exception=True)
        return search_suppliers(search=params.validated_data.get('search'))

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        supplier = create_supplier(**serializer.validated_data)
        return Response(SupplierSerializer(supplier).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        supplier = update_supplier(supplier_id=instance.id, data=serializer.validated_data)
        return Response(SupplierSerializer(supplier).data)

    def destroy(self, request, *args, **kwargs):
        soft_delete_supplier(supplier_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)
