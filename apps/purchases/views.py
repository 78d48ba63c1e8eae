from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import CanEditOrReadOnly

from .serializers import (
    AttachmentInputSerializer,
    AttachmentSerializer,
    DocumentFilterSerializer,
    DocumentInputSerializer,
    ExtractedInvoiceSerializer,
    ExtractInvoiceInputSerializer,
    PurchaseFilterSerializer,
    PurchaseInputSerializer,
    PurchaseListSerializer,
    PurchaseSerializer,
)
from .services import (
    create_purchase,
    update_purchase,
    delete_purchase,
    get_purchase,
    list_purchases,
    add_attachment,
    add_document,
    get_attachment,
    update_attachment,
    delete_attachment,
    list_documents,
    extract_invoice,
    validate_extracted_invoice,
)


# Response serializers for API documentation
class ExtractInvoiceResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    data = ExtractedInvoiceSerializer()


class PurchasePagination(PageNumberPagination):
    """Custom pagination for purchases."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PurchaseViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Purchase CRUD operations.

    list: Live purchases, filterable by supplier/home/area/room/status/dates
    create: Create a purchase with its line items
    retrieve: A purchase with line items and attachments
    update: Replace fields and the whole line item set
    destroy: Soft delete
    """

    serializer_class = PurchaseSerializer
    permission_classes = [CanEditOrReadOnly]
    pagination_class = PurchasePagination
    http_method_names = ['get', 'post', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        """Filter purchases using input serializer validation."""
        filter_serializer = PurchaseFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_purchases(
            supplier_id=params.get('supplier'),
            home_id=params.get('home'),
            area_id=params.get('area'),
            room_id=params.get('room'),
            payment_status=params.get('payment_status'),
            category=params.get('category'),
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
        )

    def get_serializer_class(self):
        if self.action == 'list':
            return PurchaseListSerializer
        return PurchaseSerializer

    def retrieve(self, request, *args, **kwargs):
        purchase = get_purchase(purchase_id=self.kwargs['pk'])
        return Response(PurchaseSerializer(purchase).data)

    @extend_schema(request=PurchaseInputSerializer, responses={201: PurchaseSerializer})
    def create(self, request, *args, **kwargs):
        purchase = create_purchase(data=request.data, created_by=request.user)
        purchase = get_purchase(purchase_id=purchase.id)
        return Response(PurchaseSerializer(purchase).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=PurchaseInputSerializer, responses={200: PurchaseSerializer})
    def update(self, request, *args, **kwargs):
        purchase = update_purchase(
            purchase_id=self.kwargs['pk'],
            data=request.data,
            updated_by=request.user,
        )
        purchase = get_purchase(purchase_id=purchase.id)
        return Response(PurchaseSerializer(purchase).data)

    def destroy(self, request, *args, **kwargs):
        delete_purchase(purchase_id=self.kwargs['pk'], deleted_by=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=AttachmentInputSerializer, responses={200: AttachmentSerializer(many=True)})
    @action(detail=True, methods=['get', 'post'])
    def attachments(self, request, pk=None):
        """List or add attachments of a purchase."""
        purchase = get_purchase(purchase_id=pk)

        if request.method == 'GET':
            return Response(AttachmentSerializer(purchase.attachments.all(), many=True).data)

        data = {**request.data, 'purchase': str(purchase.id)}
        attachment = add_attachment(data=data)
        return Response(AttachmentSerializer(attachment).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ExtractInvoiceInputSerializer, responses={200: ExtractInvoiceResponseSerializer})
    @action(detail=False, methods=['post'], url_path='extract-invoice')
    def extract(self, request):
        """
        Read an invoice image with the vision model.

        Nothing is saved: the response carries the raw suggestion, the
        fields that passed validation, the errors to fix and matching
        suppliers.
        """
        serializer = ExtractInvoiceInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = extract_invoice(**serializer.validated_data)
        cleaned, errors, suggestions = validate_extracted_invoice(data)

        return Response({
            'success': True,
            'data': {
                'data': data,
                'cleaned': cleaned,
                'errors': errors,
                'supplier_suggestions': suggestions,
            },
        })


class AttachmentViewSet(viewsets.GenericViewSet):
    """Edit or remove a single attachment's metadata."""

    serializer_class = AttachmentSerializer
    permission_classes = [CanEditOrReadOnly]

    def retrieve(self, request, pk=None):
        return Response(AttachmentSerializer(get_attachment(attachment_id=pk)).data)

    @extend_schema(request=AttachmentInputSerializer, responses={200: AttachmentSerializer})
    def partial_update(self, request, pk=None):
        attachment = update_attachment(attachment_id=pk, data=request.data)
        return Response(AttachmentSerializer(attachment).data)

    def destroy(self, request, pk=None):
        delete_attachment(attachment_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    parameters=[DocumentFilterSerializer],
    request=DocumentInputSerializer,
    responses={200: AttachmentSerializer(many=True), 201: AttachmentSerializer},
)
@api_view(['GET', 'POST'])
@permission_classes([CanEditOrReadOnly])
def documents(request):
    """
    List house documents or record a new one.

    GET /api/documents/?home=&type=&expiring_within_days=
    POST /api/documents/
    """
    if request.method == 'POST':
        document = add_document(data=request.data)
        return Response(AttachmentSerializer(document).data, status=status.HTTP_201_CREATED)

    filter_serializer = DocumentFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)
    params = filter_serializer.validated_data

    docs = list_documents(
        home_id=params.get('home'),
        document_type=params.get('type'),
        expiring_within_days=params.get('expiring_within_days'),
    )
    return Response(AttachmentSerializer(docs, many=True).data)
