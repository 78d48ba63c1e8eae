import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsActiveAppUser, IsAdminRole
from .analytics import AnalyticsQueries
from .services import backfill_home_ids
from .serializers import (
    # Input serializers
    HomeScopeQuerySerializer,
    ReportQuerySerializer,
    ExpiringDocumentsQuerySerializer,
    # Response serializers
    DashboardResponseSerializer,
    ReportResponseSerializer,
    AreaBreakdownSerializer,
    WarrantiesResponseSerializer,
    ExpiringDocumentsResponseSerializer,
    BackfillResultSerializer,
    ErrorSerializer,
)

logger = logging.getLogger(__name__)

HOME_PARAMETER = OpenApiParameter('home', OpenApiTypes.UUID, description='Restrict to one home')


@extend_schema(
    parameters=[HOME_PARAMETER],
    responses={200: DashboardResponseSerializer, 400: ErrorSerializer},
    description='Headline spend, pending payments and upcoming due dates.',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsActiveAppUser])
def dashboard(request):
    """Get dashboard summary - thin HTTP handler."""
    query_serializer = HomeScopeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    return Response(AnalyticsQueries.dashboard(
        home_id=query_serializer.validated_data.get('home')
    ))


@extend_schema(
    parameters=[
        HOME_PARAMETER,
        OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM)'),
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
    ],
    responses={200: ReportResponseSerializer, 400: ErrorSerializer},
    description='Spend by area, supplier, type, category and month for a date range.',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsActiveAppUser])
def report(request):
    """Get spending report - thin HTTP handler."""
    query_serializer = ReportQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    return Response(AnalyticsQueries.report(
        home_id=params.get('home'),
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
    ))


@extend_schema(
    responses={200: AreaBreakdownSerializer, 404: ErrorSerializer},
    description='Spend of one area split by room and category, against its budget.',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsActiveAppUser])
def area_breakdown(request, area_id):
    """Get one area's spend breakdown - thin HTTP handler."""
    return Response(AnalyticsQueries.area_breakdown(area_id))


@extend_schema(
    parameters=[HOME_PARAMETER],
    responses={200: WarrantiesResponseSerializer, 400: ErrorSerializer},
    description='Warranty status of every line item, plus those running out soon.',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsActiveAppUser])
def warranties(request):
    """Get warranty overview - thin HTTP handler."""
    query_serializer = HomeScopeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    return Response(AnalyticsQueries.warranties(
        home_id=query_serializer.validated_data.get('home')
    ))


@extend_schema(
    parameters=[
        OpenApiParameter('days', OpenApiTypes.INT, description='Look-ahead window in days'),
    ],
    responses={200: ExpiringDocumentsResponseSerializer, 400: ErrorSerializer},
    description='House documents whose expiry date falls within the window.',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsActiveAppUser])
def expiring_documents(request):
    """Get expiring house documents - thin HTTP handler."""
    query_serializer = ExpiringDocumentsQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    return Response(AnalyticsQueries.expiring_documents(
        window_days=query_serializer.validated_data.get('days')
    ))


@extend_schema(
    request=None,
    responses={200: BackfillResultSerializer, 403: ErrorSerializer},
    description='Infer and store the home of every purchase that has none.',
    tags=['admin'],
)
@api_view(['POST'])
@permission_classes([IsAdminRole])
def backfill_homes(request):
    """Run the home-id backfill - admin only."""
    logger.info('Home backfill requested by %s', request.user.email)
    return Response(backfill_home_ids())
