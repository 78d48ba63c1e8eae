"""
Analytics Serializers
=====================

Input serializers validate query parameters; response serializers document
the shapes returned by ``AnalyticsQueries`` for the OpenAPI schema.

Input Serializers:
    - HomeScopeQuerySerializer: Optional home selection
    - ReportQuerySerializer: Home plus date range or YYYY-MM period
    - ExpiringDocumentsQuerySerializer: Expiry window in days

Response Serializers (for API documentation):
    - DashboardResponseSerializer
    - ReportResponseSerializer
    - AreaBreakdownSerializer
    - WarrantiesResponseSerializer
    - ExpiringDocumentsResponseSerializer
    - BackfillResultSerializer
    - ErrorSerializer
"""

import calendar
from datetime import date

from rest_framework import serializers


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class HomeScopeQuerySerializer(serializers.Serializer):
    """
    Validate the optional home selection.

    Used by: dashboard, warranties
    """

    home = serializers.UUIDField(required=False, help_text='Restrict to one home')


class ReportQuerySerializer(HomeScopeQuerySerializer):
    """
    Validate query parameters for the report endpoint.

    Query Parameters:
        home (UUID): Home to report on
        start_date (date): Start of date range
        end_date (date): End of date range
        period (str): Month in YYYY-MM format (overrides start/end dates)
    """

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    period = serializers.CharField(
        required=False,
        help_text='Month in YYYY-MM format (overrides start_date/end_date)'
    )

    def validate(self, attrs):
        period = attrs.pop('period', None)

        if period:
            try:
                year, month = (int(part) for part in period.split('-'))
                attrs['start_date'] = date(year, month, 1)
                attrs['end_date'] = date(year, month, calendar.monthrange(year, month)[1])
            except ValueError:
                raise serializers.ValidationError({
                    'period': 'Invalid period format. Use YYYY-MM'
                })

        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date'
            })

        return attrs


class ExpiringDocumentsQuerySerializer(serializers.Serializer):
    """Validate the look-ahead window for expiring documents."""

    days = serializers.IntegerField(
        min_value=0,
        max_value=3650,
        required=False,
        help_text='Window in days (defaults to EXPIRING_DOCUMENTS_WINDOW_DAYS)'
    )


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class GroupTotalSerializer(serializers.Serializer):
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    purchase_count = serializers.IntegerField()


class PendingPaymentsSerializer(serializers.Serializer):
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    count = serializers.IntegerField()


class PurchaseSummarySerializer(serializers.Serializer):
    """Nested serializer for a purchase on the dashboard."""
    id = serializers.CharField()
    date = serializers.DateField()
    supplier_name = serializers.CharField()
    purchase_type = serializers.CharField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    payment_status = serializers.CharField()
    payment_due_date = serializers.DateField(allow_null=True)


class DashboardResponseSerializer(serializers.Serializer):
    """Response serializer for the dashboard summary."""
    total_spent = serializers.DecimalField(max_digits=14, decimal_places=2)
    purchase_count = serializers.IntegerField()
    supplier_count = serializers.IntegerField()
    pending_payments = PendingPaymentsSerializer()
    by_payment_status = serializers.DictField(child=GroupTotalSerializer())
    by_type = serializers.DictField(child=serializers.DecimalField(max_digits=14, decimal_places=2))
    recent_purchases = PurchaseSummarySerializer(many=True)
    upcoming_payments = PurchaseSummarySerializer(many=True)


class AreaSpendSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    spent = serializers.DecimalField(max_digits=14, decimal_places=2)
    budget = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    budget_used_percentage = serializers.FloatField(allow_null=True)
    purchase_count = serializers.IntegerField()


class SupplierSpendSerializer(serializers.Serializer):
    id = serializers.CharField()
    display_name = serializers.CharField()
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    purchase_count = serializers.IntegerField()


class MonthlySpendSerializer(serializers.Serializer):
    month = serializers.CharField(help_text='YYYY-MM')
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    purchase_count = serializers.IntegerField()


class ReportResponseSerializer(serializers.Serializer):
    """Response serializer for the spending report."""
    period_start = serializers.DateField(allow_null=True)
    period_end = serializers.DateField(allow_null=True)
    total_spent = serializers.DecimalField(max_digits=14, decimal_places=2)
    purchase_count = serializers.IntegerField()
    by_area = AreaSpendSerializer(many=True)
    top_suppliers = SupplierSpendSerializer(many=True)
    by_type = serializers.DictField(child=serializers.DecimalField(max_digits=14, decimal_places=2))
    by_category = serializers.DictField(child=GroupTotalSerializer())
    monthly = MonthlySpendSerializer(many=True)


class RoomSpendSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    budget = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    spent = serializers.DecimalField(max_digits=14, decimal_places=2)


class AreaBreakdownSerializer(serializers.Serializer):
    """Response serializer for one area's breakdown."""
    id = serializers.CharField()
    name = serializers.CharField()
    home_id = serializers.CharField(allow_null=True)
    budget = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    spent = serializers.DecimalField(max_digits=14, decimal_places=2)
    budget_used_percentage = serializers.FloatField(allow_null=True)
    rooms = RoomSpendSerializer(many=True)
    by_category = serializers.DictField(child=GroupTotalSerializer())


class WarrantySerializer(serializers.Serializer):
    line_item_id = serializers.CharField()
    description = serializers.CharField()
    brand = serializers.CharField(allow_blank=True)
    purchase_id = serializers.CharField()
    purchase_date = serializers.DateField()
    supplier_name = serializers.CharField()
    warranty_months = serializers.IntegerField()
    expires_at = serializers.DateField()
    days_remaining = serializers.IntegerField()
    status = serializers.ChoiceField(choices=['expired', 'urgent', 'medium', 'active'])


class WarrantiesResponseSerializer(serializers.Serializer):
    """Response serializer for warranty status."""
    items = WarrantySerializer(many=True)
    counts = serializers.DictField(child=serializers.IntegerField())
    expiring = WarrantySerializer(many=True)
    window_days = serializers.IntegerField()


class ExpiringDocumentSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    house_document_type = serializers.CharField()
    file_url = serializers.URLField()
    expires_at = serializers.DateTimeField()
    purchase_id = serializers.CharField(allow_null=True)
    room_id = serializers.CharField(allow_null=True)


class ExpiringDocumentsResponseSerializer(serializers.Serializer):
    window_days = serializers.IntegerField()
    documents = ExpiringDocumentSerializer(many=True)


class BackfillResultSerializer(serializers.Serializer):
    """Per-item counts from the home-id backfill."""
    updated = serializers.IntegerField()
    skipped = serializers.IntegerField()
    ambiguous = serializers.IntegerField()
    failed = serializers.IntegerField()
    total = serializers.IntegerField()


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
    details = serializers.DictField(required=False)
