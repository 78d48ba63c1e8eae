from rest_framework import serializers

from .models import Supplier


class SupplierSerializer(serializers.ModelSerializer):
    """Supplier input/output; type-specific name rules live in the service."""

    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = Supplier
        fields = [
            'id',
            'type',
            'display_name',
            'company_name',
            'company_address',
            'first_name',
            'last_name',
            'email',
            'phone',
            'notes',
            'rating',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'company_name': {'allow_null': True},
            'company_address': {'allow_null': True},
            'first_name': {'allow_null': True},
            'last_name': {'allow_null': True},
            'email': {'allow_null': True},
            'phone': {'allow_null': True},
            'notes': {'allow_null': True},
        }


class SupplierSearchSerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
