from rest_framework import serializers

from .models import ExpenseCategory, Tag


class ExpenseCategorySerializer(serializers.ModelSerializer):
    """Category; ``name`` is normalized to lower_snake_case by the service."""

    usage_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = ExpenseCategory
        fields = [
            'id',
            'name',
            'label',
            'icon_name',
            'color',
            'bg_color',
            'sort_order',
            'usage_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'sort_order': {'required': False},
            # Uniqueness is checked on the normalized name in the service
            'name': {'validators': []},
        }


class TagSerializer(serializers.ModelSerializer):

    usage_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Tag
        fields = ['id', 'name', 'color', 'usage_count', 'created_at']
        read_only_fields = ['id', 'created_at']
        extra_kwargs = {
            'name': {'validators': []},
        }


class TagSearchSerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
