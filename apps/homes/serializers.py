from decimal import Decimal

from rest_framework import serializers

from .models import Area, Home, HomeImage, Room


def attributed_spend(serializer, obj):
    """Spend looked up in the ``spend`` map the view puts in the context."""
    spend = serializer.context.get('spend')
    if spend is None:
        return None
    return spend.get(obj.id, Decimal('0.00'))


class HomeImageSerializer(serializers.ModelSerializer):

    class Meta:
        model = HomeImage
        fields = ['id', 'home', 'url', 'caption', 'sort_order', 'created_at']
        read_only_fields = ['id', 'home', 'created_at']
        extra_kwargs = {'sort_order': {'required': False}}


class HomeSerializer(serializers.ModelSerializer):
    """Home with gallery and area count."""

    area_count = serializers.IntegerField(read_only=True)
    spent = serializers.SerializerMethodField()
    images = HomeImageSerializer(many=True, read_only=True)

    class Meta:
        model = Home
        fields = [
            'id',
            'name',
            'name_lt',
            'address',
            'purchase_date',
            'cover_image_url',
            'description',
            'description_lt',
            'area_count',
            'spent',
            'images',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_spent(self, obj):
        return attributed_spend(self, obj)


class AreaSerializer(serializers.ModelSerializer):
    """Area; budget must be positive when given."""

    home = serializers.PrimaryKeyRelatedField(
        queryset=Home.objects.alive(),
        allow_null=True,
        required=False,
    )
    home_name = serializers.CharField(source='home.name', read_only=True)
    room_count = serializers.IntegerField(read_only=True)
    spent = serializers.SerializerMethodField()

    class Meta:
        model = Area
        fields = [
            'id',
            'home',
            'home_name',
            'name',
            'name_lt',
            'description',
            'description_lt',
            'budget',
            'room_count',
            'spent',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_spent(self, obj):
        return attributed_spend(self, obj)


class RoomSerializer(serializers.ModelSerializer):
    """Room; budget must be non-negative when given."""

    area_name = serializers.CharField(source='area.name', read_only=True)
    home = serializers.UUIDField(source='area.home_id', read_only=True)
    spent = serializers.SerializerMethodField()

    class Meta:
        model = Room
        fields = [
            'id',
            'area',
            'area_name',
            'home',
            'name',
            'name_lt',
            'description',
            'description_lt',
            'budget',
            'spent',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_spent(self, obj):
        return attributed_spend(self, obj)


class HomeFilterSerializer(serializers.Serializer):
    """Optional ?home= and ?area= query filters."""

    home = serializers.UUIDField(required=False)
    area = serializers.UUIDField(required=False)
    search = serializers.CharField(required=False, allow_blank=True)
