from rest_framework import serializers

from .models import AppUser, Role


class AppUserSerializer(serializers.ModelSerializer):
    """Output serializer for app users."""

    is_pending = serializers.BooleanField(read_only=True)

    class Meta:
        model = AppUser
        fields = [
            'id',
            'email',
            'name',
            'role',
            'is_active',
            'is_pending',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class InviteUserSerializer(serializers.Serializer):
    """Input for POST /api/admin/users/."""

    email = serializers.EmailField()
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    role = serializers.ChoiceField(choices=Role.choices, default=Role.VIEWER)


class UpdateUserSerializer(serializers.Serializer):
    """Input for PATCH /api/admin/users/{id}/."""

    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=Role.choices, required=False)
    is_active = serializers.BooleanField(required=False)


class BootstrapResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    user = AppUserSerializer()
