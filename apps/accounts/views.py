from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.common.exceptions import Unauthenticated

from .permissions import IsActiveAppUser, IsAdminRole
from .serializers import (
    AppUserSerializer,
    InviteUserSerializer,
    UpdateUserSerializer,
    BootstrapResponseSerializer,
)
from .services import (
    ExternalIdentity,
    bootstrap_first_admin,
    invite_user,
    list_users,
    get_user,
    update_user,
    delete_user,
)


class UserPagination(PageNumberPagination):
    """Custom pagination for user listings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    responses={200: AppUserSerializer},
    description="Get the current user's account and role.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsActiveAppUser])
def me(request):
    """Return the resolved AppUser for the caller."""
    return Response(AppUserSerializer(request.user).data)


@extend_schema(
    request=None,
    responses={201: BootstrapResponseSerializer},
    description='Create the first admin from the calling identity. Works only while no users exist.',
    tags=['admin'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def bootstrap(request):
    """One-time first admin creation - thin HTTP handler."""
    identity = request.auth
    if not isinstance(identity, ExternalIdentity):
        raise Unauthenticated('Unauthorized - Please sign in first')

    user = bootstrap_first_admin(identity=identity)
    return Response(
        {
            'success': True,
            'message': 'First admin user created successfully',
            'user': AppUserSerializer(user).data,
        },
        status=status.HTTP_201_CREATED,
    )


@extend_schema(
    methods=['GET'],
    responses={200: AppUserSerializer(many=True)},
    description='List all users (admin only).',
    tags=['admin'],
)
@extend_schema(
    methods=['POST'],
    request=InviteUserSerializer,
    responses={201: AppUserSerializer},
    description='Invite a user by email (admin only).',
    tags=['admin'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAdminRole])
def users(request):
    """List or invite users."""
    if request.method == 'GET':
        paginator = UserPagination()
        page = paginator.paginate_queryset(list_users(), request)
        return paginator.get_paginated_response(AppUserSerializer(page, many=True).data)

    serializer = InviteUserSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = invite_user(
        email=serializer.validated_data['email'],
        name=serializer.validated_data.get('name', ''),
        role=serializer.validated_data['role'],
        invited_by=request.user,
    )
    return Response(AppUserSerializer(user).data, status=status.HTTP_201_CREATED)


@extend_schema(
    methods=['PATCH'],
    request=UpdateUserSerializer,
    responses={200: AppUserSerializer},
    tags=['admin'],
)
@extend_schema(methods=['GET', 'DELETE'], tags=['admin'])
@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAdminRole])
def user_detail(request, user_id):
    """Get, update or delete a single user (admin only)."""
    if request.method == 'GET':
        return Response(AppUserSerializer(get_user(user_id=user_id)).data)

    if request.method == 'DELETE':
        delete_user(user_id=user_id, deleted_by=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = UpdateUserSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)

    user = update_user(
        user_id=user_id,
        updated_by=request.user,
        **serializer.validated_data,
    )
    return Response(AppUserSerializer(user).data)
