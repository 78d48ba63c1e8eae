from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import CanEditOrReadOnly
from apps.analytics.analytics import AnalyticsQueries

from .serializers import (
    AreaSerializer,
    HomeFilterSerializer,
    HomeImageSerializer,
    HomeSerializer,
    RoomSerializer,
)
from .services import (
    create_home,
    list_homes,
    update_home,
    soft_delete_home,
    list_home_images,
    add_home_image,
    delete_home_image,
    create_area,
    list_areas,
    update_area,
    delete_area,
    create_room,
    list_rooms,
    update_room,
    delete_room,
)


class HomesPagination(PageNumberPagination):
    """Custom pagination for homes, areas and rooms."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _filters(request):
    serializer = HomeFilterSerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class SpendContextMixin:
    """Adds attributed spend to list and detail responses."""

    def spend(self):
        raise NotImplementedError

    def get_serializer_context(self):
        context = super().get_serializer_context()
        if self.action in ('list', 'retrieve'):
            context['spend'] = self.spend()
        return context


class HomeViewSet(SpendContextMixin, viewsets.ModelViewSet):
    """
    ViewSet for Home CRUD operations.

    Views are thin HTTP handlers; business logic lives in services.
    Delete is a soft delete.
    """

    serializer_class = HomeSerializer
    permission_classes = [CanEditOrReadOnly]
    pagination_class = HomesPagination

    def get_queryset(self):
        search = _filters(self.request).get('search')
        return list_homes(search=search).prefetch_related('images')

    def spend(self):
        return AnalyticsQueries.home_spend()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        home = create_home(**serializer.validated_data)
        return Response(HomeSerializer(home).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        home = update_home(home_id=instance.id, data=serializer.validated_data)
        return Response(HomeSerializer(home).data)

    def destroy(self, request, *args, **kwargs):
        soft_delete_home(home_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=HomeImageSerializer, responses={200: HomeImageSerializer(many=True)})
    @action(detail=True, methods=['get', 'post'])
    def images(self, request, pk=None):
        """List or add gallery images."""
        if request.method == 'GET':
            images = list_home_images(home_id=pk)
            return Response(HomeImageSerializer(images, many=True).data)

        serializer = HomeImageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        image = add_home_image(home_id=pk, **serializer.validated_data)
        return Response(HomeImageSerializer(image).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['delete'], url_path=r'images/(?P<image_id>[0-9a-f-]+)')
    def delete_image(self, request, pk=None, image_id=None):
        """Remove a gallery image."""
        delete_home_image(home_id=pk, image_id=image_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AreaViewSet(SpendContextMixin, viewsets.ModelViewSet):
    """
    ViewSet for Area CRUD operations.

    Deleting an area that still has rooms is a 409.
    """

    serializer_class = AreaSerializer
    permission_classes = [CanEditOrReadOnly]
    pagination_class = HomesPagination

    def get_queryset(self):
        return list_areas(home_id=_filters(self.request).get('home'))

    def spend(self):
        return AnalyticsQueries.area_spend()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        area = create_area(**serializer.validated_data)
        return Response(AreaSerializer(area).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        area = update_area(area_id=instance.id, data=serializer.validated_data)
        return Response(AreaSerializer(area).data)

    def destroy(self, request, *args, **kwargs):
        delete_area(area_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)


class RoomViewSet(SpendContextMixin, viewsets.ModelViewSet):
    """ViewSet for Room CRUD operations."""

    serializer_class = RoomSerializer
    permission_classes = [CanEditOrReadOnly]
    pagination_class = HomesPagination

    def get_queryset(self):
        params = _filters(self.request)
        return list_rooms(area_id=params.get('area'), home_id=params.get('home'))

    def spend(self):
        if self.action == 'retrieve':
            return AnalyticsQueries.room_spend([self.get_object().id])
        return AnalyticsQueries.room_spend(self.get_queryset().values_list('id', flat=True))

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        room = create_room(**serializer.validated_data)
        return Response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        room = update_room(room_id=instance.id, data=serializer.validated_data)
        return Response(RoomSerializer(room).data)

    def destroy(self, request, *args, **kwargs):
        delete_room(room_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)
