from rest_framework import viewsets, status
from rest_framework.response import Response

from apps.accounts.permissions import CanEditOrReadOnly, IsAdminOrReadOnly

from .serializers import ExpenseCategorySerializer, TagSearchSerializer, TagSerializer
from .services import (
    list_categories,
    get_category,
    category_usage_count,
    create_category,
    update_category,
    delete_category,
    list_tags,
    create_tag,
    update_tag,
    delete_tag,
)


class ExpenseCategoryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for expense categories.

    Anyone signed in may read; only admins manage categories.
    Not paginated: the list feeds pickers and chart legends.
    """

    serializer_class = ExpenseCategorySerializer
    permission_classes = [IsAdminOrReadOnly]
    pagination_class = None

    def get_queryset(self):
        return list_categories()

    def retrieve(self, request, *args, **kwargs):
        category = get_category(category_id=self.kwargs['pk'])
        data = ExpenseCategorySerializer(category).data
        data['usage_count'] = category_usage_count(name=category.name)
        return Response(data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        category = create_category(**serializer.validated_data)
        return Response(ExpenseCategorySerializer(category).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        category = update_category(category_id=instance.id, data=serializer.validated_data)
        return Response(ExpenseCategorySerializer(category).data)

    def destroy(self, request, *args, **kwargs):
        delete_category(category_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)


class TagViewSet(viewsets.ModelViewSet):
    """ViewSet for tags. Editors manage tags; delete is unguarded."""

    serializer_class = TagSerializer
    permission_classes = [CanEditOrReadOnly]
    pagination_class = None

    def get_queryset(self):
        params = TagSearchSerializer(data=self.request.query_params)
        params.is_valid(raise_exception=True)
        return list_tags(search=params.validated_data.get('search'))

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tag = create_tag(**serializer.validated_data)
        return Response(TagSerializer(tag).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        tag = update_tag(tag_id=instance.id, **serializer.validated_data)
        return Response(TagSerializer(tag).data)

    def destroy(self, request, *args, **kwargs):
        delete_tag(tag_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)
