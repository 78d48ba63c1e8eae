from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'taxonomy'

router = DefaultRouter()
router.register(r'categories', views.ExpenseCategoryViewSet, basename='category')
router.register(r'tags', views.TagViewSet, basename='tag')

urlpatterns = [
    # GET    /api/categories/         - List categories (sort order, name)
    # POST   /api/categories/         - Create category (admin)
    # GET    /api/categories/{id}/    - Category with usage count
    # PUT    /api/categories/{id}/    - Update / rename (admin)
    # DELETE /api/categories/{id}/    - Delete unused category (admin)
    # GET    /api/tags/?search=       - List tags
    # GET|PUT|DELETE /api/tags/{id}/
    path('', include(router.urls)),
]
