from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'suppliers'

router = DefaultRouter()
router.register(r'', views.SupplierViewSet, basename='supplier')

urlpatterns = [
    # GET    /api/suppliers/?search=    - List suppliers
    # POST   /api/suppliers/            - Create supplier
    # GET    /api/suppliers/{id}/       - Supplier details
    # PUT    /api/suppliers/{id}/       - Update supplier
    # DELETE /api/suppliers/{id}/       - Soft delete supplier
    path('', include(router.urls)),
]
