from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'purchases'

router = DefaultRouter()
router.register(r'purchases', views.PurchaseViewSet, basename='purchase')
router.register(r'attachments', views.AttachmentViewSet, basename='attachment')

urlpatterns = [
    # Purchase ViewSet routes
    # GET    /api/purchases/                  - List purchases
    # POST   /api/purchases/                  - Create purchase with line items
    # GET    /api/purchases/{id}/             - Purchase details
    # PUT    /api/purchases/{id}/             - Replace purchase and line items
    # DELETE /api/purchases/{id}/             - Soft delete

    # Custom purchase actions
    # GET    /api/purchases/{id}/attachments/ - List attachments
    # POST   /api/purchases/{id}/attachments/ - Add attachment
    # POST   /api/purchases/extract-invoice/  - Read an invoice image

    # Attachment routes
    # GET    /api/attachments/{id}/
    # PATCH  /api/attachments/{id}/
    # DELETE /api/attachments/{id}/

    # House documents
    path('documents/', views.documents, name='documents'),

    # Include router URLs
    path('', include(router.urls)),
]
