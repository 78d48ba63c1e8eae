from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'homes'

router = DefaultRouter()
router.register(r'homes', views.HomeViewSet, basename='home')
router.register(r'areas', views.AreaViewSet, basename='area')
router.register(r'rooms', views.RoomViewSet, basename='room')

urlpatterns = [
    # GET    /api/homes/                         - List homes
    # POST   /api/homes/                         - Create home
    # GET    /api/homes/{id}/                    - Home details
    # PUT    /api/homes/{id}/                    - Update home
    # DELETE /api/homes/{id}/                    - Soft delete home
    # GET    /api/homes/{id}/images/             - List gallery
    # POST   /api/homes/{id}/images/             - Add image
    # DELETE /api/homes/{id}/images/{image_id}/  - Remove image
    # GET    /api/areas/?home=                   - List areas
    # DELETE /api/areas/{id}/                    - Delete area (409 if it has rooms)
    # GET    /api/rooms/?area=&home=             - List rooms
    path('', include(router.urls)),
]
