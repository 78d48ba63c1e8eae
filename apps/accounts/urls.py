from django.urls import path
from . import views

app_name = 'accounts'

# Mounted at /api/auth/
urlpatterns = [
    path('me/', views.me, name='me'),
]

# Mounted at /api/admin/
admin_urlpatterns = [
    # POST   /api/admin/bootstrap/       - One-time first admin
    # GET    /api/admin/users/           - List users
    # POST   /api/admin/users/           - Invite user
    # GET    /api/admin/users/{id}/      - User details
    # PATCH  /api/admin/users/{id}/      - Update name/role/active
    # DELETE /api/admin/users/{id}/      - Delete user
    path('bootstrap/', views.bootstrap, name='bootstrap'),
    path('users/', views.users, name='users'),
    path('users/<uuid:user_id>/', views.user_detail, name='user-detail'),
]
