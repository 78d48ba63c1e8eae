from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Dashboard and reports
    path('dashboard/', views.dashboard, name='dashboard'),
    path('reports/', views.report, name='report'),

    # Area breakdown
    path('areas/<uuid:area_id>/', views.area_breakdown, name='area-breakdown'),

    # Expiry tracking
    path('warranties/', views.warranties, name='warranties'),
    path('documents/expiring/', views.expiring_documents, name='expiring-documents'),
]
