"""
URL configuration for the carehome backend project.

Routes the Django admin, the API endpoints of the facility app, uploaded
files under ``/uploads/`` and the OpenAPI documentation at ``/swagger/``
and ``/redoc/``.
"""
from django.conf import settings
from django.contrib import admin
from django.urls import path, include, re_path
from django.views.static import serve

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Panti Werdha Backend API",
    default_version='v1',
    description="Resident, room, daily record and finance services for a care facility.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('facility.routers')),
    path('', include('django_prometheus.urls')),
    # Uploaded photos, audio recordings and transaction proofs
    re_path(r'^uploads/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}, name='uploads'),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
