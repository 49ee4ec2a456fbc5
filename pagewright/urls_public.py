"""URL configuration for the public schema (central domains)."""
from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path

from assets import views as asset_views
from tenants import views as tenant_views


def health(request):
    return JsonResponse({"status": "ok"})


superadmin_patterns = [
    path("tenants/", tenant_views.tenant_list_view, name="tenant_list"),
    path("tenants/<slug:tenant_id>/users/", tenant_views.tenant_member_add_view, name="tenant_member_add"),
    path("tenants/<slug:tenant_id>/users/<uuid:user_id>/",
         tenant_views.tenant_member_remove_view, name="tenant_member_remove"),
    path("media/", asset_views.central_media_view, name="central_media"),
]

urlpatterns = [
    path("api/health/", health, name="health"),
    path("api/auth/", include("accounts.urls")),
    path("api/superadmin/", include((superadmin_patterns, "superadmin"))),
    path("django-admin/", admin.site.urls),
]
