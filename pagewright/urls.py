"""URL configuration for tenant schemas (tenant domains)."""
from django.urls import include, path

from assets import views as asset_views
from tenants import views as tenant_views


urlpatterns = [
    path("api/info/", tenant_views.info_view, name="tenant_info"),
    path("api/dashboard/", tenant_views.dashboard_view, name="tenant_dashboard"),
    path("api/media/", asset_views.media_view, name="tenant_media"),
    path("api/auth/", include("accounts.urls")),
]
