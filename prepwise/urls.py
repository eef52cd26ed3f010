"""
URL configuration for prepwise project.
"""

from django.contrib import admin
from django.urls import include, path

from prepwise.views import HealthCheckView

urlpatterns = [
    path("accounts/", include("allauth.urls")),
    path("admin/", admin.site.urls),
    path("api/", include("prepwise.api.urls")),
    path("health", HealthCheckView.as_view(), name="health_check"),
]
