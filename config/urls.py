"""
URL configuration for the penduduk registry.
"""

from django.contrib import admin
from django.urls import path, include
from penduduk.api.health import health_check, readiness_check

urlpatterns = [
    path("django-admin/", admin.site.urls),
    path("admin/", include("penduduk.web.urls")),
    path("api/health/", health_check, name="health_check"),
    path("api/ready/", readiness_check, name="readiness_check"),
]
