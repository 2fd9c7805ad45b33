"""
URL configuration for config project.

Only the admin is routed; scoring runs through services, signals and
management commands.
"""
from django.contrib import admin
from django.urls import path

admin.site.site_header = "Behavioral Intelligence Admin"
admin.site.site_title = "Behavioral Intelligence"

urlpatterns = [
    path("admin/", admin.site.urls),
]
