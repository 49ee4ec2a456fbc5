from django.contrib import admin
from .models import Asset


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = ("title", "tenant", "mime_type", "size", "created_at")
    list_filter = ("mime_type",)
    readonly_fields = ("id", "file", "size", "mime_type", "uploaded_by", "created_at")
