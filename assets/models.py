"""Uploaded media assets, partitioned by tenant on storage."""
import uuid

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models

from .paths import asset_upload_to, path_generator


class AssetQuerySet(models.QuerySet):
    def for_tenant(self, tenant):
        return self.filter(tenant=tenant)

    def central(self):
        return self.filter(tenant__isnull=True)


class Asset(models.Model):
    """
    A stored media object.

    ``tenant`` NULL means a central asset, which is then filed under its
    owning model (e.g. a user's avatar).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey(
        "tenants.Tenant", on_delete=models.CASCADE, null=True, blank=True, related_name="assets"
    )
    content_type = models.ForeignKey(ContentType, on_delete=models.SET_NULL, null=True, blank=True)
    object_id = models.CharField(max_length=64, blank=True, default="")
    owner = GenericForeignKey("content_type", "object_id")

    file = models.FileField(upload_to=asset_upload_to, max_length=512)
    title = models.CharField(max_length=255, blank=True)
    alt_text = models.CharField(max_length=255, blank=True)
    mime_type = models.CharField(max_length=100, blank=True)
    size = models.PositiveBigIntegerField(default=0)
    uploaded_by = models.ForeignKey(
        "accounts.User", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    objects = AssetQuerySet.as_manager()

    class Meta:
        app_label = "assets"
        db_table = "media_asset"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["tenant", "created_at"], name="idx_asset_tenant_created"),
            models.Index(fields=["content_type", "object_id"], name="idx_asset_owner"),
        ]

    def __str__(self):
        return self.title or self.file.name

    @property
    def model_type(self):
        return self.content_type.model if self.content_type_id else None

    @property
    def model_id(self):
        return self.object_id or None

    @property
    def base_path(self):
        return path_generator.base_path(self)

    @property
    def conversions_path(self):
        return path_generator.conversions_path(self)

    @property
    def responsive_images_path(self):
        return path_generator.responsive_images_path(self)
