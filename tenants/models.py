"""Tenant models for django-tenants schema-per-tenant isolation."""
from django.db import models
from django_tenants.models import TenantMixin, DomainMixin


class Tenant(TenantMixin):
    """Each tenant maps to one Postgres schema.

    The primary key is the tenant slug (e.g. ``"acme"``); it doubles as the
    permission team id and the top-level storage prefix for tenant assets.
    """
    id = models.CharField(primary_key=True, max_length=63, help_text="Tenant slug, e.g. 'acme'")
    name = models.CharField(max_length=255, help_text="Display name for the tenant org")
    created_at = models.DateTimeField(auto_now_add=True)
    is_active = models.BooleanField(default=True)

    auto_create_schema = True

    class Meta:
        app_label = "tenants"

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.schema_name:
            # Postgres identifiers cannot contain hyphens.
            self.schema_name = self.id.replace("-", "_")
        super().save(*args, **kwargs)


class Domain(DomainMixin):
    """Domain → tenant mapping. Primary domain used for routing."""

    class Meta:
        app_label = "tenants"

    def __str__(self):
        return self.domain
