"""Audit log – one table per tenant schema, plus one in the public schema."""
import uuid
from django.db import models


class AuditEntry(models.Model):
    """Immutable audit trail entry."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)
    # No FK: tenant schemas do not hold the shared user table's constraints.
    user_id = models.UUIDField(null=True, blank=True)
    user_email = models.EmailField(blank=True, default="")
    event_type = models.CharField(max_length=50, db_index=True)
    tenant_id = models.CharField(max_length=63, blank=True, default="", db_index=True)
    detail = models.TextField(blank=True, default="")
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True, default="")

    class Meta:
        app_label = "auditlog"
        db_table = "audit_log"
        ordering = ["-timestamp"]
        indexes = [
            models.Index(fields=["event_type", "timestamp"], name="idx_audit_type_ts"),
        ]

    def __str__(self):
        return f"{self.timestamp} [{self.event_type}] {self.user_email or '-'}"
