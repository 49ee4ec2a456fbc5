from django.contrib import admin
from .models import AuditEntry


@admin.register(AuditEntry)
class AuditEntryAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "event_type", "user_email", "tenant_id", "ip_address")
    list_filter = ("event_type",)
    readonly_fields = (
        "id", "timestamp", "user_id", "user_email", "event_type",
        "tenant_id", "detail", "ip_address", "user_agent",
    )
