"""Audit log helper – call from views to record events."""
from .models import AuditEntry


def get_client_ip(request):
    """Extract IP, respecting X-Forwarded-For from the load balancer."""
    xff = request.META.get("HTTP_X_FORWARDED_FOR")
    if xff:
        return xff.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")


def log_event(request, event_type, user=None, detail="", tenant=None):
    """Create an audit entry in the current schema."""
    if user is None and hasattr(request, "user") and request.user.is_authenticated:
        user = request.user
    if tenant is None:
        tenant = getattr(request, "tenant_context", None)
    has_pk = user is not None and getattr(user, "pk", None) is not None
    return AuditEntry.objects.create(
        user_id=user.pk if has_pk else None,
        user_email=getattr(user, "email", "") if has_pk else "",
        event_type=event_type,
        tenant_id=tenant.pk if tenant is not None else "",
        detail=str(detail),
        ip_address=get_client_ip(request),
        user_agent=request.META.get("HTTP_USER_AGENT", "")[:500],
    )
