"""Tenant API views – superadmin tenant management and tenant-scoped endpoints."""
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django_tenants.utils import get_public_schema_name
from django.views.decorators.http import require_GET, require_http_methods

from accounts import rbac
from accounts.decorators import superadmin_required, tenant_member_required
from accounts.forms import MembershipForm
from accounts.models import User
from auditlog.services import log_event
from . import services
from .forms import TenantForm
from .models import Tenant


def serialize_tenant(tenant):
    return {
        "id": tenant.pk,
        "name": tenant.name,
        "is_active": tenant.is_active,
        "domains": [d.domain for d in tenant.domains.all()],
        "created_at": tenant.created_at.isoformat() if tenant.created_at else None,
    }


def serialize_membership(membership):
    return {
        "tenant_id": membership.tenant_id,
        "user_id": str(membership.user_id),
        "role": membership.role,
        "status": membership.status,
    }


# ---------------------------------------------------------------------------
# Central (superadmin) endpoints
# ---------------------------------------------------------------------------
@superadmin_required
@require_http_methods(["GET", "POST"])
def tenant_list_view(request):
    if request.method == "POST":
        form = TenantForm(request.POST)
        if not form.is_valid():
            return JsonResponse({"detail": "invalid", "errors": form.errors}, status=422)
        try:
            tenant = services.create_tenant(
                name=form.cleaned_data["name"],
                domain=form.cleaned_data["domain"],
                tenant_id=form.cleaned_data["id"] or None,
            )
        except ValueError as exc:
            return JsonResponse({"detail": "invalid", "errors": {"id": [str(exc)]}}, status=422)
        except services.TenantExists as exc:
            return JsonResponse({"detail": "conflict", "message": str(exc)}, status=409)
        log_event(request, "tenant_created", tenant=tenant, detail=f"Created tenant '{tenant.pk}'")
        return JsonResponse(serialize_tenant(tenant), status=201)

    tenants = Tenant.objects.exclude(schema_name=get_public_schema_name()).prefetch_related("domains").order_by("name")
    return JsonResponse({"results": [serialize_tenant(t) for t in tenants]})


@superadmin_required
@require_http_methods(["POST"])
def tenant_member_add_view(request, tenant_id):
    tenant = get_object_or_404(Tenant, pk=tenant_id)
    form = MembershipForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"detail": "invalid", "errors": form.errors}, status=422)
    membership = services.add_user_to_tenant(
        tenant,
        form.user,
        role=form.cleaned_data.get("role") or None,
        status=form.cleaned_data.get("status") or None,
    )
    log_event(request, "membership_saved", tenant=tenant,
              detail=f"{form.user.email} → {tenant.pk} ({membership.role}, {membership.status})")
    return JsonResponse(serialize_membership(membership))


@superadmin_required
@require_http_methods(["POST", "DELETE"])
def tenant_member_remove_view(request, tenant_id, user_id):
    tenant = get_object_or_404(Tenant, pk=tenant_id)
    user = get_object_or_404(User, pk=user_id)
    if not services.remove_user_from_tenant(tenant, user):
        return JsonResponse({"detail": "not_found", "message": "No such membership."}, status=404)
    log_event(request, "membership_removed", tenant=tenant, detail=f"{user.email} removed from {tenant.pk}")
    return JsonResponse({"detail": "removed"})


# ---------------------------------------------------------------------------
# Tenant endpoints
# ---------------------------------------------------------------------------
@require_GET
def info_view(request):
    tenant = request.tenant_context
    if tenant is None:
        return JsonResponse({"detail": "not_found", "message": "No tenant on this domain."}, status=404)
    return JsonResponse({"id": tenant.pk, "name": tenant.name})


@tenant_member_required
@require_GET
def dashboard_view(request):
    tenant = request.tenant_context
    membership = request.tenant_membership
    return JsonResponse({
        "tenant": {"id": tenant.pk, "name": tenant.name},
        "membership": serialize_membership(membership) if membership else None,
        "roles": rbac.roles_for(request.user),
    })
