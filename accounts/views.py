"""Authentication API: login, logout, current user."""
from django.contrib.auth import login, logout
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from django_ratelimit.decorators import ratelimit

from auditlog.services import log_event
from tenants.scope import current_scope
from . import rbac
from .exceptions import Unauthenticated
from .decorators import denial_response
from .forms import LoginForm


def serialize_user(user, scope=None):
    return {
        "id": str(user.pk),
        "email": user.email,
        "name": user.display_name,
        "type": user.type,
        "roles": rbac.roles_for(user, scope=scope),
        "tenants": [
            {"id": m.tenant_id, "role": m.role, "status": m.status}
            for m in user.memberships.all().order_by("tenant_id")
        ],
    }


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------
@ratelimit(key="ip", rate="10/m", method="POST", block=True)
@require_POST
def login_view(request):
    form = LoginForm(request, data=request.POST)
    if not form.is_valid():
        email = request.POST.get("email", "")
        log_event(request, "login_failure", detail=f"Failed login for {email}")
        return JsonResponse({"detail": "invalid_credentials", "errors": form.errors}, status=422)

    user = form.get_user()
    login(request, user)
    log_event(request, "login_success", user=user)
    return JsonResponse(serialize_user(user, scope=current_scope()))


@require_POST
def logout_view(request):
    if request.user.is_authenticated:
        log_event(request, "logout")
    logout(request)
    return JsonResponse({"detail": "logged_out"})


@require_GET
def current_user_view(request):
    if not request.user.is_authenticated:
        return denial_response(Unauthenticated())
    return JsonResponse(serialize_user(request.user, scope=current_scope()))
