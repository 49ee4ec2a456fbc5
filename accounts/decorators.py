"""Access control decorators for tenant and central API views."""
from functools import wraps

from django.http import JsonResponse

from accounts.capabilities import get_capabilities
from accounts.exceptions import AccessDenied
from accounts.guards import (
    GuardContext,
    require_permission,
    require_superadmin,
    require_tenant_member,
    run_guards,
)


def guard_context(request):
    """Build the guard context from what the middleware chain attached."""
    return GuardContext(
        principal=getattr(request, "user", None),
        tenant=getattr(request, "tenant_context", None),
        capabilities=get_capabilities(),
        path=request.path,
    )


def denial_response(exc):
    return JsonResponse(exc.as_dict(), status=exc.status_code)


def guarded(*guards):
    """Run ``guards`` in order before the view; reject with JSON on failure."""
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            ctx = guard_context(request)
            try:
                run_guards(ctx, guards)
            except AccessDenied as exc:
                return denial_response(exc)
            request.tenant_membership = ctx.membership
            return view_func(request, *args, **kwargs)
        return _wrapped
    return decorator


def tenant_member_required(view_func):
    """Restrict view to active members of the resolved tenant (or superadmins)."""
    return guarded(require_tenant_member)(view_func)


def superadmin_required(view_func):
    """Restrict view to superadmin-type principals."""
    return guarded(require_superadmin)(view_func)


def permission_required(codename):
    """Restrict view to tenant members whose roles carry ``codename``."""
    return guarded(require_permission(codename))
