"""
Request guards for tenant and central route groups.

A guard is a plain function that takes a ``GuardContext`` and either returns
(continue) or raises an ``AccessDenied`` subclass (terminal rejection).
``run_guards`` applies an ordered chain of them.

The tenant and the capability checker travel in the context explicitly; the
superadmin role check always runs in the central scope, because that role is
granted globally rather than per tenant.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from django.conf import settings

from accounts.capabilities import Capabilities
from accounts.exceptions import (
    MissingPermission,
    NoTenantAccess,
    TenantNotInitialized,
    Unauthenticated,
    WrongPrincipalType,
)

logger = logging.getLogger("pagewright.access")

CENTRAL_SCOPE = None


@dataclass
class GuardContext:
    """What the guards know about one request."""

    principal: Optional[Any]
    tenant: Optional[Any]
    capabilities: Capabilities
    membership: Optional[Any] = None
    path: str = ""


Guard = Callable[[GuardContext], None]


def _superadmin_type():
    return getattr(settings, "SUPERADMIN_TYPE", "superadmin")


def _superadmin_role():
    return getattr(settings, "SUPERADMIN_ROLE", "superadmin")


def require_authenticated(ctx: GuardContext) -> None:
    principal = ctx.principal
    if principal is None or not getattr(principal, "is_authenticated", False):
        raise Unauthenticated()


def require_tenant(ctx: GuardContext) -> None:
    if ctx.tenant is None:
        logger.error(
            "Tenant-only route %s reached without a resolved tenant; "
            "check the tenant middleware and domain routing",
            ctx.path or "<unknown>",
        )
        raise TenantNotInitialized()


def is_god_mode(ctx: GuardContext) -> bool:
    """Superadmin bypass: requires the superadmin type AND the superadmin role."""
    principal = ctx.principal
    if getattr(principal, "type", None) != _superadmin_type():
        return False
    return ctx.capabilities.has_role(principal, _superadmin_role(), CENTRAL_SCOPE)


def require_tenant_member(ctx: GuardContext) -> None:
    """
    Allow the principal to act within the resolved tenant.

    Order: authenticated → tenant resolved → superadmin bypass → active
    membership. On success the membership (None under the bypass) is left
    on ``ctx.membership``.
    """
    require_authenticated(ctx)
    require_tenant(ctx)

    if is_god_mode(ctx):
        logger.info("Superadmin %s bypassed membership check for tenant %s",
                    ctx.principal.pk, ctx.tenant.pk)
        return

    membership = ctx.capabilities.active_membership(ctx.principal, ctx.tenant)
    if membership is None:
        logger.info("Principal %s has no active membership in tenant %s",
                    ctx.principal.pk, ctx.tenant.pk)
        raise NoTenantAccess()
    ctx.membership = membership


def require_permission(codename: str) -> Guard:
    """
    Build a guard that demands ``codename`` within the resolved tenant.

    Runs the membership guard first; the superadmin bypass also skips the
    permission lookup.
    """
    def guard(ctx: GuardContext) -> None:
        require_tenant_member(ctx)
        if ctx.membership is None:
            return
        if not ctx.capabilities.has_permission(ctx.principal, codename, str(ctx.tenant.pk)):
            logger.info("Principal %s lacks %s in tenant %s",
                        ctx.principal.pk, codename, ctx.tenant.pk)
            raise MissingPermission()

    guard.__name__ = f"require_permission({codename})"
    return guard


def require_superadmin(ctx: GuardContext) -> None:
    """Central-only route groups: the type flag alone decides."""
    require_authenticated(ctx)
    if getattr(ctx.principal, "type", None) != _superadmin_type():
        raise WrongPrincipalType()


def run_guards(ctx: GuardContext, guards: Iterable[Guard]) -> GuardContext:
    """Apply ``guards`` in order; the first rejection propagates."""
    for guard in guards:
        guard(ctx)
    return ctx
