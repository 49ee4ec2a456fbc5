"""
Capability checks the access guards depend on.

Guards only talk to a ``Capabilities`` object; ``ModelCapabilities`` is the
ORM-backed implementation configured through ``settings.ACCESS_CAPABILITIES``.
"""
from typing import Any, Optional, Protocol

from django.conf import settings
from django.utils.module_loading import import_string


class Capabilities(Protocol):
    def has_role(self, principal: Any, role: str, scope: Optional[str]) -> bool:
        ...

    def has_permission(self, principal: Any, codename: str, scope: Optional[str]) -> bool:
        ...

    def active_membership(self, principal: Any, tenant: Any) -> Optional[Any]:
        ...


class ModelCapabilities:
    """Answer capability questions from the accounts tables."""

    def has_role(self, principal, role, scope):
        from accounts import rbac

        return rbac.has_role(principal, role, scope=scope)

    def has_permission(self, principal, codename, scope):
        from accounts import rbac

        return rbac.has_permission(principal, codename, scope=scope)

    def active_membership(self, principal, tenant):
        """
        Return an active membership for (principal, tenant), or None.

        Any active row authorizes; when legacy duplicates exist the oldest
        active one is returned. Database errors propagate.
        """
        from accounts.models import Membership

        return (
            Membership.objects.filter(
                user_id=principal.pk,
                tenant_id=tenant.pk,
                status=Membership.Status.ACTIVE,
            )
            .order_by("created_at", "id")
            .first()
        )


def get_capabilities() -> Capabilities:
    """Instantiate the configured capability checker."""
    path = getattr(settings, "ACCESS_CAPABILITIES", "accounts.capabilities.ModelCapabilities")
    return import_string(path)()
