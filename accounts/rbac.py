"""
Team-scoped roles and permissions.

Every function takes an optional ``scope`` (a tenant id, or None for the
central scope). When omitted, the scope comes from
``tenants.scope.current_scope()``; it is read on every call, never cached.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from django.db import transaction

from accounts.models import Role, RoleAssignment
from tenants.scope import current_scope

logger = logging.getLogger(__name__)

_CURRENT = object()


def _resolve(scope) -> Optional[str]:
    if scope is _CURRENT:
        scope = current_scope()
    return None if scope is None else str(scope)


def _role_qs(scope_id):
    return Role.objects.filter(team_id=scope_id) if scope_id else Role.objects.filter(team_id__isnull=True)


def _assignment_qs(user, scope_id):
    qs = RoleAssignment.objects.filter(user_id=user.pk)
    if scope_id:
        return qs.filter(team_id=scope_id)
    return qs.filter(team_id__isnull=True)


def get_or_create_role(name: str, permissions: Iterable[str] = (), scope=_CURRENT) -> Role:
    """Return the role ``name`` in the scope, creating it if missing."""
    scope_id = _resolve(scope)
    role, created = _role_qs(scope_id).get_or_create(
        name=name, defaults={"team_id": scope_id, "permissions": sorted(set(permissions))}
    )
    if not created and permissions:
        merged = sorted(set(role.permissions) | set(permissions))
        if merged != role.permissions:
            role.permissions = merged
            role.save(update_fields=["permissions"])
    return role


@transaction.atomic
def assign_role(user, name: str, scope=_CURRENT) -> RoleAssignment:
    """Grant ``name`` to ``user`` in the scope. Idempotent."""
    scope_id = _resolve(scope)
    role = get_or_create_role(name, scope=scope_id)
    assignment, created = _assignment_qs(user, scope_id).get_or_create(
        role=role, defaults={"user": user, "team_id": scope_id}
    )
    if created:
        logger.info("Assigned role %s to %s in scope %s", name, user.pk, scope_id or "central")
    return assignment


def remove_role(user, name: str, scope=_CURRENT) -> int:
    """Revoke ``name`` from ``user`` in the scope. Returns rows removed."""
    scope_id = _resolve(scope)
    deleted, _ = _assignment_qs(user, scope_id).filter(role__name=name).delete()
    return deleted


@transaction.atomic
def sync_roles(user, names: Iterable[str], scope=_CURRENT) -> list[str]:
    """Make ``names`` the exact set of roles ``user`` holds in the scope."""
    scope_id = _resolve(scope)
    wanted = set(names)
    _assignment_qs(user, scope_id).exclude(role__name__in=wanted).delete()
    for name in sorted(wanted):
        assign_role(user, name, scope=scope_id)
    return sorted(wanted)


def roles_for(user, scope=_CURRENT) -> list[str]:
    scope_id = _resolve(scope)
    return sorted(
        _assignment_qs(user, scope_id).values_list("role__name", flat=True)
    )


def has_role(user, name: str, scope=_CURRENT) -> bool:
    if user is None or getattr(user, "pk", None) is None:
        return False
    return _assignment_qs(user, _resolve(scope)).filter(role__name=name).exists()


def has_permission(user, codename: str, scope=_CURRENT) -> bool:
    """True if any role the user holds in the scope carries ``codename``."""
    if user is None or getattr(user, "pk", None) is None:
        return False
    permissions = _assignment_qs(user, _resolve(scope)).values_list("role__permissions", flat=True)
    return any(codename in (perms or ()) for perms in permissions)
