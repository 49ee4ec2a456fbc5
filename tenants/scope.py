"""
Permission scope ("team id") resolution using contextvars.

Role and permission assignments are partitioned per tenant: the same role
name can exist independently in every tenant. The RBAC layer asks this
module which team id applies to the current execution context.

Two values are tracked:

- the *active tenant*, published by ``TenantContextMiddleware`` for the
  lifetime of one request and always reset afterwards;
- an *explicit override*, set by code that runs outside a request
  (management commands, queued jobs) where no tenant was resolved.

Read rule: an active tenant always wins. Without one, the explicit override
applies, and ``None`` means the central (global) scope.

Usage:
    # In a management command operating centrally
    with scope_override(None):
        assign_role(user, "superadmin")

    # In a job working for one tenant
    with scope_override(tenant):
        assign_role(user, "editor")
"""
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Optional, Union

ScopeId = Union[str, int]

# None means no tenant was resolved for this execution context.
_active_tenant: ContextVar[Optional[Any]] = ContextVar("active_tenant", default=None)

# None means central scope.
_explicit_scope: ContextVar[Optional[ScopeId]] = ContextVar("explicit_scope", default=None)


def _to_scope_id(value) -> Optional[ScopeId]:
    """Accept a raw scope id or an entity and return the id."""
    if value is None or isinstance(value, (str, int)):
        return value
    pk = getattr(value, "pk", None)
    if pk is None:
        raise TypeError(f"Cannot derive a permission scope from {value!r}")
    return pk


def get_active_tenant():
    """Return the tenant published for the current request, or None."""
    return _active_tenant.get()


def current_scope() -> Optional[ScopeId]:
    """
    Return the team id that scopes role/permission queries right now.

    Never cached: in pooled workers the active tenant differs from one
    request to the next.
    """
    tenant = _active_tenant.get()
    if tenant is not None:
        return tenant.pk
    return _explicit_scope.get()


def set_scope(value) -> None:
    """
    Set the explicit scope override.

    Only consulted when no tenant is active. Accepts a scope id, an entity
    (its ``pk`` is used) or None for the central scope. Callers that set this
    outside ``scope_override`` must call ``clear_scope()`` when done.
    """
    _explicit_scope.set(_to_scope_id(value))


def clear_scope() -> None:
    """Drop the explicit override, returning to the central scope."""
    _explicit_scope.set(None)


@contextmanager
def scope_override(value):
    """Set the explicit override for the duration of a block."""
    token = _explicit_scope.set(_to_scope_id(value))
    try:
        yield current_scope()
    finally:
        _explicit_scope.reset(token)


@contextmanager
def active_tenant(tenant):
    """
    Publish ``tenant`` (or None) as the active tenant for a block.

    Used by the request middleware; the previous value is restored even if
    the block raises.
    """
    token = _active_tenant.set(tenant)
    try:
        yield tenant
    finally:
        _active_tenant.reset(token)
