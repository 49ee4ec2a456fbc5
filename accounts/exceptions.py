"""Access-control rejections. Each one ends the request; none is retried."""


class AccessDenied(Exception):
    """Base class for guard rejections."""

    status_code = 403
    code = "access_denied"
    default_message = "Access denied."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self):
        return {"detail": self.code, "message": self.message}


class Unauthenticated(AccessDenied):
    """No principal is attached to the request."""

    status_code = 401
    code = "unauthenticated"
    default_message = "Unauthenticated."


class TenantNotInitialized(AccessDenied):
    """
    A tenant-only route was reached without a resolved tenant.

    This is a routing/deployment misconfiguration, not a client error, so it
    maps to 500 and is logged as an operational anomaly.
    """

    status_code = 500
    code = "tenant_not_initialized"
    default_message = "Tenant context not initialized."


class NoTenantAccess(AccessDenied):
    """Authenticated, but without an active membership in the tenant."""

    code = "no_tenant_access"
    default_message = "Forbidden. You do not have access to this tenant."


class WrongPrincipalType(AccessDenied):
    """The principal's type is excluded from a type-restricted route group."""

    code = "wrong_principal_type"
    default_message = "Forbidden. Superadmin access required."


class MissingPermission(AccessDenied):
    """A member whose roles in the tenant do not carry the required permission."""

    code = "missing_permission"
    default_message = "Forbidden. You do not have permission to perform this action."
