"""Tenant context middleware – publishes the resolved tenant for one request."""
from tenants import scope
from tenants.resolver import TenantResolver


class TenantContextMiddleware:
    """
    Resolve the request's tenant and make it ambient for the request.

    Runs right after django-tenants' ``TenantMainMiddleware``. Sets
    ``request.tenant_context`` to the tenant, or None on central domains, and
    publishes it to the permission scope resolver. The scope is reset when
    the response is produced, so a pooled worker never carries one request's
    tenant into the next.
    """

    def __init__(self, get_response, resolver=None):
        self.get_response = get_response
        self.resolver = resolver or TenantResolver()

    def __call__(self, request):
        tenant = self.resolver.from_request(request)
        request.tenant_context = tenant
        with scope.active_tenant(tenant):
            return self.get_response(request)
