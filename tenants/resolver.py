"""Resolve the tenant a request belongs to from its host."""
import logging

from django.conf import settings
from django_tenants.utils import get_public_schema_name

logger = logging.getLogger(__name__)


def normalize_host(host):
    """Lowercase, drop the port and any trailing dot."""
    if not host:
        return ""
    host = host.strip().lower()
    if host.startswith("["):
        # IPv6 literal, e.g. "[::1]:8000"
        host = host.split("]", 1)[0] + "]"
    else:
        host = host.rsplit(":", 1)[0] if host.count(":") == 1 else host
    return host.rstrip(".")


def _domain_lookup(host):
    from tenants.models import Domain

    domain = Domain.objects.select_related("tenant").filter(domain=host).first()
    return domain.tenant if domain else None


def is_central_tenant(tenant):
    """True for the public tenant that backs the central domains."""
    return tenant.schema_name == get_public_schema_name()


class TenantResolver:
    """
    Map a request host to a Tenant, or None for central domains.

    ``lookup`` receives a normalized host and returns a tenant or None; it
    defaults to the Domain table.
    """

    def __init__(self, lookup=None, central_domains=None):
        self.lookup = lookup or _domain_lookup
        if central_domains is None:
            central_domains = getattr(settings, "CENTRAL_DOMAINS", ())
        self.central_domains = frozenset(d.lower() for d in central_domains)

    def resolve(self, host):
        host = normalize_host(host)
        if not host or host in self.central_domains:
            return None
        return self._tenant_or_none(self.lookup(host), host)

    def from_request(self, request):
        """
        Reuse the tenant django-tenants already attached, if any.

        The public tenant is what django-tenants falls back to for unknown
        hosts, so it maps to None here.
        """
        tenant = getattr(request, "tenant", None)
        if tenant is None:
            return self.resolve(request.get_host())
        host = normalize_host(request.get_host())
        if host in self.central_domains:
            return None
        return self._tenant_or_none(tenant, host)

    def _tenant_or_none(self, tenant, host):
        if tenant is None or is_central_tenant(tenant):
            return None
        if not tenant.is_active:
            logger.info("Host %s maps to inactive tenant %s", host, tenant.pk)
            return None
        return tenant
