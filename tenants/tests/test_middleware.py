"""TenantContextMiddleware publishes the tenant for exactly one request."""
import pytest
from django.http import HttpResponse

from tenants import scope
from tenants.middleware import TenantContextMiddleware
from tenants.resolver import TenantResolver


@pytest.fixture
def resolver(acme):
    return TenantResolver(
        lookup={"acme.pagewright.app": acme}.get,
        central_domains=["pagewright.app"],
    )


def _capture(seen):
    def get_response(request):
        seen["scope"] = scope.current_scope()
        seen["tenant_context"] = request.tenant_context
        return HttpResponse("ok")
    return get_response


def test_tenant_domain_sets_context_and_scope(rf, resolver, acme):
    seen = {}
    middleware = TenantContextMiddleware(_capture(seen), resolver=resolver)

    response = middleware(rf.get("/api/dashboard/", HTTP_HOST="acme.pagewright.app"))

    assert response.status_code == 200
    assert seen == {"scope": "acme", "tenant_context": acme}
    assert scope.current_scope() is None


def test_central_domain_has_no_tenant(rf, resolver):
    seen = {}
    middleware = TenantContextMiddleware(_capture(seen), resolver=resolver)

    middleware(rf.get("/api/health/", HTTP_HOST="pagewright.app"))

    assert seen == {"scope": None, "tenant_context": None}


def test_central_request_falls_back_to_explicit_scope(rf, resolver):
    seen = {}
    middleware = TenantContextMiddleware(_capture(seen), resolver=resolver)

    with scope.scope_override("globex"):
        middleware(rf.get("/", HTTP_HOST="pagewright.app"))

    assert seen["scope"] == "globex"


def test_scope_is_reset_when_view_raises(rf, resolver):
    def boom(request):
        raise RuntimeError("view failed")

    middleware = TenantContextMiddleware(boom, resolver=resolver)
    with pytest.raises(RuntimeError):
        middleware(rf.get("/", HTTP_HOST="acme.pagewright.app"))

    assert scope.get_active_tenant() is None


def test_consecutive_requests_do_not_leak_tenant(rf, resolver):
    seen = {}
    middleware = TenantContextMiddleware(_capture(seen), resolver=resolver)

    middleware(rf.get("/", HTTP_HOST="acme.pagewright.app"))
    assert seen["scope"] == "acme"
    middleware(rf.get("/", HTTP_HOST="pagewright.app"))
    assert seen["scope"] is None
