"""
Shared pytest fixtures.

The access-control tests run without a database: principals, tenants and the
capability checker are replaced with small in-memory fakes.
"""
import uuid
from dataclasses import dataclass, field

import pytest
from django.contrib.auth.models import AnonymousUser

from tenants import scope


@dataclass
class FakeTenant:
    pk: str
    name: str = ""
    schema_name: str = ""
    is_active: bool = True

    def __post_init__(self):
        self.name = self.name or self.pk.title()
        self.schema_name = self.schema_name or self.pk.replace("-", "_")


@dataclass
class FakeUser:
    type: str = "tenant_user"
    pk: uuid.UUID = field(default_factory=uuid.uuid4)
    email: str = "user@example.com"
    is_authenticated: bool = True


@dataclass
class FakeMembership:
    user_id: uuid.UUID
    tenant_id: str
    status: str = "active"
    role: str = "member"


class FakeCapabilities:
    """In-memory stand-in for ``accounts.capabilities.ModelCapabilities``."""

    def __init__(self):
        self.roles = set()
        self.permissions = set()
        self.memberships = []
        self.role_checks = []
        self.permission_checks = []

    def grant(self, user, role, scope=None):
        self.roles.add((user.pk, role, scope))

    def grant_permission(self, user, codename, scope):
        self.permissions.add((user.pk, codename, scope))

    def add_membership(self, user, tenant, status="active", role="member"):
        membership = FakeMembership(user_id=user.pk, tenant_id=tenant.pk, status=status, role=role)
        self.memberships.append(membership)
        return membership

    def has_role(self, principal, role, scope):
        self.role_checks.append((principal.pk, role, scope))
        return (principal.pk, role, scope) in self.roles

    def has_permission(self, principal, codename, scope):
        self.permission_checks.append((principal.pk, codename, scope))
        return (principal.pk, codename, scope) in self.permissions

    def active_membership(self, principal, tenant):
        for membership in self.memberships:
            if (membership.user_id == principal.pk and membership.tenant_id == tenant.pk
                    and membership.status == "active"):
                return membership
        return None


@pytest.fixture
def make_principal():
    """Build in-memory principals, e.g. ``make_principal(type="customer")``."""
    return FakeUser


@pytest.fixture
def make_tenant_stub():
    """Build in-memory tenants, e.g. ``make_tenant_stub("acme")``."""
    return FakeTenant


@pytest.fixture
def make_capabilities():
    return FakeCapabilities


@pytest.fixture
def acme():
    return FakeTenant(pk="acme", name="Acme Corp")


@pytest.fixture
def globex():
    return FakeTenant(pk="globex", name="Globex")


@pytest.fixture
def public_tenant():
    return FakeTenant(pk="public", name="Central", schema_name="public")


@pytest.fixture
def user():
    return FakeUser()


@pytest.fixture
def superadmin():
    return FakeUser(type="superadmin", email="ops@pagewright.app")


@pytest.fixture
def anonymous():
    return AnonymousUser()


@pytest.fixture
def capabilities():
    return FakeCapabilities()


@pytest.fixture(autouse=True)
def _clean_scope():
    """Make sure no test leaks a scope override into the next one."""
    scope.clear_scope()
    yield
    scope.clear_scope()


# ---------------------------------------------------------------------------
# Database-backed factories
# ---------------------------------------------------------------------------
@pytest.fixture
def tenant_factory(db):
    """Create ``Tenant`` rows in the public schema without creating their schemas."""
    from tenants.models import Tenant

    def create(tenant_id, name=None, **fields):
        tenant = Tenant(id=tenant_id, name=name or tenant_id.title(), **fields)
        tenant.auto_create_schema = False
        tenant.save()
        return tenant
    return create


@pytest.fixture
def user_factory(db):
    from accounts.models import User

    def create(email="member@example.com", **fields):
        return User.objects.create_user(email=email, password="s3cret-pass", **fields)
    return create


@pytest.fixture
def no_schema_creation(monkeypatch):
    """Let ``create_tenant`` save tenants without running schema migrations."""
    from tenants.models import Tenant

    monkeypatch.setattr(Tenant, "auto_create_schema", False)
