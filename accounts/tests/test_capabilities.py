"""ORM-backed capability checks used by the guards."""
import pytest
from django.db import IntegrityError, transaction

from accounts import rbac
from accounts.capabilities import ModelCapabilities, get_capabilities
from accounts.models import Membership


def test_default_capabilities_are_model_backed():
    assert isinstance(get_capabilities(), ModelCapabilities)


@pytest.mark.django_db
class TestActiveMembership:
    @pytest.fixture
    def tenants(self, tenant_factory):
        return tenant_factory("acme"), tenant_factory("globex")

    def test_only_active_rows_count(self, tenants, user_factory):
        acme, _ = tenants
        user = user_factory()
        membership = Membership.objects.create(user=user, tenant=acme, status=Membership.Status.SUSPENDED)
        caps = ModelCapabilities()

        assert caps.active_membership(user, acme) is None

        membership.status = Membership.Status.ACTIVE
        membership.save()
        assert caps.active_membership(user, acme) == membership

    @pytest.mark.parametrize("status", [Membership.Status.INVITED, Membership.Status.SUSPENDED])
    def test_non_active_statuses_do_not_authorize(self, tenants, user_factory, status):
        acme, _ = tenants
        user = user_factory()
        Membership.objects.create(user=user, tenant=acme, status=status)
        assert ModelCapabilities().active_membership(user, acme) is None

    def test_membership_is_per_tenant(self, tenants, user_factory):
        acme, globex = tenants
        user = user_factory()
        Membership.objects.create(user=user, tenant=globex)
        assert ModelCapabilities().active_membership(user, acme) is None

    def test_duplicate_memberships_are_rejected(self, tenants, user_factory):
        acme, _ = tenants
        user = user_factory()
        Membership.objects.create(user=user, tenant=acme)
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Membership.objects.create(user=user, tenant=acme, status=Membership.Status.INVITED)


@pytest.mark.django_db
def test_role_and_permission_checks_use_the_given_scope(user_factory):
    user = user_factory()
    rbac.assign_role(user, "superadmin", scope=None)
    rbac.get_or_create_role("editor", ["media.view"], scope="acme")
    rbac.assign_role(user, "editor", scope="acme")
    caps = ModelCapabilities()

    assert caps.has_role(user, "superadmin", None)
    assert not caps.has_role(user, "superadmin", "acme")
    assert caps.has_permission(user, "media.view", "acme")
    assert not caps.has_permission(user, "media.view", None)
