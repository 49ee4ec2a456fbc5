"""Central tenant provisioning and membership actions."""
import logging

from django.db import transaction
from django.utils.text import slugify

from accounts import rbac
from accounts.models import Membership
from tenants.models import Domain, Tenant

logger = logging.getLogger(__name__)

# Postgres identifier limit; the id doubles as the schema name.
MAX_TENANT_ID_LENGTH = 63

_VIEW = ["pages.view", "navigation.view", "media.view", "view users", "view settings"]

# Permissions carried by the tenant-scoped role matching each membership role.
TENANT_ROLE_PERMISSIONS = {
    Membership.Role.OWNER: _VIEW + [
        "pages.create", "pages.edit", "pages.delete",
        "navigation.create", "navigation.edit", "navigation.delete",
        "media.manage", "manage users", "manage settings", "view activity logs",
    ],
    Membership.Role.ADMIN: _VIEW + [
        "pages.create", "pages.edit", "pages.delete",
        "navigation.create", "navigation.edit", "navigation.delete",
        "media.manage", "manage users", "view activity logs",
    ],
    Membership.Role.MEMBER: _VIEW + ["pages.create", "pages.edit", "media.manage"],
}


class TenantExists(Exception):
    pass


def tenant_id_for(name, tenant_id=None):
    """
    Slug used as the tenant id and (with ``_`` for ``-``) as its schema name.

    An explicit id must fit as given; one derived from the name is cut down
    to the identifier limit.
    """
    if tenant_id:
        slug = slugify(tenant_id)
        if len(slug) > MAX_TENANT_ID_LENGTH:
            raise ValueError(f"Tenant id cannot be longer than {MAX_TENANT_ID_LENGTH} characters")
    else:
        slug = slugify(name)[:MAX_TENANT_ID_LENGTH].strip("-_")
    if not slug:
        raise ValueError("Tenant id cannot be empty")
    if slug.startswith("pg_"):
        raise ValueError("Tenant id cannot start with 'pg_'")
    return slug


def create_tenant(name, domain, tenant_id=None):
    """
    Create a tenant, its schema and its primary domain.

    The id defaults to the slugified name.
    """
    tenant_id = tenant_id_for(name, tenant_id)
    schema_name = tenant_id.replace("-", "_")
    if Tenant.objects.filter(pk=tenant_id).exists():
        raise TenantExists(f"Tenant with id '{tenant_id}' already exists.")
    if Tenant.objects.filter(schema_name=schema_name).exists():
        raise TenantExists(f"Schema '{schema_name}' is already used by another tenant.")
    domain = domain.lower().strip()
    if Domain.objects.filter(domain=domain).exists():
        raise TenantExists(f"Domain '{domain}' is already mapped to a tenant.")

    # Schema creation happens on save (auto_create_schema).
    tenant = Tenant(id=tenant_id, name=name.strip(), schema_name=schema_name)
    tenant.save()
    Domain.objects.create(domain=domain, tenant=tenant, is_primary=True)
    logger.info("Provisioned tenant %s on %s", tenant.pk, domain)
    return tenant


def _grant_membership_role(tenant, user, role, previous=None):
    if previous and previous != role:
        rbac.remove_role(user, previous, scope=tenant.pk)
    rbac.get_or_create_role(role, TENANT_ROLE_PERMISSIONS.get(role, ()), scope=tenant.pk)
    rbac.assign_role(user, role, scope=tenant.pk)


@transaction.atomic
def add_user_to_tenant(tenant, user, role=None, status=None):
    """
    Upsert the membership of ``user`` in ``tenant``.

    An existing membership keeps any field not given; a new one defaults to
    an active member. The tenant-scoped role of the same name follows the
    membership role.
    """
    membership = (
        Membership.objects.select_for_update()
        .filter(tenant=tenant, user=user)
        .order_by("created_at", "id")
        .first()
    )
    if membership is not None:
        previous = membership.role
        membership.role = role or membership.role
        membership.status = status or membership.status
        membership.save(update_fields=["role", "status", "updated_at"])
        _grant_membership_role(tenant, user, membership.role, previous=previous)
        return membership

    membership = Membership.objects.create(
        tenant=tenant,
        user=user,
        role=role or Membership.Role.MEMBER,
        status=status or Membership.Status.ACTIVE,
    )
    _grant_membership_role(tenant, user, membership.role)
    return membership


@transaction.atomic
def remove_user_from_tenant(tenant, user):
    """Delete the membership and the user's roles in the tenant. Returns True if one existed."""
    deleted, _ = Membership.objects.filter(tenant=tenant, user=user).delete()
    if deleted:
        rbac.sync_roles(user, [], scope=tenant.pk)
    return deleted > 0
