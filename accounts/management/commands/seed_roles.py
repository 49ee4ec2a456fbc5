"""
Seed the central role/permission matrix.

Usage:
    python manage.py seed_roles [--superadmin-email ops@pagewright.app]

Roles created here live in the central scope (team NULL). Tenants define
their own roles, scoped to their tenant id.
"""
from django.core.management.base import BaseCommand, CommandError

from accounts import rbac
from accounts.models import User
from tenants.scope import scope_override

PERMISSIONS = [
    "pages.create", "pages.edit", "pages.delete", "pages.view",
    "navigation.create", "navigation.edit", "navigation.delete", "navigation.view",
    "themes.view", "themes.manage", "themes.activate",
    "layouts.view", "layouts.manage",
    "templates.view", "templates.manage",
    "media.view", "media.manage",
    "view users", "manage users",
    "view tenants", "manage tenants",
    "manage roles",
    "view activity logs",
    "view settings", "manage settings",
    "view analytics", "view dashboard stats",
]

_VIEW = [
    "pages.view", "navigation.view", "themes.view", "layouts.view", "templates.view", "media.view",
    "view users", "view tenants",
    "view analytics", "view dashboard stats",
]

CENTRAL_ROLES = {
    "superadmin": PERMISSIONS,
    "admin": PERMISSIONS,
    "support": _VIEW + ["view activity logs"],
    "viewer": _VIEW,
}


class Command(BaseCommand):
    help = "Create central roles and optionally grant the superadmin role."

    def add_arguments(self, parser):
        parser.add_argument("--superadmin-email", help="Grant the superadmin role to this user")

    def handle(self, *args, **options):
        with scope_override(None):
            for name, permissions in CENTRAL_ROLES.items():
                rbac.get_or_create_role(name, permissions)
                self.stdout.write(f"Role '{name}': {len(permissions)} permissions")

            email = options.get("superadmin_email")
            if email:
                user = User.objects.filter(email=email.lower().strip()).first()
                if user is None:
                    raise CommandError(f"No user with email {email}.")
                if not user.is_superadmin_type:
                    raise CommandError(
                        f"{email} is not a superadmin-type user; the role alone grants no bypass."
                    )
                rbac.assign_role(user, "superadmin")
                self.stdout.write(self.style.SUCCESS(f"Granted superadmin to {email}."))
