"""
Management command to provision a new tenant.

Usage:
    python manage.py provision_tenant \\
        --name "Acme Corp" \\
        --id acme \\
        --domain acme.pagewright.app \\
        --admin-email admin@acme.com \\
        --admin-password "SecureP@ss123"

This will:
1. Create the tenant record + Postgres schema (migrations run on creation)
2. Create the primary Domain record
3. Create (or reuse) the admin user in the shared schema
4. Give the admin an active owner membership and the tenant's "owner" role
"""
import getpass

from django.core.management.base import BaseCommand, CommandError

from accounts.models import Membership, User
from tenants import services


class Command(BaseCommand):
    help = "Provision a new tenant with schema, domain, and initial admin user."

    def add_arguments(self, parser):
        parser.add_argument("--name", required=True, help="Tenant display name")
        parser.add_argument("--id", dest="tenant_id", help="Tenant slug (derived from name if omitted)")
        parser.add_argument("--domain", required=True, help="Full domain (e.g. acme.pagewright.app)")
        parser.add_argument("--admin-email", required=True, help="Initial admin user email")
        parser.add_argument("--admin-password", required=False, help="Admin password (prompted if omitted)")
        parser.add_argument("--admin-first-name", default="Admin", help="Admin first name")
        parser.add_argument("--admin-last-name", default="User", help="Admin last name")

    def handle(self, *args, **options):
        name = options["name"].strip()
        domain_str = options["domain"].lower().strip()
        admin_email = options["admin_email"].lower().strip()

        user = User.objects.filter(email=admin_email).first()
        if user is None:
            admin_password = options.get("admin_password")
            if not admin_password:
                admin_password = getpass.getpass("Enter admin password: ")
                confirm = getpass.getpass("Confirm admin password: ")
                if admin_password != confirm:
                    raise CommandError("Passwords do not match.")

        self.stdout.write(f"Creating tenant '{name}'...")
        try:
            tenant = services.create_tenant(name, domain_str, tenant_id=options.get("tenant_id"))
        except (services.TenantExists, ValueError) as exc:
            raise CommandError(str(exc))
        self.stdout.write(self.style.SUCCESS(
            f"Domain {domain_str} → tenant '{tenant.pk}' (schema '{tenant.schema_name}') created."
        ))

        if user is None:
            user = User.objects.create_user(
                email=admin_email,
                password=admin_password,
                first_name=options["admin_first_name"],
                last_name=options["admin_last_name"],
                type=User.Type.TENANT_USER,
            )
            self.stdout.write(self.style.SUCCESS(f"Admin user {admin_email} created."))
        else:
            self.stdout.write(f"Reusing existing user {admin_email}.")

        services.add_user_to_tenant(
            tenant, user, role=Membership.Role.OWNER, status=Membership.Status.ACTIVE
        )

        self.stdout.write(self.style.SUCCESS(
            f"{admin_email} is the owner of '{name}'.\n"
            f"\n"
            f"NEXT STEPS:\n"
            f"  1. DNS: point {domain_str} at your server\n"
            f"  2. SSL: terminate TLS at the proxy in front of gunicorn\n"
        ))
