"""Principals, tenant memberships and team-scoped roles."""
import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.db.models import Q


class UserManager(BaseUserManager):
    """Custom manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Email is required")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("type", User.Type.SUPERADMIN)
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Platform principal. ``type`` is a coarse, immutable discriminator."""

    class Type(models.TextChoices):
        SUPERADMIN = "superadmin", "Superadmin"
        TENANT_USER = "tenant_user", "Tenant User"
        CUSTOMER = "customer", "Customer"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    type = models.CharField(
        max_length=20, choices=Type.choices, default=Type.TENANT_USER, editable=False
    )
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    date_joined = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["first_name", "last_name"]

    class Meta:
        app_label = "accounts"

    def __str__(self):
        return self.email

    @property
    def is_superadmin_type(self):
        return self.type == self.Type.SUPERADMIN

    @property
    def display_name(self):
        if self.first_name:
            return f"{self.first_name} {self.last_name}".strip()
        return self.email


class Membership(models.Model):
    """Binds a user to a tenant. Only ``status=active`` grants access."""

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        INVITED = "invited", "Invited"
        SUSPENDED = "suspended", "Suspended"

    class Role(models.TextChoices):
        OWNER = "owner", "Owner"
        ADMIN = "admin", "Admin"
        MEMBER = "member", "Member"

    id = models.BigAutoField(primary_key=True)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="memberships")
    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="memberships")
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.MEMBER)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "accounts"
        db_table = "tenant_membership"
        constraints = [
            models.UniqueConstraint(fields=["user", "tenant"], name="uniq_membership_user_tenant"),
        ]
        indexes = [
            models.Index(fields=["tenant", "status"], name="idx_membership_tenant_status"),
        ]

    def __str__(self):
        return f"{self.user} @ {self.tenant_id} ({self.status})"

    @property
    def is_active(self):
        return self.status == self.Status.ACTIVE


class Role(models.Model):
    """
    A named bundle of permission codenames within one team.

    ``team_id`` is a tenant id, or NULL for central roles; the same name may
    exist once per team.
    """
    id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=100)
    team_id = models.CharField(max_length=63, null=True, blank=True, db_index=True)
    permissions = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "accounts"
        db_table = "rbac_role"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["name", "team_id"], name="uniq_role_name_team",
            ),
            models.UniqueConstraint(
                fields=["name"], condition=Q(team_id__isnull=True), name="uniq_role_name_central",
            ),
        ]

    def __str__(self):
        return f"{self.name} [{self.team_id or 'central'}]"


class RoleAssignment(models.Model):
    """A user holds a role within one team (NULL = central scope)."""
    id = models.BigAutoField(primary_key=True)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="role_assignments")
    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name="assignments")
    team_id = models.CharField(max_length=63, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "accounts"
        db_table = "rbac_role_assignment"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "role", "team_id"], name="uniq_assignment_user_role_team",
            ),
            models.UniqueConstraint(
                fields=["user", "role"], condition=Q(team_id__isnull=True),
                name="uniq_assignment_user_role_central",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "team_id"], name="idx_assignment_user_team"),
        ]

    def __str__(self):
        return f"{self.user} → {self.role.name} [{self.team_id or 'central'}]"
