from django.contrib import admin
from .models import Membership, Role, RoleAssignment, User


class MembershipInline(admin.TabularInline):
    model = Membership
    extra = 0


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("email", "first_name", "last_name", "type", "is_active")
    list_filter = ("type", "is_active")
    search_fields = ("email", "first_name", "last_name")
    readonly_fields = ("type",)
    inlines = [MembershipInline]


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ("user", "tenant", "role", "status", "created_at")
    list_filter = ("status", "role")
    search_fields = ("user__email", "tenant__id")


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("name", "team_id", "created_at")
    search_fields = ("name", "team_id")


@admin.register(RoleAssignment)
class RoleAssignmentAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "team_id", "created_at")
    search_fields = ("user__email", "role__name", "team_id")
