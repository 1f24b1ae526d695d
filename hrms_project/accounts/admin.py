from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Company, Staff, User


# ============================================================
# USER ADMIN
# ============================================================

@admin.register(User)
class UserAdmin(BaseUserAdmin):
    ordering = ("username",)

    list_display = (
        "username",
        "email",
        "first_name",
        "last_name",
        "role",
        "company",
        "is_active",
    )

    list_filter = (
        "role",
        "company",
        "is_active",
    )

    search_fields = (
        "username",
        "email",
        "first_name",
        "last_name",
    )

    fieldsets = BaseUserAdmin.fieldsets + (
        ("Organisation", {
            "fields": (
                "role",
                "company",
            )
        }),
    )


# ============================================================
# TENANTS
# ============================================================

@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)


# ============================================================
# STAFF
# ============================================================

@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = (
        "employee_code",
        "name",
        "company",
        "manager",
        "status",
        "has_push_token",
    )

    list_filter = ("company", "status")

    search_fields = (
        "employee_code",
        "name",
        "user__username",
    )

    raw_id_fields = ("user", "manager")

    @admin.display(boolean=True, description="Push token")
    def has_push_token(self, obj):
        return obj.has_delivery_token
