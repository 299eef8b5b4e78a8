"""
Django admin configuration for accounts models.

Related files:
    - models.py: Model definitions
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from accounts.models import RefreshToken, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for email-based users, including soft-deleted ones."""

    list_display = (
        "email",
        "firstname",
        "lastname",
        "email_confirmed",
        "is_verified",
        "is_deleted",
        "is_staff",
        "created_at",
    )
    list_filter = (
        "is_verified",
        "email_confirmed",
        "is_deleted",
        "is_staff",
        "is_superuser",
    )
    search_fields = ("email", "firstname", "lastname")
    ordering = ("-created_at",)

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("firstname", "lastname", "bio")}),
        (
            "Status",
            {
                "fields": (
                    "email_confirmed",
                    "is_verified",
                    "is_deleted",
                    "deleted_at",
                    "is_active",
                    "is_staff",
                    "is_superuser",
                )
            },
        ),
        ("Permissions", {"fields": ("groups", "user_permissions")}),
        ("Important dates", {"fields": ("created_at", "last_login")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "firstname", "password1", "password2"),
            },
        ),
    )

    readonly_fields = ("created_at", "last_login", "deleted_at")

    def get_queryset(self, request):
        return User.all_objects.all()


@admin.register(RefreshToken)
class RefreshTokenAdmin(admin.ModelAdmin):
    list_display = ("user", "is_revoked", "expires_at", "ip_address", "created_at")
    list_filter = ("is_revoked",)
    search_fields = ("user__email", "device_id")
    raw_id_fields = ("user",)
    readonly_fields = ("token_hash", "created_at", "revoked_at")
