from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from penduduk.models import ActivityLog, Penduduk, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("email", "name", "role", "is_active", "date_joined")
    list_filter = ("role", "is_active", "is_staff")
    search_fields = ("email", "name")
    ordering = ("-date_joined",)
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "role")}),
        (
            "Permissions",
            {
                "fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions"),
                "classes": ("collapse",),
            },
        ),
        ("Dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "name", "role", "password1", "password2"),
            },
        ),
    )


@admin.register(Penduduk)
class PendudukAdmin(admin.ModelAdmin):
    list_display = ("nama", "nik", "jenis_kelamin", "kewarganegaraan", "created_at")
    list_filter = ("jenis_kelamin", "kewarganegaraan", "created_at")
    search_fields = ("nik", "nama", "user__email")
    readonly_fields = ("created_at", "updated_at")
    raw_id_fields = ("user",)


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    """Read-only view of the audit trail."""

    list_display = ("created_at", "action", "description", "user", "subject_type", "subject_id")
    list_filter = ("action", "subject_type", "created_at")
    search_fields = ("description", "user__email")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
