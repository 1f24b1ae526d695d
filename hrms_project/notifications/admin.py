from django.contrib import admin

from .models import NotificationMarker


@admin.register(NotificationMarker)
class NotificationMarkerAdmin(admin.ModelAdmin):
    """
    Read-only view of the idempotency ledger.
    Markers are written by the dispatcher only.
    """

    # =====================================================
    # LIST VIEW
    # =====================================================
    list_display = (
        "id",
        "record_type",
        "record_id",
        "kind",
        "discriminator",
        "value",
        "sent_at",
    )

    list_filter = (
        "record_type",
        "kind",
        "sent_at",
    )

    search_fields = (
        "record_id",
        "discriminator",
        "value",
    )

    ordering = ("-sent_at",)
    list_per_page = 50

    # =====================================================
    # FIELDSETS (DETAIL VIEW)
    # =====================================================
    fieldsets = (
        ("Record", {
            "fields": ("record_type", "record_id"),
        }),
        ("Marker", {
            "fields": ("kind", "discriminator", "value"),
        }),
        ("Delivery", {
            "fields": ("sent_at",),
        }),
    )

    # =====================================================
    # PERMISSIONS
    # =====================================================
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
