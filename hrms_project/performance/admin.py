from django.contrib import admin

from .models import PerformanceReview, ReviewCycle


@admin.register(ReviewCycle)
class ReviewCycleAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "company",
        "status",
        "self_review_deadline",
        "manager_review_deadline",
        "hr_review_deadline",
        "end_date",
    )

    list_filter = ("status", "company")
    search_fields = ("name",)


@admin.register(PerformanceReview)
class PerformanceReviewAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "cycle",
        "employee",
        "manager",
        "status",
        "updated_at",
    )

    list_filter = ("status", "cycle")
    search_fields = ("employee__name", "cycle__name")
    raw_id_fields = ("employee", "manager")
