from django.contrib import admin

from .models import (
    Attendance,
    ExpenseClaim,
    LeaveRequest,
    Loan,
    PayslipRequest,
    Reimbursement,
)


class ApprovalRequestAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "employee",
        "company",
        "status",
        "approved_at",
        "created_at",
    )

    list_filter = ("status", "company")
    search_fields = ("employee__name", "employee__employee_code")
    raw_id_fields = ("employee",)
    ordering = ("-created_at",)
    list_per_page = 25


admin.site.register(LeaveRequest, ApprovalRequestAdmin)
admin.site.register(ExpenseClaim, ApprovalRequestAdmin)
admin.site.register(Reimbursement, ApprovalRequestAdmin)
admin.site.register(PayslipRequest, ApprovalRequestAdmin)
admin.site.register(Loan, ApprovalRequestAdmin)


@admin.register(Attendance)
class AttendanceAdmin(ApprovalRequestAdmin):
    list_display = (
        "id",
        "employee",
        "date",
        "status",
        "approved_at",
        "updated_at",
    )

    list_filter = ("status", "date")
