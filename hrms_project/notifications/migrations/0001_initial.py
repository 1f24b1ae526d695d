import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="NotificationMarker",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("record_type", models.CharField(choices=[("leave", "Leave"), ("expense", "Expense"), ("reimbursement", "Reimbursement"), ("payslip", "Payslip"), ("loan", "Loan"), ("attendance", "Attendance"), ("performance_review", "Performance review"), ("review_cycle", "Review cycle")], max_length=30)),
                ("record_id", models.PositiveBigIntegerField()),
                ("kind", models.CharField(choices=[("approved", "Approved"), ("rejected", "Rejected"), ("status_assigned", "Status assigned"), ("self_deadline", "Self review deadline"), ("manager_deadline", "Manager review deadline"), ("hr_deadline", "HR review deadline"), ("review_status", "Review status")], max_length=30)),
                ("discriminator", models.CharField(blank=True, default="", help_text="Threshold day for threshold-set markers, empty otherwise", max_length=50)),
                ("value", models.CharField(blank=True, default="", help_text="Last notified value for last-notified-value markers", max_length=50)),
                ("sent_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "constraints": [models.UniqueConstraint(fields=("record_type", "record_id", "kind", "discriminator"), name="unique_notification_marker")],
                "indexes": [models.Index(fields=["record_type", "kind", "record_id"], name="marker_lookup_idx")],
            },
        ),
    ]
