import django.db.models.deletion
from django.db import migrations, models


def approval_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("status", models.CharField(db_index=True, default="Pending", max_length=20)),
        ("approved_at", models.DateTimeField(blank=True, null=True)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
        ("company", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="+", to="accounts.company")),
        ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="+", to="accounts.staff")),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="LeaveRequest",
            fields=approval_fields() + [
                ("leave_type", models.CharField(choices=[("Sick", "Sick"), ("Casual", "Casual"), ("Earned", "Earned"), ("Unpaid", "Unpaid"), ("Maternity", "Maternity"), ("Paternity", "Paternity"), ("Other", "Other")], max_length=20)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("reason", models.TextField(blank=True)),
            ],
            options={"ordering": ["-created_at"], "abstract": False},
        ),
        migrations.CreateModel(
            name="ExpenseClaim",
            fields=approval_fields() + [
                ("expense_type", models.CharField(default="Expense", max_length=50)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("description", models.TextField(blank=True)),
            ],
            options={"ordering": ["-created_at"], "abstract": False},
        ),
        migrations.CreateModel(
            name="Reimbursement",
            fields=approval_fields() + [
                ("reimbursement_type", models.CharField(choices=[("Travel", "Travel"), ("Meal", "Meal"), ("Accommodation", "Accommodation"), ("Food", "Food"), ("Other", "Other")], max_length=20)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("date", models.DateField()),
                ("description", models.TextField(blank=True)),
            ],
            options={"ordering": ["-created_at"], "abstract": False},
        ),
        migrations.CreateModel(
            name="PayslipRequest",
            fields=approval_fields() + [
                ("month", models.PositiveSmallIntegerField()),
                ("year", models.PositiveSmallIntegerField()),
            ],
            options={"ordering": ["-created_at"], "abstract": False},
        ),
        migrations.CreateModel(
            name="Loan",
            fields=approval_fields() + [
                ("loan_type", models.CharField(choices=[("Personal", "Personal"), ("Advance", "Advance"), ("Emergency", "Emergency")], max_length=20)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("tenure_months", models.PositiveSmallIntegerField(default=1)),
            ],
            options={"ordering": ["-created_at"], "abstract": False},
        ),
        migrations.CreateModel(
            name="Attendance",
            fields=[
                field for field in approval_fields() if field[0] != "status"
            ] + [
                ("status", models.CharField(choices=[("Present", "Present"), ("Absent", "Absent"), ("Half Day", "Half Day"), ("On Leave", "On Leave"), ("Not Marked", "Not Marked"), ("Pending", "Pending"), ("Approved", "Approved"), ("Rejected", "Rejected")], db_index=True, default="Not Marked", max_length=20)),
                ("date", models.DateField(db_index=True)),
                ("punch_in", models.DateTimeField(blank=True, null=True)),
                ("punch_out", models.DateTimeField(blank=True, null=True)),
                ("remarks", models.TextField(blank=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [models.Index(fields=["employee", "date"], name="attendance_employee_date_idx")],
            },
        ),
    ]
