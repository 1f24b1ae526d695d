import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ReviewCycle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150)),
                ("status", models.CharField(choices=[("draft", "Draft"), ("active", "Active"), ("completed", "Completed"), ("cancelled", "Cancelled")], db_index=True, default="active", max_length=20)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("self_review_deadline", models.DateField()),
                ("manager_review_deadline", models.DateField()),
                ("hr_review_deadline", models.DateField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="review_cycles", to="accounts.company")),
            ],
            options={
                "constraints": [models.UniqueConstraint(fields=("company", "name"), name="unique_review_cycle_name_per_company")],
            },
        ),
        migrations.CreateModel(
            name="PerformanceReview",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=[("draft", "Draft"), ("self-review-pending", "Self review pending"), ("self-review-submitted", "Self review submitted"), ("manager-review-pending", "Manager review pending"), ("manager-review-submitted", "Manager review submitted"), ("hr-review-pending", "HR review pending"), ("hr-review-submitted", "HR review submitted"), ("completed", "Completed"), ("cancelled", "Cancelled")], db_index=True, default="draft", max_length=30)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="performance_reviews", to="accounts.company")),
                ("cycle", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to="performance.reviewcycle")),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="performance_reviews", to="accounts.staff")),
                ("manager", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="managed_reviews", to="accounts.staff")),
            ],
            options={
                "ordering": ["id"],
                "indexes": [models.Index(fields=["cycle", "status"], name="review_cycle_status_idx")],
            },
        ),
    ]
