# Generated manually. Keep in sync with analytics/models.py.

from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Submission",
            fields=[
                ("submission_id", models.CharField(max_length=100, primary_key=True, serialize=False)),
                ("business_desc", models.TextField()),
                ("naics_code", models.CharField(max_length=20)),
                ("state", models.CharField(max_length=10)),
                ("zipcode", models.CharField(blank=True, max_length=20, null=True)),
                ("decision", models.CharField(max_length=50)),
                ("confidence", models.FloatField(default=0)),
                ("reason", models.TextField(blank=True, default="")),
                ("matched_rule", models.CharField(blank=True, default="", max_length=100)),
                ("evaluated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ("-evaluated_at",),
            },
        ),
        migrations.AddIndex(
            model_name="submission",
            index=models.Index(fields=["evaluated_at"], name="idx_submissions_evaluated"),
        ),
    ]
