# Generated manually. Keep in sync with carriers/models.py.

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Carrier",
            fields=[
                ("carrier_id", models.AutoField(primary_key=True, serialize=False)),
                ("legal_name", models.CharField(max_length=300)),
                ("display_name", models.CharField(max_length=200)),
                ("country", models.CharField(blank=True, max_length=2, null=True)),
                ("headquarters_address", models.TextField(blank=True, null=True)),
                ("primary_contact_name", models.CharField(blank=True, max_length=200, null=True)),
                ("primary_contact_email", models.CharField(blank=True, max_length=255, null=True)),
                ("primary_contact_phone", models.CharField(blank=True, max_length=50, null=True)),
                ("technical_contact_name", models.CharField(blank=True, max_length=200, null=True)),
                ("technical_contact_email", models.CharField(blank=True, max_length=255, null=True)),
                ("auth_method", models.CharField(blank=True, max_length=50, null=True)),
                ("sso_metadata_url", models.CharField(blank=True, max_length=1000, null=True)),
                ("api_client_id", models.CharField(blank=True, max_length=200, null=True)),
                ("api_secret_key_ref", models.CharField(blank=True, max_length=200, null=True)),
                ("data_residency", models.CharField(blank=True, max_length=100, null=True)),
                ("products_offered", models.TextField(blank=True, null=True)),
                ("rule_upload_allowed", models.BooleanField(default=False)),
                ("rule_upload_method", models.CharField(blank=True, max_length=50, null=True)),
                ("rule_approval_required", models.BooleanField(default=True)),
                ("default_rule_versioning", models.BooleanField(default=True)),
                ("use_naics_enrichment", models.BooleanField(default=False)),
                ("preferred_naics_source", models.CharField(blank=True, max_length=50, null=True)),
                ("pas_webhook_url", models.CharField(blank=True, max_length=1000, null=True)),
                ("webhook_auth_type", models.CharField(blank=True, max_length=50, null=True)),
                ("webhook_secret_ref", models.CharField(blank=True, max_length=200, null=True)),
                ("contract_ref", models.CharField(blank=True, max_length=200, null=True)),
                ("billing_contact_email", models.CharField(blank=True, max_length=255, null=True)),
                ("retention_policy_days", models.IntegerField(blank=True, null=True)),
                ("created_by", models.CharField(blank=True, max_length=200, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(blank=True, null=True)),
                ("additional_json", models.TextField(blank=True, null=True)),
            ],
            options={
                "verbose_name": "Carrier",
                "verbose_name_plural": "Carriers",
                "ordering": ("carrier_id",),
            },
        ),
        migrations.AddIndex(
            model_name="carrier",
            index=models.Index(fields=["display_name"], name="idx_carriers_display_name"),
        ),
        migrations.AddIndex(
            model_name="carrier",
            index=models.Index(fields=["primary_contact_email"], name="idx_carriers_primary_email"),
        ),
    ]
