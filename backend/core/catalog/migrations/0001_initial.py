# Generated manually. Keep in sync with catalog/models.py.

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import catalog.models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("carriers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ProductType",
            fields=[
                ("product_type_id", models.AutoField(primary_key=True, serialize=False)),
                ("type_name", models.CharField(max_length=100, unique=True)),
                ("description", models.CharField(blank=True, max_length=500, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("display_order", models.IntegerField(default=0)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ("display_order", "type_name"),
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.CharField(default=catalog.models.new_product_id, editable=False, max_length=50, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("description", models.CharField(blank=True, max_length=1000, null=True)),
                ("carrier_name", models.CharField(max_length=200)),
                ("per_occurrence", models.IntegerField(default=1000000)),
                ("aggregate", models.IntegerField(default=2000000)),
                ("min_annual_revenue", models.IntegerField(default=0)),
                ("max_annual_revenue", models.IntegerField(default=5000000)),
                ("naics_allowed", models.TextField()),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("carrier", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="products", to="carriers.carrier")),
                ("product_type", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="products", to="catalog.producttype")),
            ],
            options={
                "ordering": ("name", "id"),
            },
        ),
        migrations.CreateModel(
            name="Rule",
            fields=[
                ("rule_id", models.CharField(default=catalog.models.new_rule_id, max_length=100, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, null=True)),
                ("business_type", models.CharField(blank=True, max_length=100, null=True)),
                ("naics_codes", models.CharField(blank=True, max_length=1000, null=True)),
                ("states", models.TextField(blank=True, null=True)),
                ("carrier_name", models.CharField(blank=True, max_length=200, null=True)),
                ("product_name", models.CharField(blank=True, max_length=200, null=True)),
                ("restrictions", models.TextField(blank=True, null=True)),
                ("priority", models.CharField(blank=True, max_length=50, null=True)),
                ("outcome", models.CharField(blank=True, max_length=50, null=True)),
                ("rule_version", models.CharField(blank=True, max_length=50, null=True)),
                ("status", models.CharField(blank=True, max_length=50, null=True)),
                ("effective_from", models.DateTimeField(blank=True, null=True)),
                ("effective_to", models.DateTimeField(blank=True, null=True)),
                ("min_revenue", models.DecimalField(blank=True, decimal_places=2, max_digits=18, null=True)),
                ("max_revenue", models.DecimalField(blank=True, decimal_places=2, max_digits=18, null=True)),
                ("min_years_in_business", models.IntegerField(blank=True, null=True)),
                ("max_years_in_business", models.IntegerField(blank=True, null=True)),
                ("prior_claims_allowed", models.IntegerField(blank=True, null=True)),
                ("prior_claims_threshold", models.IntegerField(blank=True, null=True)),
                ("conditions", models.TextField(blank=True, null=True)),
                ("contact_email", models.CharField(blank=True, max_length=255, null=True)),
                ("created_by", models.CharField(blank=True, max_length=100, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(blank=True, null=True)),
                ("additional_json", models.TextField(blank=True, null=True)),
                ("carrier", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="rules", to="carriers.carrier")),
                ("product", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="rules", to="catalog.product")),
            ],
            options={
                "ordering": ("title", "rule_id"),
            },
        ),
        migrations.AddIndex(
            model_name="product",
            index=models.Index(fields=["carrier"], name="idx_products_carrier"),
        ),
        migrations.AddIndex(
            model_name="product",
            index=models.Index(fields=["carrier_name"], name="idx_products_carrier_name"),
        ),
        migrations.AddIndex(
            model_name="rule",
            index=models.Index(fields=["carrier_name", "product_name"], name="idx_rules_carrier_product"),
        ),
        migrations.AddIndex(
            model_name="rule",
            index=models.Index(fields=["naics_codes"], name="idx_rules_naics"),
        ),
        migrations.AddIndex(
            model_name="rule",
            index=models.Index(fields=["status", "effective_from", "effective_to"], name="idx_rules_status_effective"),
        ),
        migrations.AddIndex(
            model_name="rule",
            index=models.Index(fields=["carrier"], name="idx_rules_carrier"),
        ),
        migrations.AddIndex(
            model_name="rule",
            index=models.Index(fields=["product"], name="idx_rules_product"),
        ),
    ]
