from django.db import migrations

DEFAULT_PRODUCT_TYPES = (
    ("Auto Insurance", "Automobile insurance products"),
    ("Health Insurance", "Health insurance products"),
    ("Life Insurance", "Life insurance products"),
    ("Property Insurance", "Property insurance products"),
    ("Travel Insurance", "Travel insurance products"),
    ("Home Insurance", "Home insurance products"),
)


def seed_product_types(apps, schema_editor):
    ProductType = apps.get_model("catalog", "ProductType")
    for display_order, (type_name, description) in enumerate(DEFAULT_PRODUCT_TYPES, start=1):
        ProductType.objects.get_or_create(
            type_name=type_name,
            defaults={
                "description": description,
                "is_active": True,
                "display_order": display_order,
            },
        )


def unseed_product_types(apps, schema_editor):
    ProductType = apps.get_model("catalog", "ProductType")
    ProductType.objects.filter(type_name__in=[name for name, _ in DEFAULT_PRODUCT_TYPES]).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("catalog", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_product_types, unseed_product_types),
    ]
