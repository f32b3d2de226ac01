# Generated manually. Keep in sync with events/models.py.

from django.db import migrations, models
import django.core.serializers.json
import django.utils.timezone
import events.models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("event_id", models.CharField(default=events.models._new_event_id, editable=False, max_length=36, primary_key=True, serialize=False)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                ("user_id", models.CharField(blank=True, max_length=100, null=True)),
                ("action", models.CharField(max_length=100)),
                ("rule_id", models.CharField(blank=True, max_length=100, null=True)),
                ("product_id", models.CharField(blank=True, max_length=100, null=True)),
                ("metadata", models.JSONField(blank=True, default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder)),
            ],
            options={
                "ordering": ("-timestamp",),
            },
        ),
        migrations.AddIndex(
            model_name="event",
            index=models.Index(fields=["timestamp"], name="idx_events_timestamp"),
        ),
        migrations.AddIndex(
            model_name="event",
            index=models.Index(fields=["user_id"], name="idx_events_user"),
        ),
    ]
