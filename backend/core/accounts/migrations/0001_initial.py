# Generated manually. Keep in sync with accounts/models.py.

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import accounts.models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("carriers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Role",
            fields=[
                ("role_id", models.AutoField(primary_key=True, serialize=False)),
                ("role_name", models.CharField(max_length=100, unique=True)),
                ("description", models.CharField(blank=True, max_length=500, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "ordering": ("role_id",),
            },
        ),
        migrations.CreateModel(
            name="User",
            fields=[
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("id", models.CharField(default=accounts.models.new_user_id, editable=False, max_length=50, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("email", models.CharField(max_length=255, unique=True)),
                ("roles", models.CharField(blank=True, max_length=200, null=True)),
                ("organization_name", models.CharField(blank=True, max_length=200, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("is_active", models.BooleanField(default=True)),
                ("auth_provider", models.CharField(default="local", max_length=50)),
                ("password_reset_token", models.CharField(blank=True, db_index=True, max_length=255, null=True)),
                ("password_reset_expiry", models.DateTimeField(blank=True, null=True)),
                ("failed_login_attempts", models.IntegerField(default=0)),
                ("lockout_end", models.DateTimeField(blank=True, null=True)),
                ("carrier", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="users", to="carriers.carrier")),
                ("role", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="users", to="accounts.role")),
            ],
            options={
                "ordering": ("created_at", "id"),
            },
            managers=[
                ("objects", accounts.models.UserManager()),
            ],
        ),
        migrations.AddIndex(
            model_name="user",
            index=models.Index(fields=["carrier"], name="idx_users_carrier"),
        ),
    ]
