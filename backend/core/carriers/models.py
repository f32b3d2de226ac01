from __future__ import annotations

from django.db import models

from tenancy.text import split_csv


class Carrier(models.Model):
    """Insurance-provider tenant.

    Secrets must NOT be stored on the carrier. `api_secret_key_ref` and
    `webhook_secret_ref` hold references to a secret store only.
    """

    carrier_id = models.AutoField(primary_key=True)
    legal_name = models.CharField(max_length=300)
    display_name = models.CharField(max_length=200)
    country = models.CharField(max_length=2, blank=True, null=True)
    headquarters_address = models.TextField(blank=True, null=True)

    primary_contact_name = models.CharField(max_length=200, blank=True, null=True)
    primary_contact_email = models.CharField(max_length=255, blank=True, null=True)
    primary_contact_phone = models.CharField(max_length=50, blank=True, null=True)
    technical_contact_name = models.CharField(max_length=200, blank=True, null=True)
    technical_contact_email = models.CharField(max_length=255, blank=True, null=True)

    auth_method = models.CharField(max_length=50, blank=True, null=True)
    sso_metadata_url = models.CharField(max_length=1000, blank=True, null=True)
    api_client_id = models.CharField(max_length=200, blank=True, null=True)
    api_secret_key_ref = models.CharField(max_length=200, blank=True, null=True)
    data_residency = models.CharField(max_length=100, blank=True, null=True)
    products_offered = models.TextField(blank=True, null=True)

    rule_upload_allowed = models.BooleanField(default=False)
    rule_upload_method = models.CharField(max_length=50, blank=True, null=True)
    rule_approval_required = models.BooleanField(default=True)
    default_rule_versioning = models.BooleanField(default=True)
    use_naics_enrichment = models.BooleanField(default=False)
    preferred_naics_source = models.CharField(max_length=50, blank=True, null=True)

    pas_webhook_url = models.CharField(max_length=1000, blank=True, null=True)
    webhook_auth_type = models.CharField(max_length=50, blank=True, null=True)
    webhook_secret_ref = models.CharField(max_length=200, blank=True, null=True)
    contract_ref = models.CharField(max_length=200, blank=True, null=True)
    billing_contact_email = models.CharField(max_length=255, blank=True, null=True)
    retention_policy_days = models.IntegerField(blank=True, null=True)

    created_by = models.CharField(max_length=200, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(blank=True, null=True)
    additional_json = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ("carrier_id",)
        verbose_name = "Carrier"
        verbose_name_plural = "Carriers"
        indexes = [
            models.Index(fields=("display_name",), name="idx_carriers_display_name"),
            models.Index(
                fields=("primary_contact_email",),
                name="idx_carriers_primary_email",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.display_name} ({self.carrier_id})"

    @property
    def products_offered_list(self) -> list[str]:
        return split_csv(self.products_offered)
