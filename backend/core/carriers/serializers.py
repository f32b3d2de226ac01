from rest_framework import serializers

from carriers.models import Carrier
from tenancy.serializers import CommaListField

CARRIER_DETAIL_FIELDS = (
    "carrier_id",
    "legal_name",
    "display_name",
    "country",
    "headquarters_address",
    "primary_contact_name",
    "primary_contact_email",
    "primary_contact_phone",
    "technical_contact_name",
    "technical_contact_email",
    "auth_method",
    "sso_metadata_url",
    "api_client_id",
    "api_secret_key_ref",
    "data_residency",
    "products_offered",
    "rule_upload_allowed",
    "rule_upload_method",
    "rule_approval_required",
    "default_rule_versioning",
    "use_naics_enrichment",
    "preferred_naics_source",
    "pas_webhook_url",
    "webhook_auth_type",
    "webhook_secret_ref",
    "contract_ref",
    "billing_contact_email",
    "retention_policy_days",
    "created_by",
    "created_at",
    "updated_at",
    "additional_json",
)


class CarrierSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Carrier
        fields = (
            "carrier_id",
            "legal_name",
            "display_name",
            "country",
            "primary_contact_email",
        )


class CarrierSerializer(serializers.ModelSerializer):
    products_offered = CommaListField(required=False)

    class Meta:
        model = Carrier
        fields = CARRIER_DETAIL_FIELDS
        read_only_fields = ("carrier_id", "created_by", "created_at", "updated_at")
        extra_kwargs = {
            "legal_name": {"max_length": 300},
            "display_name": {"max_length": 200},
            "country": {"min_length": 2, "max_length": 2},
            "retention_policy_days": {"min_value": 0},
        }

    def validate_primary_contact_email(self, value):
        if value:
            serializers.EmailField().run_validation(value)
        return value
