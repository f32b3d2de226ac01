from rest_framework import serializers

from catalog.models import Product, ProductType, Rule
from tenancy.serializers import CommaListField


class ProductTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductType
        fields = ("product_type_id", "type_name", "description", "display_order")


class ProductSummarySerializer(serializers.ModelSerializer):
    carrier = serializers.CharField(source="carrier_name", read_only=True)

    class Meta:
        model = Product
        fields = ("id", "name", "carrier")


class ProductSerializer(serializers.ModelSerializer):
    carrier = serializers.CharField(source="carrier_name", max_length=200)
    product_type = serializers.CharField(
        max_length=100,
        required=False,
        allow_blank=True,
        allow_null=True,
    )

    class Meta:
        model = Product
        fields = (
            "id",
            "name",
            "description",
            "product_type",
            "carrier",
            "carrier_id",
            "per_occurrence",
            "aggregate",
            "min_annual_revenue",
            "max_annual_revenue",
            "naics_allowed",
            "created_at",
        )
        read_only_fields = ("id", "carrier_id", "created_at")
        extra_kwargs = {
            "name": {"min_length": 2, "max_length": 200},
            "per_occurrence": {"min_value": 0},
            "aggregate": {"min_value": 0},
            "min_annual_revenue": {"min_value": 0},
            "max_annual_revenue": {"min_value": 0},
        }

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["product_type"] = instance.product_type.type_name if instance.product_type_id else None
        return data

    def validate_naics_allowed(self, value):
        if not (value or "").strip():
            raise serializers.ValidationError("This field may not be blank.")
        return value

    def validate(self, attrs):
        min_revenue = attrs.get(
            "min_annual_revenue",
            getattr(self.instance, "min_annual_revenue", Product.DEFAULT_MIN_ANNUAL_REVENUE),
        )
        max_revenue = attrs.get(
            "max_annual_revenue",
            getattr(self.instance, "max_annual_revenue", Product.DEFAULT_MAX_ANNUAL_REVENUE),
        )
        if min_revenue > max_revenue:
            raise serializers.ValidationError(
                {"min_annual_revenue": ["Must be less than or equal to max_annual_revenue."]}
            )
        return attrs


class RuleSummarySerializer(serializers.ModelSerializer):
    id = serializers.CharField(source="rule_id", read_only=True)

    class Meta:
        model = Rule
        fields = ("id", "title", "priority", "status")


class RuleSerializer(serializers.ModelSerializer):
    carrier = serializers.CharField(
        source="carrier_name",
        max_length=200,
        required=False,
        allow_blank=True,
        allow_null=True,
    )
    product = serializers.CharField(
        source="product_name",
        max_length=200,
        required=False,
        allow_blank=True,
        allow_null=True,
    )
    product_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    naics_codes = CommaListField(required=False)
    states = CommaListField(required=False)
    restrictions = CommaListField(required=False)
    conditions = CommaListField(required=False)

    class Meta:
        model = Rule
        fields = (
            "rule_id",
            "title",
            "description",
            "business_type",
            "naics_codes",
            "states",
            "carrier",
            "product",
            "product_id",
            "carrier_id",
            "restrictions",
            "priority",
            "outcome",
            "rule_version",
            "status",
            "effective_from",
            "effective_to",
            "min_revenue",
            "max_revenue",
            "min_years_in_business",
            "max_years_in_business",
            "prior_claims_allowed",
            "prior_claims_threshold",
            "conditions",
            "contact_email",
            "created_by",
            "created_at",
            "updated_at",
            "additional_json",
        )
        read_only_fields = ("rule_id", "carrier_id", "created_by", "created_at", "updated_at")
        extra_kwargs = {
            "min_years_in_business": {"min_value": 0},
            "max_years_in_business": {"min_value": 0},
            "prior_claims_allowed": {"min_value": 0},
            "prior_claims_threshold": {"min_value": 0},
        }

    def validate_contact_email(self, value):
        if value:
            serializers.EmailField().run_validation(value)
        return value


class RuleUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    overwrite = serializers.BooleanField(default=False)
