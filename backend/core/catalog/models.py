from __future__ import annotations

import uuid

from django.db import models
from django.utils import timezone


def new_product_id() -> str:
    return f"prod-{uuid.uuid4().hex[:12]}"


def new_rule_id() -> str:
    return f"rule-{uuid.uuid4().hex[:12]}"


class ProductType(models.Model):
    product_type_id = models.AutoField(primary_key=True)
    type_name = models.CharField(max_length=100, unique=True)
    description = models.CharField(max_length=500, blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    display_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("display_order", "type_name")

    def __str__(self) -> str:  # pragma: no cover
        return self.type_name


class Product(models.Model):
    DEFAULT_PER_OCCURRENCE = 1_000_000
    DEFAULT_AGGREGATE = 2_000_000
    DEFAULT_MIN_ANNUAL_REVENUE = 0
    DEFAULT_MAX_ANNUAL_REVENUE = 5_000_000

    id = models.CharField(max_length=50, primary_key=True, default=new_product_id, editable=False)
    name = models.CharField(max_length=200)
    description = models.CharField(max_length=1000, blank=True, null=True)
    carrier_name = models.CharField(max_length=200)
    carrier = models.ForeignKey(
        "carriers.Carrier",
        on_delete=models.SET_NULL,
        related_name="products",
        null=True,
        blank=True,
    )
    product_type = models.ForeignKey(
        ProductType,
        on_delete=models.SET_NULL,
        related_name="products",
        null=True,
        blank=True,
    )
    per_occurrence = models.IntegerField(default=DEFAULT_PER_OCCURRENCE)
    aggregate = models.IntegerField(default=DEFAULT_AGGREGATE)
    min_annual_revenue = models.IntegerField(default=DEFAULT_MIN_ANNUAL_REVENUE)
    max_annual_revenue = models.IntegerField(default=DEFAULT_MAX_ANNUAL_REVENUE)
    naics_allowed = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("name", "id")
        indexes = [
            models.Index(fields=("carrier",), name="idx_products_carrier"),
            models.Index(fields=("carrier_name",), name="idx_products_carrier_name"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.name} ({self.carrier_name})"


class Rule(models.Model):
    """Underwriting eligibility rule.

    List-valued attributes (NAICS codes, states, restrictions, conditions) are
    stored comma-separated.
    """

    STATUS_ACTIVE = "active"

    rule_id = models.CharField(max_length=100, primary_key=True, default=new_rule_id)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    business_type = models.CharField(max_length=100, blank=True, null=True)
    naics_codes = models.CharField(max_length=1000, blank=True, null=True)
    states = models.TextField(blank=True, null=True)
    carrier_name = models.CharField(max_length=200, blank=True, null=True)
    product_name = models.CharField(max_length=200, blank=True, null=True)
    carrier = models.ForeignKey(
        "carriers.Carrier",
        on_delete=models.SET_NULL,
        related_name="rules",
        null=True,
        blank=True,
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        related_name="rules",
        null=True,
        blank=True,
    )
    restrictions = models.TextField(blank=True, null=True)
    priority = models.CharField(max_length=50, blank=True, null=True)
    outcome = models.CharField(max_length=50, blank=True, null=True)
    rule_version = models.CharField(max_length=50, blank=True, null=True)
    status = models.CharField(max_length=50, blank=True, null=True)
    effective_from = models.DateTimeField(blank=True, null=True)
    effective_to = models.DateTimeField(blank=True, null=True)
    min_revenue = models.DecimalField(max_digits=18, decimal_places=2, blank=True, null=True)
    max_revenue = models.DecimalField(max_digits=18, decimal_places=2, blank=True, null=True)
    min_years_in_business = models.IntegerField(blank=True, null=True)
    max_years_in_business = models.IntegerField(blank=True, null=True)
    prior_claims_allowed = models.IntegerField(blank=True, null=True)
    prior_claims_threshold = models.IntegerField(blank=True, null=True)
    conditions = models.TextField(blank=True, null=True)
    contact_email = models.CharField(max_length=255, blank=True, null=True)
    created_by = models.CharField(max_length=100, blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(blank=True, null=True)
    additional_json = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ("title", "rule_id")
        indexes = [
            models.Index(fields=("carrier_name", "product_name"), name="idx_rules_carrier_product"),
            models.Index(fields=("naics_codes",), name="idx_rules_naics"),
            models.Index(
                fields=("status", "effective_from", "effective_to"),
                name="idx_rules_status_effective",
            ),
            models.Index(fields=("carrier",), name="idx_rules_carrier"),
            models.Index(fields=("product",), name="idx_rules_product"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.rule_id}: {self.title}"