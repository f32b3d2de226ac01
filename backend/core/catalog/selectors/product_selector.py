from __future__ import annotations

from catalog.models import Product, ProductType
from tenancy.access import AccessContext, scope_queryset, validate_carrier_access
from tenancy.exceptions import ResourceNotFound


def list_products(*, access: AccessContext, carrier: str | None = None):
    qs = scope_queryset(Product.objects.select_related("product_type"), access, "carrier_id")
    carrier = (carrier or "").strip()
    if carrier:
        qs = qs.filter(carrier_name=carrier)
    return qs.order_by("name", "id")


def get_product(*, access: AccessContext, product_id: str) -> Product:
    product = Product.objects.select_related("product_type").filter(pk=product_id).first()
    if product is None:
        raise ResourceNotFound(f"Product {product_id} not found")
    validate_carrier_access(access, product.carrier_id)
    return product


def list_product_types():
    return ProductType.objects.filter(is_active=True).order_by("display_order", "type_name")
