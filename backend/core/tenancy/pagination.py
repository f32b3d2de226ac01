from __future__ import annotations

import math
from dataclasses import dataclass

from django.conf import settings
from rest_framework.response import Response

from tenancy.exceptions import InvalidOperation


@dataclass(frozen=True)
class PageRequest:
    page: int
    page_size: int


def parse_page_request(query_params, *, default_page_size: int = 25) -> PageRequest:
    raw_page = (query_params.get("page") or "").strip() or "1"
    raw_size = (query_params.get("page_size") or "").strip() or str(default_page_size)
    try:
        page = int(raw_page)
        page_size = int(raw_size)
    except ValueError:
        raise InvalidOperation("page and page_size must be integers.") from None

    max_page_size = getattr(settings, "PAGINATION_MAX_PAGE_SIZE", 100)
    if page < 1:
        raise InvalidOperation("page must be >= 1.")
    if page_size < 1 or page_size > max_page_size:
        raise InvalidOperation(f"page_size must be between 1 and {max_page_size}.")
    return PageRequest(page=page, page_size=page_size)


def paginate(queryset, page_request: PageRequest):
    """Slice a queryset and describe the page the way every list endpoint returns it."""

    total_items = queryset.count()
    total_pages = math.ceil(total_items / page_request.page_size) if total_items else 0
    offset = (page_request.page - 1) * page_request.page_size
    items = list(queryset[offset: offset + page_request.page_size])
    pagination = {
        "page": page_request.page,
        "page_size": page_request.page_size,
        "total_pages": total_pages,
        "total_items": total_items,
    }
    return items, pagination


def paginated_response(request, queryset, serializer_class, *, default_page_size: int = 25):
    page_request = parse_page_request(request.query_params, default_page_size=default_page_size)
    items, pagination = paginate(queryset, page_request)
    return Response(
        {
            "items": serializer_class(items, many=True).data,
            "pagination": pagination,
        }
    )
