"""Query de reviews de un producto (`reviews.json`)."""

from __future__ import annotations

from typing import Any

from core.domain.analytics import AnalyticsContentType, AnalyticsProduct, ImpressionEvent
from core.domain.fields import ContentType, FilterOperator, ReviewField
from core.domain.models import Review
from core.domain.parameters import ParameterKind, make_parameter
from core.queries.base import (
    FilterableQuery,
    IncludeableQuery,
    PagedQuery,
    SortableQuery,
    StatableQuery,
)


class ReviewQuery(
    PagedQuery[Review],
    FilterableQuery[Review],
    IncludeableQuery[Review],
    SortableQuery[Review],
    StatableQuery[Review],
):
    """Reviews de un producto; los stats se calculan sobre los productos incluidos."""

    endpoint = "reviews.json"
    entity_type = Review
    content_type = ContentType.REVIEWS

    allowed_filter_scopes = frozenset({ContentType.REVIEWS, ContentType.COMMENTS})
    allowed_includes = frozenset({ContentType.AUTHORS, ContentType.COMMENTS, ContentType.PRODUCTS})
    allowed_sort_scopes = frozenset({ContentType.REVIEWS, ContentType.COMMENTS})
    allowed_stats = frozenset({ContentType.REVIEWS, ContentType.NATIVE_REVIEWS})

    def __init__(self, product_id: str, limit: int | None = None, offset: int = 0, **kwargs: Any) -> None:
        super().__init__(limit=limit, offset=offset, **kwargs)
        self.product_id = product_id
        self.add_parameter(
            make_parameter(
                ParameterKind.FILTER,
                ReviewField.PRODUCT_ID.value,
                FilterOperator.EQUAL_TO,
                product_id,
            )
        )

    def postflight(self, results: list[Review]) -> None:
        for review in results:
            if not review.id or not review.product_id:
                continue
            product = next((p for p in review.products or [] if p.id == review.product_id), None)
            if product is None:
                continue
            self.track(
                ImpressionEvent(
                    bv_product=AnalyticsProduct.REVIEWS,
                    content_id=review.id,
                    content_type=AnalyticsContentType.REVIEW,
                    product_id=review.product_id,
                    brand=product.brand.id if product.brand else None,
                    category_id=product.category_id,
                )
            )
