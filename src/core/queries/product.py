"""Query de display de producto (`products.json`).

El id del producto queda fijado en el constructor, así que los filtros sobre
campos de producto se descartan; solo se aceptan filtros de tipo
(`Filter_Reviews`, `Filter_Questions`, ...) sobre el contenido incluido.
"""

from __future__ import annotations

from typing import Any

from core.config import ConversationsSettings
from core.domain.analytics import (
    AnalyticsContentType,
    AnalyticsProduct,
    ImpressionEvent,
    PageViewEvent,
)
from core.domain.fields import ContentType, FilterOperator, ProductField
from core.domain.models import Product, Review
from core.domain.parameters import ParameterKind, make_parameter
from core.queries.base import (
    FilterableQuery,
    IncludeableQuery,
    SingleEntityQuery,
    SortableQuery,
    StatableQuery,
)

_UGC_TYPES = frozenset(
    {
        ContentType.ANSWERS,
        ContentType.AUTHORS,
        ContentType.COMMENTS,
        ContentType.QUESTIONS,
        ContentType.REVIEWS,
    }
)


class ProductQuery(
    SingleEntityQuery[Product],
    FilterableQuery[Product],
    IncludeableQuery[Product],
    SortableQuery[Product],
    StatableQuery[Product],
):
    """Display de un producto con su contenido UGC incluido."""

    endpoint = "products.json"
    entity_type = Product
    content_type = ContentType.PRODUCTS

    allowed_filter_scopes = _UGC_TYPES
    allowed_includes = _UGC_TYPES
    allowed_sort_scopes = _UGC_TYPES | {ContentType.PRODUCTS}
    allowed_stats = frozenset({ContentType.QUESTIONS, ContentType.REVIEWS, ContentType.NATIVE_REVIEWS})

    def __init__(self, product_id: str, *, settings: ConversationsSettings | None = None, **kwargs: Any) -> None:
        super().__init__(settings=settings, **kwargs)
        self.product_id = product_id
        self.add_parameter(
            make_parameter(
                ParameterKind.FILTER,
                ProductField.ID.value,
                FilterOperator.EQUAL_TO,
                product_id,
            )
        )

    def postflight(self, results: list[Product]) -> None:
        """Impresión por review y por pregunta + un page view del producto."""

        if not results:
            return
        product = results[0]

        for review in product.reviews or []:
            self._track_review(review, product)

        for question in product.questions or []:
            if not question.id or not question.product_id:
                continue
            self.track(
                ImpressionEvent(
                    bv_product=AnalyticsProduct.QUESTIONS,
                    content_id=question.id,
                    content_type=AnalyticsContentType.QUESTION,
                    product_id=question.product_id,
                    category_id=question.category_id,
                )
            )

        self.track(
            PageViewEvent(
                bv_product=AnalyticsProduct.REVIEWS,
                product_id=self.product_id,
                brand=product.brand.id if product.brand else None,
            )
        )

    def _track_review(self, review: Review, displayed: Product) -> None:
        if not review.id or not review.product_id:
            return
        candidates = [*(review.products or []), displayed]
        match = next((p for p in candidates if p.id == review.product_id), None)
        if match is None:
            return
        self.track(
            ImpressionEvent(
                bv_product=AnalyticsProduct.REVIEWS,
                content_id=review.id,
                content_type=AnalyticsContentType.REVIEW,
                product_id=review.product_id,
                brand=match.brand.id if match.brand else None,
                category_id=match.category_id,
            )
        )
