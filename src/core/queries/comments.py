"""Query de comentarios de una review (`reviewcomments.json`)."""

from __future__ import annotations

from typing import Any

from core.domain.analytics import AnalyticsContentType, AnalyticsProduct, ImpressionEvent
from core.domain.fields import CommentField, ContentType, FilterOperator
from core.domain.models import Comment
from core.domain.parameters import ParameterKind, make_parameter
from core.queries.base import FilterableQuery, IncludeableQuery, PagedQuery, SortableQuery


class CommentsQuery(
    PagedQuery[Comment],
    FilterableQuery[Comment],
    IncludeableQuery[Comment],
    SortableQuery[Comment],
):
    endpoint = "reviewcomments.json"
    entity_type = Comment
    content_type = ContentType.COMMENTS

    allowed_filter_scopes = frozenset({ContentType.COMMENTS})
    allowed_includes = frozenset({ContentType.AUTHORS, ContentType.PRODUCTS, ContentType.REVIEWS})
    allowed_sort_scopes = frozenset({ContentType.COMMENTS})

    def __init__(self, review_id: str, limit: int | None = None, offset: int = 0, **kwargs: Any) -> None:
        super().__init__(limit=limit, offset=offset, **kwargs)
        self.review_id = review_id
        self.add_parameter(
            make_parameter(
                ParameterKind.FILTER,
                CommentField.REVIEW_ID.value,
                FilterOperator.EQUAL_TO,
                review_id,
            )
        )

    def postflight(self, results: list[Comment]) -> None:
        # El product id solo se conoce si la review comentada vino en Includes.
        for comment in results:
            review = next(iter(comment.reviews or []), None)
            if not comment.id or review is None or not review.product_id:
                continue
            self.track(
                ImpressionEvent(
                    bv_product=AnalyticsProduct.REVIEWS,
                    content_id=comment.id,
                    content_type=AnalyticsContentType.COMMENT,
                    product_id=review.product_id,
                )
            )
