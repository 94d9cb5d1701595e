"""Query de preguntas de un producto (`questions.json`)."""

from __future__ import annotations

from typing import Any

from core.domain.analytics import AnalyticsContentType, AnalyticsProduct, ImpressionEvent
from core.domain.fields import ContentType, FilterOperator, QuestionField
from core.domain.models import Question
from core.domain.parameters import ParameterKind, make_parameter
from core.queries.base import FilterableQuery, IncludeableQuery, PagedQuery, SortableQuery


class QuestionQuery(
    PagedQuery[Question],
    FilterableQuery[Question],
    IncludeableQuery[Question],
    SortableQuery[Question],
):
    endpoint = "questions.json"
    entity_type = Question
    content_type = ContentType.QUESTIONS

    allowed_filter_scopes = frozenset({ContentType.QUESTIONS, ContentType.ANSWERS})
    allowed_includes = frozenset(
        {ContentType.ANSWERS, ContentType.AUTHORS, ContentType.PRODUCTS, ContentType.CATEGORIES}
    )
    allowed_sort_scopes = frozenset({ContentType.QUESTIONS, ContentType.ANSWERS})

    def __init__(self, product_id: str, limit: int | None = None, offset: int = 0, **kwargs: Any) -> None:
        super().__init__(limit=limit, offset=offset, **kwargs)
        self.product_id = product_id
        self.add_parameter(
            make_parameter(
                ParameterKind.FILTER,
                QuestionField.PRODUCT_ID.value,
                FilterOperator.EQUAL_TO,
                product_id,
            )
        )

    def postflight(self, results: list[Question]) -> None:
        for question in results:
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
