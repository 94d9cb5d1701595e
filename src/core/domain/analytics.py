"""Eventos de analítica producidos por los postflight hooks.

Por qué modelos y no dicts:
- El sink recibe valores estructurados y decide cómo transportarlos; el Core
  no conoce el pixel ni el batching.
- `to_payload` fija el shape del pixel en un único sitio.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class AnalyticsProduct(str, Enum):
    """Producto de contenido al que se atribuye el evento (`bvProduct`)."""

    REVIEWS = "RatingsAndReviews"
    QUESTIONS = "AskAndAnswer"


class AnalyticsContentType(str, Enum):
    REVIEW = "Review"
    QUESTION = "Question"
    ANSWER = "Answer"
    COMMENT = "Comment"
    PRODUCT = "Product"


class _AnalyticsEvent(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bv_product: AnalyticsProduct = Field(..., serialization_alias="bvProduct")
    product_id: str = Field(..., min_length=1, serialization_alias="productId")
    brand: str | None = Field(default=None)
    category_id: str | None = Field(default=None, serialization_alias="categoryId")
    additional: dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Payload plano estilo pixel (camelCase, sin nulos)."""

        data = self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"additional"})
        data.update(self.additional)
        return data


class ImpressionEvent(_AnalyticsEvent):
    """Un contenido UGC fue mostrado (review, pregunta, comentario)."""

    cl: Literal["Impression"] = "Impression"
    type: Literal["UGC"] = "UGC"
    content_id: str = Field(..., min_length=1, serialization_alias="contentId")
    content_type: AnalyticsContentType = Field(..., serialization_alias="contentType")


class PageViewEvent(_AnalyticsEvent):
    """Vista de la página de un producto."""

    cl: Literal["PageView"] = "PageView"
    type: Literal["Product"] = "Product"
    root_category_id: str | None = Field(default=None, serialization_alias="rootCategoryId")


AnalyticsEvent = Union[ImpressionEvent, PageViewEvent]
