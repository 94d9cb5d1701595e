"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los alias reflejan el wire format (PascalCase) y `populate_by_name` permite
  construir entidades en tests con nombres Python.

Nota:
- La API devuelve entidades relacionadas aparte, en `Includes`, referenciadas
  por id (`ReviewIds`, `AnswerIds`, ...). `resolve_includes` conecta esas
  referencias después de decodificar; los campos resueltos no vienen del
  payload.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ConversationsModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def resolve_includes(self, includes: Includes) -> None:
        """Conecta referencias por id con las entidades de `includes`."""

        return None


def _pick(index: dict[str, Any], ids: list[str]) -> list[Any]:
    return [index[i] for i in ids if i in index]


class Brand(ConversationsModel):
    id: str | None = Field(default=None, alias="Id")
    name: str | None = Field(default=None, alias="Name")


class Answer(ConversationsModel):
    id: str = Field(..., alias="Id", description="Identificador de la respuesta.")
    question_id: str | None = Field(default=None, alias="QuestionId")
    author_id: str | None = Field(default=None, alias="AuthorId")
    answer_text: str | None = Field(default=None, alias="AnswerText")
    user_nickname: str | None = Field(default=None, alias="UserNickname")
    is_best_answer: bool | None = Field(default=None, alias="IsBestAnswer")
    is_brand_answer: bool | None = Field(default=None, alias="IsBrandAnswer")
    submission_time: datetime | None = Field(default=None, alias="SubmissionTime")


class Comment(ConversationsModel):
    id: str = Field(..., alias="Id", description="Identificador del comentario.")
    review_id: str | None = Field(default=None, alias="ReviewId")
    author_id: str | None = Field(default=None, alias="AuthorId")
    title: str | None = Field(default=None, alias="Title")
    comment_text: str | None = Field(default=None, alias="CommentText")
    user_nickname: str | None = Field(default=None, alias="UserNickname")
    submission_time: datetime | None = Field(default=None, alias="SubmissionTime")

    reviews: list[Review] | None = Field(
        default=None,
        exclude=True,
        description="Review comentada (resuelta desde Includes).",
    )

    def resolve_includes(self, includes: Includes) -> None:
        if self.review_id and self.review_id in includes.reviews:
            self.reviews = [includes.reviews[self.review_id]]


class Review(ConversationsModel):
    id: str = Field(..., alias="Id", description="Identificador de la review.")
    product_id: str | None = Field(default=None, alias="ProductId")
    author_id: str | None = Field(default=None, alias="AuthorId")
    rating: int | None = Field(default=None, ge=0, alias="Rating")
    rating_range: int | None = Field(default=None, alias="RatingRange")
    title: str | None = Field(default=None, alias="Title")
    review_text: str | None = Field(default=None, alias="ReviewText")
    user_nickname: str | None = Field(default=None, alias="UserNickname")
    is_recommended: bool | None = Field(default=None, alias="IsRecommended")
    is_featured: bool | None = Field(default=None, alias="IsFeatured")
    content_locale: str | None = Field(default=None, alias="ContentLocale")
    submission_time: datetime | None = Field(default=None, alias="SubmissionTime")
    comment_ids: list[str] = Field(default_factory=list, alias="CommentIds")

    products: list[Product] | None = Field(
        default=None,
        exclude=True,
        description="Productos relacionados (resueltos desde Includes).",
    )
    comments: list[Comment] | None = Field(default=None, exclude=True)

    def resolve_includes(self, includes: Includes) -> None:
        if self.product_id and self.product_id in includes.products:
            self.products = [includes.products[self.product_id]]
        if self.comment_ids:
            self.comments = _pick(includes.comments, self.comment_ids)


class Question(ConversationsModel):
    id: str = Field(..., alias="Id", description="Identificador de la pregunta.")
    product_id: str | None = Field(default=None, alias="ProductId")
    category_id: str | None = Field(default=None, alias="CategoryId")
    author_id: str | None = Field(default=None, alias="AuthorId")
    question_summary: str | None = Field(default=None, alias="QuestionSummary")
    question_details: str | None = Field(default=None, alias="QuestionDetails")
    user_nickname: str | None = Field(default=None, alias="UserNickname")
    total_answer_count: int | None = Field(default=None, ge=0, alias="TotalAnswerCount")
    submission_time: datetime | None = Field(default=None, alias="SubmissionTime")
    answer_ids: list[str] = Field(default_factory=list, alias="AnswerIds")

    answers: list[Answer] | None = Field(default=None, exclude=True)
    products: list[Product] | None = Field(default=None, exclude=True)

    def resolve_includes(self, includes: Includes) -> None:
        if self.answer_ids:
            self.answers = _pick(includes.answers, self.answer_ids)
        if self.product_id and self.product_id in includes.products:
            self.products = [includes.products[self.product_id]]


class Product(ConversationsModel):
    id: str = Field(..., alias="Id", description="Identificador del producto.")
    name: str | None = Field(default=None, alias="Name")
    description: str | None = Field(default=None, alias="Description")
    brand: Brand | None = Field(default=None, alias="Brand")
    brand_external_id: str | None = Field(default=None, alias="BrandExternalId")
    category_id: str | None = Field(default=None, alias="CategoryId")
    image_url: str | None = Field(default=None, alias="ImageUrl")
    product_page_url: str | None = Field(default=None, alias="ProductPageUrl")
    review_statistics: dict[str, Any] | None = Field(default=None, alias="ReviewStatistics")
    qa_statistics: dict[str, Any] | None = Field(default=None, alias="QAStatistics")
    review_ids: list[str] = Field(default_factory=list, alias="ReviewIds")
    question_ids: list[str] = Field(default_factory=list, alias="QuestionIds")

    reviews: list[Review] | None = Field(default=None, exclude=True)
    questions: list[Question] | None = Field(default=None, exclude=True)

    def resolve_includes(self, includes: Includes) -> None:
        if self.review_ids:
            self.reviews = _pick(includes.reviews, self.review_ids)
        if self.question_ids:
            self.questions = _pick(includes.questions, self.question_ids)


class Author(ConversationsModel):
    id: str = Field(..., alias="Id", description="Identificador del autor.")
    user_nickname: str | None = Field(default=None, alias="UserNickname")
    location: str | None = Field(default=None, alias="Location")
    content_locale: str | None = Field(default=None, alias="ContentLocale")
    submission_time: datetime | None = Field(default=None, alias="SubmissionTime")
    review_statistics: dict[str, Any] | None = Field(default=None, alias="ReviewStatistics")
    qa_statistics: dict[str, Any] | None = Field(default=None, alias="QAStatistics")
    review_ids: list[str] = Field(default_factory=list, alias="ReviewIds")
    question_ids: list[str] = Field(default_factory=list, alias="QuestionIds")
    answer_ids: list[str] = Field(default_factory=list, alias="AnswerIds")
    comment_ids: list[str] = Field(default_factory=list, alias="CommentIds")

    reviews: list[Review] | None = Field(default=None, exclude=True)
    questions: list[Question] | None = Field(default=None, exclude=True)
    answers: list[Answer] | None = Field(default=None, exclude=True)
    comments: list[Comment] | None = Field(default=None, exclude=True)

    def resolve_includes(self, includes: Includes) -> None:
        if self.review_ids:
            self.reviews = _pick(includes.reviews, self.review_ids)
        if self.question_ids:
            self.questions = _pick(includes.questions, self.question_ids)
        if self.answer_ids:
            self.answers = _pick(includes.answers, self.answer_ids)
        if self.comment_ids:
            self.comments = _pick(includes.comments, self.comment_ids)


class Includes(BaseModel):
    """Entidades side-loaded indexadas por id (`Includes` del payload)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    products: dict[str, Product] = Field(default_factory=dict, alias="Products")
    reviews: dict[str, Review] = Field(default_factory=dict, alias="Reviews")
    questions: dict[str, Question] = Field(default_factory=dict, alias="Questions")
    answers: dict[str, Answer] = Field(default_factory=dict, alias="Answers")
    authors: dict[str, Author] = Field(default_factory=dict, alias="Authors")
    comments: dict[str, Comment] = Field(default_factory=dict, alias="Comments")

    def resolve(self) -> None:
        """Resuelve también las referencias entre entidades incluidas."""

        for index in (self.products, self.reviews, self.questions, self.answers, self.authors, self.comments):
            for entity in index.values():
                entity.resolve_includes(self)


class ResponsePayload(BaseModel):
    """Sobre crudo de cualquier endpoint de lectura."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    has_errors: bool = Field(default=False, alias="HasErrors")
    errors: list[dict[str, Any]] = Field(default_factory=list, alias="Errors")
    limit: int | None = Field(default=None, alias="Limit")
    offset: int | None = Field(default=None, alias="Offset")
    total_results: int | None = Field(default=None, alias="TotalResults")
    locale: str | None = Field(default=None, alias="Locale")
    results: list[dict[str, Any]] = Field(default_factory=list, alias="Results")
    includes: Includes = Field(default_factory=Includes, alias="Includes")


for _model in (Comment, Review, Question, Product, Author, Includes, ResponsePayload):
    _model.model_rebuild()
