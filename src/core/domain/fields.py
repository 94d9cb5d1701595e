"""Vocabulario tipado de la API (content types, operadores y campos).

Por qué enums cerrados:
- Cada query concreta decide qué categorías acepta comparando la categoría
  del campo (`content_type_of`) en vez de strings libres.
- Añadir una enumeración nueva sin registrarla en `_FIELD_CONTENT_TYPES`
  rompe `content_type_of` de inmediato (y el test que recorre todas).

Los valores de cada miembro son los nombres del wire format.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union


class ContentType(str, Enum):
    """Content types usados en Include, Stats, Filter_<X>, Sort_<X> y Limit_<X>."""

    ANSWERS = "Answers"
    AUTHORS = "Authors"
    CATEGORIES = "Categories"
    COMMENTS = "Comments"
    NATIVE_REVIEWS = "NativeReviews"
    PRODUCTS = "Products"
    QUESTIONS = "Questions"
    REVIEWS = "Reviews"


class FilterOperator(str, Enum):
    EQUAL_TO = "eq"
    NOT_EQUAL_TO = "neq"
    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL_TO = "lte"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL_TO = "gte"


class SortOrder(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class ProductField(str, Enum):
    ID = "Id"
    BRAND_ID = "BrandId"
    CATEGORY_ID = "CategoryId"
    IS_ACTIVE = "IsActive"
    IS_DISABLED = "IsDisabled"
    NAME = "Name"
    AVERAGE_OVERALL_RATING = "AverageOverallRating"
    TOTAL_REVIEW_COUNT = "TotalReviewCount"
    TOTAL_QUESTION_COUNT = "TotalQuestionCount"


class ReviewField(str, Enum):
    ID = "Id"
    AUTHOR_ID = "AuthorId"
    CONTENT_LOCALE = "ContentLocale"
    HAS_COMMENTS = "HasComments"
    HAS_PHOTOS = "HasPhotos"
    HAS_VIDEOS = "HasVideos"
    IS_FEATURED = "IsFeatured"
    IS_RECOMMENDED = "IsRecommended"
    IS_SYNDICATED = "IsSyndicated"
    PRODUCT_ID = "ProductId"
    RATING = "Rating"
    SUBMISSION_TIME = "SubmissionTime"
    TOTAL_POSITIVE_FEEDBACK_COUNT = "TotalPositiveFeedbackCount"


class QuestionField(str, Enum):
    ID = "Id"
    AUTHOR_ID = "AuthorId"
    CATEGORY_ID = "CategoryId"
    CONTENT_LOCALE = "ContentLocale"
    HAS_ANSWERS = "HasAnswers"
    HAS_BEST_ANSWER = "HasBestAnswer"
    HAS_BRAND_ANSWERS = "HasBrandAnswers"
    IS_FEATURED = "IsFeatured"
    PRODUCT_ID = "ProductId"
    SUBMISSION_TIME = "SubmissionTime"
    TOTAL_ANSWER_COUNT = "TotalAnswerCount"


class AnswerField(str, Enum):
    ID = "Id"
    AUTHOR_ID = "AuthorId"
    CONTENT_LOCALE = "ContentLocale"
    IS_BEST_ANSWER = "IsBestAnswer"
    IS_BRAND_ANSWER = "IsBrandAnswer"
    QUESTION_ID = "QuestionId"
    SUBMISSION_TIME = "SubmissionTime"
    TOTAL_POSITIVE_FEEDBACK_COUNT = "TotalPositiveFeedbackCount"


class AuthorField(str, Enum):
    ID = "Id"
    CONTENT_LOCALE = "ContentLocale"
    HAS_PHOTOS = "HasPhotos"
    LAST_MODERATED_TIME = "LastModeratedTime"
    SUBMISSION_TIME = "SubmissionTime"


class CommentField(str, Enum):
    ID = "Id"
    AUTHOR_ID = "AuthorId"
    CONTENT_LOCALE = "ContentLocale"
    IS_FEATURED = "IsFeatured"
    REVIEW_ID = "ReviewId"
    SUBMISSION_TIME = "SubmissionTime"


QueryField = Union[
    ProductField,
    ReviewField,
    QuestionField,
    AnswerField,
    AuthorField,
    CommentField,
]

FilterTuple = tuple[QueryField, FilterOperator, Any]


_FIELD_CONTENT_TYPES: dict[type[Enum], ContentType] = {
    ProductField: ContentType.PRODUCTS,
    ReviewField: ContentType.REVIEWS,
    QuestionField: ContentType.QUESTIONS,
    AnswerField: ContentType.ANSWERS,
    AuthorField: ContentType.AUTHORS,
    CommentField: ContentType.COMMENTS,
}


def field_enums() -> tuple[type[Enum], ...]:
    """Todas las enumeraciones de campos registradas."""

    return tuple(_FIELD_CONTENT_TYPES)


def content_type_of(field: QueryField) -> ContentType:
    """Devuelve la categoría (content type) a la que pertenece un campo.

    Lanza `KeyError` si la enumeración del campo no está registrada: es un bug
    del paquete, no del caller.
    """

    return _FIELD_CONTENT_TYPES[type(field)]
