"""Queries concretas de la Conversations API.

Por qué un paquete:
- Agrupa una query por endpoint (productos, preguntas, reviews, ...).
- Todas comparten el builder de `core.queries.base`.
"""

from core.queries.author import AuthorQuery
from core.queries.comments import CommentsQuery
from core.queries.product import ProductQuery
from core.queries.question import QuestionQuery
from core.queries.review import ReviewQuery

__all__ = [
    "AuthorQuery",
    "CommentsQuery",
    "ProductQuery",
    "QuestionQuery",
    "ReviewQuery",
]
