"""Query de perfil de autor (`authors.json`)."""

from __future__ import annotations

from typing import Any

from core.config import ConversationsSettings
from core.domain.fields import AuthorField, ContentType, FilterOperator
from core.domain.models import Author
from core.domain.parameters import ParameterKind, make_parameter
from core.queries.base import (
    FilterableQuery,
    IncludeableQuery,
    SingleEntityQuery,
    SortableQuery,
    StatableQuery,
)

_AUTHORED = frozenset(
    {ContentType.ANSWERS, ContentType.COMMENTS, ContentType.QUESTIONS, ContentType.REVIEWS}
)


class AuthorQuery(
    SingleEntityQuery[Author],
    FilterableQuery[Author],
    IncludeableQuery[Author],
    SortableQuery[Author],
    StatableQuery[Author],
):
    endpoint = "authors.json"
    entity_type = Author
    content_type = ContentType.AUTHORS

    allowed_filter_scopes = _AUTHORED
    allowed_includes = _AUTHORED
    allowed_sort_scopes = _AUTHORED
    allowed_stats = frozenset({ContentType.ANSWERS, ContentType.QUESTIONS, ContentType.REVIEWS})

    def __init__(self, author_id: str, *, settings: ConversationsSettings | None = None, **kwargs: Any) -> None:
        super().__init__(settings=settings, **kwargs)
        self.author_id = author_id
        self.add_parameter(
            make_parameter(
                ParameterKind.FILTER,
                AuthorField.ID.value,
                FilterOperator.EQUAL_TO,
                author_id,
            )
        )
