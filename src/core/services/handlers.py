"""Handlers con referencia débil al contexto que los captura.

Por qué:
- Una vista/view-model que ya no existe no debe mantenerse viva por una query
  en vuelo; cuando el resultado llega, el handler simplemente no hace nada.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Callable, TypeVar

from core.domain.response import QueryResponse

logger = logging.getLogger(__name__)

OwnerT = TypeVar("OwnerT")


def weak_handler(
    owner: OwnerT,
    callback: Callable[[OwnerT, QueryResponse[Any]], Any],
) -> Callable[[QueryResponse[Any]], Any]:
    """Envuelve `callback(owner, response)` sin retener a `owner`.

    `callback` no debe ser un método ligado a `owner` (eso lo retendría);
    usar la función sin ligar, p.ej. `weak_handler(vm, ViewModel.on_questions)`.
    """

    token = weakref.ref(owner)

    def _handler(response: QueryResponse[Any]) -> Any:
        target = token()
        if target is None:
            logger.debug("Dropping response: handler owner is gone")
            return None
        return callback(target, response)

    return _handler
