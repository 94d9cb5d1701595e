"""Errores del cliente de Conversations.

Por qué una jerarquía propia:
- El handler del caller recibe siempre un `QueryFailure`; estas clases le
  permiten distinguir transporte, decodificación y errores del servidor sin
  conocer httpx ni pydantic.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ServerError(BaseModel):
    """Error reportado por la API dentro de `Errors` (con `HasErrors=true`)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    message: str = Field(default="", alias="Message")
    code: str = Field(default="", alias="Code")


class ConversationsError(Exception):
    """Base exception for every failure surfaced in a response envelope."""

    pass


class TransportError(ConversationsError):
    """Raised when the request could not be completed (network, HTTP status)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(ConversationsError):
    """Raised when a payload does not match the expected entity shape."""

    pass


class APIError(ConversationsError):
    """The server answered but flagged the request with `HasErrors`."""

    def __init__(self, errors: list[ServerError]) -> None:
        summary = "; ".join(f"{e.code}: {e.message}" for e in errors) or "unknown API error"
        super().__init__(summary)
        self.errors = errors
