"""Contrato del sink de analítica."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.config import AnalyticsSettings
from core.domain.analytics import AnalyticsEvent


@runtime_checkable
class AnalyticsSink(Protocol):
    """Recibe eventos fire-and-forget; el valor de retorno se ignora."""

    def track(self, event: AnalyticsEvent, config: AnalyticsSettings) -> None:
        ...
