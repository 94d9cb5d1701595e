"""Sink de analítica por defecto.

No transporta ni agrupa eventos: solo los registra en el log para que las
queries funcionen sin configurar un pixel real.
"""

from __future__ import annotations

import logging

from core.config import AnalyticsSettings
from core.domain.analytics import AnalyticsEvent

logger = logging.getLogger(__name__)


class LoggingAnalyticsSink:
    def __init__(self, level: int = logging.DEBUG) -> None:
        self._level = level

    def track(self, event: AnalyticsEvent, config: AnalyticsSettings) -> None:
        payload = event.to_payload()
        if config.client_id:
            payload["client"] = config.client_id
        logger.log(
            self._level,
            "analytics %s%s: %s",
            event.cl,
            " (dry run)" if config.dry_run else "",
            payload,
        )
