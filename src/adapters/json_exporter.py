"""Exportación JSON de un response envelope.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Permite guardar una respuesta para inspeccionarla sin repetir la query.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from core.domain.response import QueryFailure, QueryResponse


def response_to_dict(response: QueryResponse[Any]) -> dict[str, Any]:
    if isinstance(response, QueryFailure):
        return {
            "ok": False,
            "error": {"type": type(response.error).__name__, "message": str(response.error)},
        }
    results = [r.model_dump(mode="json") if isinstance(r, BaseModel) else r for r in response.results]
    return {"ok": True, "meta": asdict(response.meta), "results": results}


def export_response_json(*, response: QueryResponse[Any], output_path: Path) -> Path:
    """Exporta el envelope a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = response_to_dict(response)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
