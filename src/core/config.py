"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que queries y adaptadores (HTTP/analítica) lean config de forma
  consistente.

Los settings son de solo lectura (`frozen`): una misma instancia se comparte
entre muchas queries concurrentes.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_APP_DIR_NAME = "conversations-client"

_BASE_URLS = {
    "staging": "https://stg.api.bazaarvoice.com/data/",
    "production": "https://api.bazaarvoice.com/data/",
}


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / _APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / _APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / _APP_DIR_NAME
    return Path.home() / ".config" / _APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def read_env_file(env_path: Path) -> dict[str, str]:
    """Lee pares `CLAVE=valor` de un .env (ignora comentarios y comillas)."""

    if not env_path.exists():
        return {}
    pairs = (
        line.partition("=")
        for line in (raw.strip() for raw in env_path.read_text(encoding="utf-8").splitlines())
        if line and not line.startswith("#")
    )
    return {key.strip(): value.strip().strip("\"'") for key, sep, value in pairs if sep and key.strip()}


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Fusiona `values` en el .env del usuario; los valores vacíos no se escriben."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    merged = read_env_file(env_path)
    merged.update({key: value for key, value in values.items() if value})
    body = "".join(f"{key}={merged[key]}\n" for key in sorted(merged))
    env_path.write_text(f"# {_APP_DIR_NAME} (doctor configure)\n{body}", encoding="utf-8")
    return env_path


class Environment(str, Enum):
    STAGING = "staging"
    PRODUCTION = "production"


class AnalyticsSettings(BaseModel):
    """Subconjunto de config que recibe el sink de analítica."""

    model_config = ConfigDict(frozen=True)

    client_id: str = ""
    environment: Environment = Environment.STAGING
    dry_run: bool = False


class ConversationsSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para queries, CLI y adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONVERSATIONS_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="Passkey de la Conversations API.",
    )
    client_id: str = Field(
        default="",
        description="Client id usado para atribuir eventos de analítica.",
    )
    environment: Environment = Field(
        default=Environment.STAGING,
        description="Entorno de la API (staging/production).",
    )
    api_version: str = Field(
        default="5.4",
        min_length=1,
        description="Valor enviado como `apiversion`.",
    )
    api_base_url: str | None = Field(
        default=None,
        description="Override de la base URL (p.ej. un mock local).",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="conversations-client/0.1",
        min_length=1,
        description="User-Agent de las peticiones.",
    )

    default_limit: int = Field(
        default=10,
        ge=0,
        le=100,
        description="Limit por defecto de las queries paginadas.",
    )
    max_limit: int = Field(
        default=100,
        ge=1,
        description="Limit máximo aceptado por la API.",
    )

    analytics_dry_run: bool = Field(
        default=False,
        description="Si es True, los sinks no deben enviar eventos fuera del proceso.",
    )

    @property
    def base_url(self) -> str:
        if self.api_base_url:
            return self.api_base_url.rstrip("/") + "/"
        return _BASE_URLS[self.environment.value]

    @property
    def analytics(self) -> AnalyticsSettings:
        return AnalyticsSettings(
            client_id=self.client_id,
            environment=self.environment,
            dry_run=self.analytics_dry_run,
        )
