"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/mocks) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import DEFAULT_FRAUDE_KEYWORDS


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "bases-externas"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "bases-externas"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "bases-externas"
    return Path.home() / ".config" / "bases-externas"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# bases-externas user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="BASES_EXT_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request a las bases externas (segundos).",
    )
    user_agent: str = Field(
        default="bases-externas/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones a las bases externas.",
    )

    bdnn_base_url: str | None = Field(
        default=None,
        description="Base URL de la BD Nacional (historial clínico).",
    )
    bdnn_token: str | None = Field(
        default=None,
        description="Bearer token opcional para la BD Nacional.",
    )
    policia_base_url: str | None = Field(
        default=None,
        description="Base URL de la API de antecedentes policiales.",
    )
    policia_token: str | None = Field(
        default=None,
        description="Bearer token opcional para la API policial.",
    )

    fraude_keywords: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FRAUDE_KEYWORDS),
        description="Palabras clave (substring, sin distinguir mayúsculas) que marcan fraude.",
    )

    use_mocks: bool = Field(
        default=False,
        description="Usar adaptadores simulados en lugar de las APIs reales.",
    )
    mock_scenario: str = Field(
        default="ok",
        description="Escenario de los mocks: ok | fraude | fail_one | fail_all.",
    )
    mock_latency_ms: int = Field(
        default=0,
        ge=0,
        le=60_000,
        description="Latencia simulada por los mocks (milisegundos).",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI (DEBUG, INFO, WARNING...).",
    )
