"""Derivación de fraude a partir de antecedentes policiales.

Los antecedentes llegan como registros poco estructurados (dicts u objetos con
atributos) con texto libre. Un registro se marca si alguno de sus campos de
texto contiene una palabra clave, sin distinguir mayúsculas.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from core.domain.models import (
    CAMPOS_TEXTO_ANTECEDENTE,
    DEFAULT_FRAUDE_KEYWORDS,
    ResultadoPolicial,
)


def normalize_keywords(keywords: Iterable[object] | None) -> tuple[str, ...]:
    """Minúsculas, sin vacíos ni duplicados (conserva el orden).

    El texto de cada palabra se respeta tal cual: `" robo "` exige los espacios.

    Si no queda ninguna palabra útil se usa la lista por defecto.
    """

    out: list[str] = []
    seen: set[str] = set()
    for raw in keywords or ():
        if raw is None:
            continue
        kw = str(raw).lower()
        if not kw.strip() or kw in seen:
            continue
        seen.add(kw)
        out.append(kw)
    return tuple(out) if out else DEFAULT_FRAUDE_KEYWORDS


def _campo(registro: Any, nombre: str) -> Any:
    if isinstance(registro, Mapping):
        return registro.get(nombre)
    return getattr(registro, nombre, None)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def texto_busqueda(registro: Any) -> str:
    """Concatena los campos de texto conocidos de un antecedente, en minúsculas."""

    partes = [_as_text(_campo(registro, nombre)) for nombre in CAMPOS_TEXTO_ANTECEDENTE]
    return " ".join(p for p in partes if p).lower()


class DetectorFraude:
    """Marca antecedentes sospechosos por coincidencia de palabras clave."""

    def __init__(self, keywords: Iterable[object] | None = None) -> None:
        self._keywords = normalize_keywords(keywords)

    @property
    def keywords(self) -> tuple[str, ...]:
        return self._keywords

    def es_sospechoso(self, registro: Any) -> bool:
        texto = texto_busqueda(registro)
        if not texto:
            return False
        return any(kw in texto for kw in self._keywords)

    def derivar(self, antecedentes: Any) -> ResultadoPolicial:
        if isinstance(antecedentes, tuple):
            antecedentes = list(antecedentes)
        registros = antecedentes if isinstance(antecedentes, list) else []
        tiene_fraude = any(self.es_sospechoso(r) for r in registros)
        return ResultadoPolicial(tiene_fraude=tiene_fraude, registros=registros)
