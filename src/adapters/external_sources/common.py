"""Utilidades compartidas por los adaptadores HTTP."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from core.errors import ConsultaExternaError, IdentidadInvalidaError


def documento_de(identidad: Any, *, fuente: str) -> str:
    """Extrae el número de documento de una identidad.

    Acepta un `str`, un mapping o un objeto con `numero_identificacion`.
    """

    if isinstance(identidad, str):
        doc = identidad
    elif isinstance(identidad, Mapping):
        doc = identidad.get("numero_identificacion")
    else:
        doc = getattr(identidad, "numero_identificacion", None)

    if not isinstance(doc, str) or not doc.strip():
        raise IdentidadInvalidaError(f"Falta numero_identificacion para {fuente}")
    return doc.strip()


def normalize_base_url(base_url: str | None, *, adaptador: str) -> str:
    if not base_url or not base_url.strip():
        raise ValueError(f"base_url es requerido para {adaptador}")
    return base_url.strip().rstrip("/")


def raise_for_status(response: httpx.Response, *, fuente: str) -> None:
    if response.is_success:
        return
    raise ConsultaExternaError(
        f"{fuente} {response.status_code}: {response.text}",
        status_code=response.status_code,
    )
