"""Contrato de persistencia para la revisión automática.

El Core no conoce la base de datos; solo necesita leer la solicitud vigente,
registrar transiciones de estado y el consolidado de las consultas.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.estado import EstadoSolicitud
from core.domain.models import Solicitud


@runtime_checkable
class RepositorioSolicitudes(Protocol):
    async def obtener(self, solicitud_id: str) -> Solicitud | None:
        ...

    async def actualizar_estado(
        self,
        solicitud_id: str,
        nuevo_estado: EstadoSolicitud,
        meta: dict[str, Any] | None = None,
    ) -> None:
        """`meta` puede traer `motivo`, `revisado_por` y `fecha_validacion`."""
        ...

    async def guardar_resultado(self, solicitud_id: str, resultado: dict[str, Any]) -> None:
        ...
