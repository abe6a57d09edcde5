"""Repositorio de solicitudes en memoria.

Sirve para la CLI y los tests; una implementación con base de datos solo
necesita cumplir `core.interfaces.repositorio.RepositorioSolicitudes`.
"""

from __future__ import annotations

from typing import Any

from core.domain.estado import EstadoSolicitud
from core.domain.models import Solicitud

_ESTADOS_FINALES = (EstadoSolicitud.APROBADA, EstadoSolicitud.RECHAZADA)


class RepositorioEnMemoria:
    def __init__(self, solicitudes: list[Solicitud] | None = None) -> None:
        self._solicitudes: dict[str, Solicitud] = {s.id: s for s in solicitudes or []}
        self._resultados: dict[str, dict[str, Any]] = {}

    def agregar(self, solicitud: Solicitud) -> None:
        self._solicitudes[solicitud.id] = solicitud

    def resultado(self, solicitud_id: str) -> dict[str, Any] | None:
        return self._resultados.get(solicitud_id)

    async def obtener(self, solicitud_id: str) -> Solicitud | None:
        return self._solicitudes.get(solicitud_id)

    async def actualizar_estado(
        self,
        solicitud_id: str,
        nuevo_estado: EstadoSolicitud,
        meta: dict[str, Any] | None = None,
    ) -> None:
        actual = self._solicitudes.get(solicitud_id)
        if actual is None:
            raise KeyError(f"Solicitud no encontrada para actualización: {solicitud_id}")
        meta = meta or {}
        update: dict[str, Any] = {"estado": nuevo_estado}
        if nuevo_estado in _ESTADOS_FINALES:
            if meta.get("fecha_validacion"):
                update["fecha_validacion"] = meta["fecha_validacion"]
            if meta.get("revisado_por"):
                update["revisado_por"] = meta["revisado_por"]
        if nuevo_estado is EstadoSolicitud.RECHAZADA and meta.get("motivo"):
            update["motivo_decision"] = meta["motivo"]
        self._solicitudes[solicitud_id] = actual.model_copy(update=update)

    async def guardar_resultado(self, solicitud_id: str, resultado: dict[str, Any]) -> None:
        # Sin await intermedio: la escritura es atómica dentro del event loop.
        previo = self._resultados.get(solicitud_id, {})
        self._resultados[solicitud_id] = {**previo, "consultas": resultado}
