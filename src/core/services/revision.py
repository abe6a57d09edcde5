"""Revisión automática de solicitudes contra las bases externas.

Flujo:
1. La solicitud se lee del repositorio por id; solo una PENDIENTE puede revisarse.
2. Se consultan ambas bases vía la fachada.
3. Si alguna fuente falló, la solicitud sigue PENDIENTE (revisión manual).
4. Con fraude policial -> RECHAZADA; sin fraude -> APROBADA.

El consolidado de cada revisión (y, si hubo decisión, la entrada de validación
`BASES_EXTERNAS`) se guarda en el repositorio para que el director médico
pueda consultarlo después.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from core.domain.estado import EstadoSolicitud
from core.domain.models import FalloFuente, ReporteBases, Solicitud
from core.errors import SolicitudNoEncontradaError, TransicionInvalidaError
from core.interfaces.repositorio import RepositorioSolicitudes
from core.services.fachada import FachadaBasesExternas

logger = logging.getLogger(__name__)

MOTIVO_FRAUDE = "Fraude médico detectado"
MENSAJE_FALLO_REVISION = "Fallo la consulta automática. Puede intentar manualmente."
TIPO_VALIDACION = "BASES_EXTERNAS"


@dataclass
class ResultadoRevision:
    """Salida de una revisión automática."""

    solicitud: Solicitud
    reporte: ReporteBases | None = None
    errores: dict[str, FalloFuente] = field(default_factory=dict)
    detalle: str | None = None

    @property
    def estado(self) -> EstadoSolicitud:
        return self.solicitud.estado

    def validacion(self) -> dict[str, Any] | None:
        """Entrada consolidada de validación; `None` si no hubo decisión."""

        if self.estado is EstadoSolicitud.PENDIENTE:
            return None
        hay_fraude = self.estado is EstadoSolicitud.RECHAZADA
        return {
            "tipo_validacion": TIPO_VALIDACION,
            "resultado": not hay_fraude,
            "motivo_rechazo": MOTIVO_FRAUDE if hay_fraude else None,
            "validado_por": self.solicitud.revisado_por,
            "fecha_validacion": self.solicitud.fecha_validacion,
        }

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"estado": self.estado.value}
        if self.errores:
            out["errores"] = {k: v.to_dict() for k, v in self.errores.items()}
        elif self.reporte is not None:
            out["resultado"] = self.reporte.to_dict()
        validacion = self.validacion()
        if validacion is not None:
            out["validacion"] = validacion
        if self.detalle:
            out["error"] = MENSAJE_FALLO_REVISION
            out["detalle"] = self.detalle
        return out


class RevisorSolicitudes:
    def __init__(
        self,
        *,
        fachada: FachadaBasesExternas,
        repositorio: RepositorioSolicitudes,
    ) -> None:
        self._fachada = fachada
        self._repositorio = repositorio

    async def _cambiar_estado(
        self,
        solicitud: Solicitud,
        nuevo_estado: EstadoSolicitud,
        *,
        motivo: str | None = None,
        revisado_por: str | None = None,
    ) -> Solicitud:
        meta: dict[str, Any] = {"fecha_validacion": datetime.now(timezone.utc)}
        if revisado_por:
            meta["revisado_por"] = revisado_por
        if motivo:
            meta["motivo"] = motivo

        await self._repositorio.actualizar_estado(solicitud.id, nuevo_estado, meta)

        update: dict[str, Any] = {
            "estado": nuevo_estado,
            "fecha_validacion": meta["fecha_validacion"],
        }
        if revisado_por:
            update["revisado_por"] = revisado_por
        if motivo:
            update["motivo_decision"] = motivo
        return solicitud.model_copy(update=update)

    async def revisar(self, solicitud_id: str, *, revisado_por: str | None = None) -> ResultadoRevision:
        solicitud = await self._repositorio.obtener(solicitud_id)
        if solicitud is None:
            raise SolicitudNoEncontradaError(f"Solicitud no encontrada: {solicitud_id}")
        if not solicitud.estado.puede_revisar():
            raise TransicionInvalidaError(
                f"La solicitud ya fue {solicitud.estado.label()}. No se puede volver a revisar."
            )

        # Último estado persistido; si falla algo después de la transición, se devuelve este.
        actual = solicitud
        try:
            reporte = await self._fachada.consultar_bases(solicitud.identidad)

            errores = reporte.errores()
            if errores:
                logger.info(
                    "Solicitud %s sigue PENDIENTE: fuentes con error %s",
                    solicitud.id,
                    sorted(errores),
                )
                resultado = ResultadoRevision(solicitud=solicitud, reporte=reporte, errores=errores)
            else:
                if reporte.tiene_fraude:
                    actual = await self._cambiar_estado(
                        solicitud,
                        EstadoSolicitud.RECHAZADA,
                        motivo=MOTIVO_FRAUDE,
                        revisado_por=revisado_por,
                    )
                else:
                    actual = await self._cambiar_estado(
                        solicitud, EstadoSolicitud.APROBADA, revisado_por=revisado_por
                    )
                resultado = ResultadoRevision(solicitud=actual, reporte=reporte)

            await self._repositorio.guardar_resultado(solicitud.id, resultado.to_dict())
        except Exception as exc:
            # Sin transición la solicitud queda PENDIENTE para revisión manual.
            logger.error("Fallo revisión automática de solicitud %s: %s", solicitud.id, exc)
            await self._repositorio.guardar_resultado(solicitud.id, {"error": str(exc)})
            return ResultadoRevision(solicitud=actual, detalle=str(exc))

        logger.info("Solicitud %s revisada automáticamente -> %s", solicitud.id, resultado.estado.value)
        return resultado
