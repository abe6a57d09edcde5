"""Modelos del dominio.

Por qué dos estilos:
- Pydantic v2 para lo que entra por el borde (identidad, solicitudes): nos da
  validación estricta y documentación autocontenida (Field).
- Dataclasses congeladas para los resultados de una consulta: viven lo que dura
  la llamada y deben transportar los payloads externos *tal cual* (sin copiar
  ni revalidar).

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.estado import EstadoSolicitud


DEFAULT_FRAUDE_KEYWORDS: tuple[str, ...] = (
    "fraude",
    "estafa",
    "falsificación",
    "corrupción",
)

# Orden fijo en el que se concatenan los campos de texto de un antecedente.
CAMPOS_TEXTO_ANTECEDENTE: tuple[str, ...] = (
    "tipo",
    "descripcion",
    "categoria",
    "detalle",
    "delito",
)


class IdentidadPaciente(BaseModel):
    """Identidad de un paciente tal como la consumen los adaptadores HTTP.

    La fachada no la inspecciona: solo la reenvía a ambos adaptadores.
    """

    model_config = ConfigDict(frozen=True)

    numero_identificacion: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Número de documento usado como clave en las bases externas.",
    )
    tipo_documento: str | None = Field(
        default=None,
        max_length=16,
        description="Tipo de documento (CC, TI, CE...) si se conoce.",
    )


class Solicitud(BaseModel):
    """Solicitud de registro sujeta a revisión automática."""

    id: str = Field(..., min_length=1, description="Identificador de la solicitud.")
    estado: EstadoSolicitud = Field(
        default=EstadoSolicitud.PENDIENTE,
        description="Estado actual de la solicitud.",
    )
    identidad: IdentidadPaciente | str = Field(
        ...,
        description="Identidad del paciente a verificar.",
    )
    motivo_decision: str | None = Field(
        default=None,
        description="Motivo registrado al rechazar.",
    )
    revisado_por: str | None = Field(
        default=None,
        description="Usuario que disparó la revisión que cerró la solicitud.",
    )
    fecha_validacion: datetime | None = Field(
        default=None,
        description="Momento (UTC) en que la solicitud pasó a APROBADA/RECHAZADA.",
    )


@dataclass(frozen=True)
class FalloFuente:
    """Descriptor de fallo de una fuente externa."""

    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error}


@dataclass(frozen=True)
class ResultadoPolicial:
    """Señal de fraude derivada de los antecedentes policiales.

    `registros` es la misma lista devuelta por el adaptador, sin tocar.
    """

    tiene_fraude: bool
    registros: list[Any]

    def to_dict(self) -> dict[str, Any]:
        return {"tiene_fraude": self.tiene_fraude, "registros": self.registros}


@dataclass(frozen=True)
class ReporteBases:
    """Reporte combinado: un slot clínico y un slot policial independientes."""

    clinico: Any  # payload del adaptador o FalloFuente
    policia: ResultadoPolicial | FalloFuente

    @property
    def clinico_ok(self) -> bool:
        return not isinstance(self.clinico, FalloFuente)

    @property
    def policia_ok(self) -> bool:
        return not isinstance(self.policia, FalloFuente)

    @property
    def tiene_fraude(self) -> bool | None:
        """`None` cuando la determinación no pudo hacerse."""

        if isinstance(self.policia, ResultadoPolicial):
            return self.policia.tiene_fraude
        return None

    def errores(self) -> dict[str, FalloFuente]:
        out: dict[str, FalloFuente] = {}
        if isinstance(self.clinico, FalloFuente):
            out["clinico"] = self.clinico
        if isinstance(self.policia, FalloFuente):
            out["policia"] = self.policia
        return out

    def to_dict(self) -> dict[str, Any]:
        clinico = self.clinico.to_dict() if isinstance(self.clinico, FalloFuente) else self.clinico
        return {"clinico": clinico, "policia": self.policia.to_dict()}
