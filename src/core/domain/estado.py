"""Estados de una solicitud de registro.

Vive en la capa de dominio para que servicios y CLI compartan una única
fuente de verdad sin importar adaptadores.
"""

from __future__ import annotations

from enum import Enum


class EstadoSolicitud(str, Enum):
    """Ciclo de vida de una solicitud revisada contra las bases externas."""

    PENDIENTE = "PENDIENTE"
    APROBADA = "APROBADA"
    RECHAZADA = "RECHAZADA"

    def puede_revisar(self) -> bool:
        """Solo una solicitud pendiente admite revisión automática."""

        return self is EstadoSolicitud.PENDIENTE

    def label(self) -> str:
        return self.value.lower()
