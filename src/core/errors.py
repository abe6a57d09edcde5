"""Errores del dominio.

Distinguimos dos familias:
- Violaciones de contrato en construcción (fatales, se propagan).
- Fallos de una consulta externa (la fachada los convierte en datos).
"""

from __future__ import annotations


class BasesExternasError(Exception):
    """Base de todos los errores propios del proyecto."""


class ColaboradorFaltanteError(BasesExternasError, TypeError):
    """Se construyó la fachada sin uno de sus adaptadores."""


class IdentidadInvalidaError(BasesExternasError, ValueError):
    """El adaptador no pudo obtener un número de documento de la identidad."""


class ConsultaExternaError(BasesExternasError):
    """Una base externa respondió con un estado no exitoso."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SolicitudNoEncontradaError(BasesExternasError, LookupError):
    """No existe una solicitud con el id indicado."""


class TransicionInvalidaError(BasesExternasError):
    """Se intentó revisar una solicitud que ya no está pendiente."""
