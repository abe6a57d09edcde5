from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from adapters.external_sources import AdaptadorBDNNMock, AdaptadorPoliciaMock
from adapters.repositorio_memoria import RepositorioEnMemoria
from core.domain.estado import EstadoSolicitud
from core.domain.models import IdentidadPaciente, Solicitud
from core.errors import SolicitudNoEncontradaError, TransicionInvalidaError
from core.interfaces.repositorio import RepositorioSolicitudes
from core.services.fachada import FachadaBasesExternas
from core.services.revision import MOTIVO_FRAUDE, TIPO_VALIDACION, RevisorSolicitudes


def _fachada(scenario: str) -> FachadaBasesExternas:
    return FachadaBasesExternas(
        adaptador_clinico=AdaptadorBDNNMock(scenario),
        adaptador_policia=AdaptadorPoliciaMock(scenario),
    )


def _solicitud(estado: EstadoSolicitud = EstadoSolicitud.PENDIENTE) -> Solicitud:
    return Solicitud(id="sol-1", estado=estado, identidad=IdentidadPaciente(numero_identificacion="77"))


def _revisar(scenario: str, solicitud: Solicitud | None = None, *, revisado_por: str | None = None):
    solicitud = solicitud or _solicitud()
    repo = RepositorioEnMemoria([solicitud])
    revisor = RevisorSolicitudes(fachada=_fachada(scenario), repositorio=repo)
    return asyncio.run(revisor.revisar(solicitud.id, revisado_por=revisado_por)), repo


def _guardada(repo: RepositorioEnMemoria, solicitud_id: str = "sol-1") -> Solicitud:
    return asyncio.run(repo.obtener(solicitud_id))


# ---------------------------------------------------------------------------
# Decisiones
# ---------------------------------------------------------------------------

def test_memory_repository_fulfils_protocol():
    assert isinstance(RepositorioEnMemoria(), RepositorioSolicitudes)


def test_clean_request_is_approved():
    resultado, repo = _revisar("ok")

    assert resultado.estado is EstadoSolicitud.APROBADA
    assert _guardada(repo).estado is EstadoSolicitud.APROBADA
    guardado = repo.resultado("sol-1")["consultas"]
    assert guardado["estado"] == "APROBADA"
    assert guardado["resultado"]["policia"]["tiene_fraude"] is False


def test_fraud_rejects_with_reason():
    resultado, repo = _revisar("fraude")

    assert resultado.estado is EstadoSolicitud.RECHAZADA
    assert resultado.solicitud.motivo_decision == MOTIVO_FRAUDE
    assert _guardada(repo).motivo_decision == MOTIVO_FRAUDE


@pytest.mark.parametrize("scenario, fuentes", [("fail_one", {"clinico"}), ("fail_all", {"clinico", "policia"})])
def test_source_errors_keep_request_pending(scenario, fuentes):
    resultado, repo = _revisar(scenario)

    assert resultado.estado is EstadoSolicitud.PENDIENTE
    assert set(resultado.errores) == fuentes
    guardada = _guardada(repo)
    assert guardada.estado is EstadoSolicitud.PENDIENTE
    assert guardada.fecha_validacion is None
    consultas = repo.resultado("sol-1")["consultas"]
    assert set(consultas["errores"]) == fuentes
    assert "validacion" not in consultas


# ---------------------------------------------------------------------------
# Estado vigente
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("estado", [EstadoSolicitud.APROBADA, EstadoSolicitud.RECHAZADA])
def test_closed_request_cannot_be_reviewed(estado):
    with pytest.raises(TransicionInvalidaError):
        _revisar("ok", _solicitud(estado))


def test_stale_pending_copy_does_not_reopen_closed_request():
    solicitud = _solicitud()
    repo = RepositorioEnMemoria([solicitud])

    asyncio.run(RevisorSolicitudes(fachada=_fachada("ok"), repositorio=repo).revisar(solicitud.id))
    assert solicitud.estado is EstadoSolicitud.PENDIENTE

    revisor = RevisorSolicitudes(fachada=_fachada("fraude"), repositorio=repo)
    with pytest.raises(TransicionInvalidaError):
        asyncio.run(revisor.revisar(solicitud.id))

    assert _guardada(repo).estado is EstadoSolicitud.APROBADA
    assert _guardada(repo).motivo_decision is None


def test_unknown_request_raises_not_found():
    revisor = RevisorSolicitudes(fachada=_fachada("ok"), repositorio=RepositorioEnMemoria())

    with pytest.raises(SolicitudNoEncontradaError):
        asyncio.run(revisor.revisar("no-existe"))


# ---------------------------------------------------------------------------
# Auditoría
# ---------------------------------------------------------------------------

def test_final_state_records_reviewer_and_timestamp():
    resultado, repo = _revisar("ok", revisado_por="director-1")

    guardada = _guardada(repo)
    assert guardada.revisado_por == "director-1"
    assert isinstance(guardada.fecha_validacion, datetime)
    assert guardada.fecha_validacion.tzinfo is not None
    assert resultado.solicitud.revisado_por == "director-1"
    assert resultado.solicitud.fecha_validacion == guardada.fecha_validacion


def test_reviewer_is_optional():
    _, repo = _revisar("fraude")

    guardada = _guardada(repo)
    assert guardada.revisado_por is None
    assert guardada.fecha_validacion is not None


@pytest.mark.parametrize(
    "scenario, aprobada, motivo",
    [("ok", True, None), ("fraude", False, MOTIVO_FRAUDE)],
)
def test_stored_outcome_includes_validation_entry(scenario, aprobada, motivo):
    _, repo = _revisar(scenario, revisado_por="director-1")

    validacion = repo.resultado("sol-1")["consultas"]["validacion"]
    assert validacion["tipo_validacion"] == TIPO_VALIDACION
    assert validacion["resultado"] is aprobada
    assert validacion["motivo_rechazo"] == motivo
    assert validacion["validado_por"] == "director-1"
    assert validacion["fecha_validacion"] == _guardada(repo).fecha_validacion


# ---------------------------------------------------------------------------
# Fallos del repositorio
# ---------------------------------------------------------------------------

def test_repository_failure_keeps_request_pending():
    class FailingRepo(RepositorioEnMemoria):
        async def actualizar_estado(self, solicitud_id, nuevo_estado, meta=None):
            raise RuntimeError("db caída")

    solicitud = _solicitud()
    repo = FailingRepo([solicitud])
    revisor = RevisorSolicitudes(fachada=_fachada("ok"), repositorio=repo)

    resultado = asyncio.run(revisor.revisar(solicitud.id))

    assert resultado.estado is EstadoSolicitud.PENDIENTE
    assert resultado.detalle == "db caída"
    assert repo.resultado("sol-1") == {"consultas": {"error": "db caída"}}
    assert resultado.to_dict()["error"].startswith("Fallo la consulta automática")


def test_result_save_failure_reports_persisted_state():
    class FlakySaveRepo(RepositorioEnMemoria):
        def __init__(self, solicitudes):
            super().__init__(solicitudes)
            self.intentos = 0

        async def guardar_resultado(self, solicitud_id, resultado):
            self.intentos += 1
            if self.intentos == 1:
                raise RuntimeError("disco lleno")
            await super().guardar_resultado(solicitud_id, resultado)

    repo = FlakySaveRepo([_solicitud()])
    revisor = RevisorSolicitudes(fachada=_fachada("ok"), repositorio=repo)

    resultado = asyncio.run(revisor.revisar("sol-1"))

    assert _guardada(repo).estado is EstadoSolicitud.APROBADA
    assert resultado.estado is EstadoSolicitud.APROBADA
    assert resultado.detalle == "disco lleno"


def test_review_result_serializes_report():
    resultado, _ = _revisar("ok")
    data = resultado.to_dict()

    assert data["estado"] == "APROBADA"
    assert data["resultado"]["clinico"]["antecedentes"][0]["doc"] == "77"
