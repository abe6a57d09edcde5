"""Adaptadores simulados (demos y tests).

Escenarios soportados (`BASES_EXT_MOCK_SCENARIO`):
- `ok`        => clínico OK, policía sin fraude
- `fraude`    => clínico OK, policía detecta fraude
- `fail_one`  => clínico falla, policía OK
- `fail_all`  => clínico falla, policía falla

La latencia simulada permite ejercitar la concurrencia de la fachada sin
depender de las APIs reales.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

from adapters.external_sources.common import documento_de
from core.interfaces.adaptador import AdaptadorBDExterna

logger = logging.getLogger(__name__)

ESCENARIOS: tuple[str, ...] = ("ok", "fraude", "fail_one", "fail_all")


def _normalize_scenario(scenario: str | None) -> str:
    value = (scenario or "ok").strip().lower()
    if value not in ESCENARIOS:
        raise ValueError(f"Escenario mock desconocido: {scenario!r} (usa {', '.join(ESCENARIOS)})")
    return value


class _AdaptadorMock(AdaptadorBDExterna, ABC):
    _fuente = "mock"

    def __init__(self, scenario: str | None = "ok", *, latency_ms: int = 0) -> None:
        self.scenario = _normalize_scenario(scenario)
        self.latency_ms = max(0, latency_ms)

    async def _sleep(self) -> None:
        if self.latency_ms <= 0:
            return
        await asyncio.sleep(self.latency_ms / 1000.0)

    @abstractmethod
    def _debe_fallar(self) -> bool:
        ...

    @abstractmethod
    def _antecedentes(self, doc: str) -> list[dict[str, Any]]:
        ...

    async def consultar_paciente(self, identidad: Any) -> dict[str, Any]:
        doc = documento_de(identidad, fuente=self._fuente)
        await self._sleep()

        if self._debe_fallar():
            logger.warning("Mock %s: FAIL (doc=%s)", self._fuente, doc)
            raise ConnectionError(f"fetch failed ({self._fuente})")

        antecedentes = self._antecedentes(doc)
        logger.debug("Mock %s: OK (doc=%s, count=%d)", self._fuente, doc, len(antecedentes))
        return {"antecedentes": antecedentes}


class AdaptadorBDNNMock(_AdaptadorMock):
    _fuente = "clinico"

    def _debe_fallar(self) -> bool:
        return self.scenario in ("fail_one", "fail_all")

    def _antecedentes(self, doc: str) -> list[dict[str, Any]]:
        return [{"tipo": "consulta", "descripcion": "historial clínico normal", "doc": doc}]


class AdaptadorPoliciaMock(_AdaptadorMock):
    _fuente = "policia"

    def _debe_fallar(self) -> bool:
        return self.scenario == "fail_all"

    def _antecedentes(self, doc: str) -> list[dict[str, Any]]:
        if self.scenario == "fraude":
            return [{"tipo": "fraude", "descripcion": "Fraude a aseguradora", "doc": doc}]
        return [{"tipo": "consulta", "descripcion": "sin registros graves", "doc": doc}]
