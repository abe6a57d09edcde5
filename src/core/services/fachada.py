"""Fachada sobre las bases externas (clínica + policía).

Responsabilidades:
- Consultar ambas fuentes en paralelo y esperar a que las dos terminen,
  sin abortar una por el fallo de la otra.
- Convertir cada fallo en un `FalloFuente` en su slot del reporte.
- Derivar `tiene_fraude` a partir de los antecedentes policiales.

La fachada no guarda estado entre llamadas: cada `consultar_bases` construye
y devuelve su propio `ReporteBases`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from core.domain.models import FalloFuente, ReporteBases, ResultadoPolicial
from core.errors import ColaboradorFaltanteError
from core.interfaces.adaptador import AdaptadorBDExterna
from core.services.fraud import DetectorFraude

logger = logging.getLogger(__name__)

FALLBACK_CLINICO = "clinical query failed"
FALLBACK_POLICIA = "policy query failed"


def _mensaje_error(exc: BaseException, fallback: str) -> str:
    message = str(exc).strip()
    return message or fallback


async def _invocar(adaptador: AdaptadorBDExterna, identidad: Any) -> Any:
    # Un adaptador que lanza antes de su primer await también queda capturado.
    return await adaptador.consultar_paciente(identidad)


def _antecedentes_de(payload: Any) -> Any:
    if isinstance(payload, Mapping):
        return payload.get("antecedentes")
    return getattr(payload, "antecedentes", None)


class FachadaBasesExternas:
    """Unifica la BD clínica y la base policial detrás de una sola llamada."""

    def __init__(
        self,
        *,
        adaptador_clinico: AdaptadorBDExterna,
        adaptador_policia: AdaptadorBDExterna,
        fraude_keywords: Iterable[object] | None = None,
    ) -> None:
        for nombre, adaptador in (
            ("adaptador_clinico", adaptador_clinico),
            ("adaptador_policia", adaptador_policia),
        ):
            if adaptador is None or not isinstance(adaptador, AdaptadorBDExterna):
                raise ColaboradorFaltanteError(
                    f"{nombre} es requerido y debe implementar consultar_paciente(identidad)."
                )

        self._adaptador_clinico = adaptador_clinico
        self._adaptador_policia = adaptador_policia
        self._detector = DetectorFraude(fraude_keywords)

    @property
    def fraude_keywords(self) -> tuple[str, ...]:
        return self._detector.keywords

    async def consultar_bases(self, identidad: Any) -> ReporteBases:
        """Consulta ambas fuentes y devuelve el reporte combinado.

        Nunca lanza por fallos de los adaptadores: quedan como datos en el slot
        correspondiente.
        """

        clinico_res, policia_res = await asyncio.gather(
            _invocar(self._adaptador_clinico, identidad),
            _invocar(self._adaptador_policia, identidad),
            return_exceptions=True,
        )

        clinico: Any
        if isinstance(clinico_res, BaseException):
            clinico = FalloFuente(error=_mensaje_error(clinico_res, FALLBACK_CLINICO))
            logger.warning("Consulta clínica fallida: %s", clinico.error)
        else:
            clinico = clinico_res

        policia: ResultadoPolicial | FalloFuente
        if isinstance(policia_res, BaseException):
            policia = FalloFuente(error=_mensaje_error(policia_res, FALLBACK_POLICIA))
            logger.warning("Consulta policial fallida: %s", policia.error)
        else:
            policia = self._detector.derivar(_antecedentes_de(policia_res))
            logger.debug(
                "Antecedentes policiales: %d registros, fraude=%s",
                len(policia.registros),
                policia.tiene_fraude,
            )

        return ReporteBases(clinico=clinico, policia=policia)
