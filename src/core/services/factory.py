"""Construcción de la fachada a partir de la configuración.

Selecciona adaptadores reales o simulados según `use_mocks` sin que el resto
del flujo cambie.
"""

from __future__ import annotations

import logging

from adapters.external_sources import (
    AdaptadorBDNN,
    AdaptadorBDNNMock,
    AdaptadorPolicia,
    AdaptadorPoliciaMock,
)
from core.config import AppSettings
from core.services.fachada import FachadaBasesExternas

logger = logging.getLogger(__name__)


def construir_fachada(settings: AppSettings | None = None) -> FachadaBasesExternas:
    settings = settings or AppSettings()

    if settings.use_mocks:
        logger.info("Usando adaptadores simulados (escenario=%s)", settings.mock_scenario)
        clinico = AdaptadorBDNNMock(settings.mock_scenario, latency_ms=settings.mock_latency_ms)
        policia = AdaptadorPoliciaMock(settings.mock_scenario, latency_ms=settings.mock_latency_ms)
    else:
        clinico = AdaptadorBDNN(settings.bdnn_base_url, token=settings.bdnn_token, settings=settings)
        policia = AdaptadorPolicia(
            settings.policia_base_url,
            token=settings.policia_token,
            settings=settings,
        )

    return FachadaBasesExternas(
        adaptador_clinico=clinico,
        adaptador_policia=policia,
        fraude_keywords=settings.fraude_keywords,
    )
