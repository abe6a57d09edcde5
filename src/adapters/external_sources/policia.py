"""Adaptador: antecedentes policiales.

La API responde `{"registros": [...]}` o `{"items": [...]}` según la versión;
ambas formas se normalizan a `{"antecedentes": [...]}`.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from adapters.external_sources.common import documento_de, normalize_base_url, raise_for_status
from adapters.http_client import build_async_client, safe_json
from core.config import AppSettings
from core.interfaces.adaptador import AdaptadorBDExterna


class AdaptadorPolicia(AdaptadorBDExterna):
    def __init__(
        self,
        base_url: str | None,
        *,
        token: str | None = None,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = normalize_base_url(base_url, adaptador="AdaptadorPolicia")
        self._token = token
        self._settings = settings or AppSettings()
        self._transport = transport

    async def consultar_paciente(self, identidad: Any) -> dict[str, Any]:
        doc = documento_de(identidad, fuente="consulta policial")
        url = f"{self._base_url}/antecedentes/{quote(doc, safe='')}"

        async with build_async_client(
            self._settings, token=self._token, transport=self._transport
        ) as client:
            response = await client.get(url)

        raise_for_status(response, fuente="Policía")

        data = safe_json(response)
        antecedentes: list[Any] = []
        if isinstance(data, dict):
            for key in ("registros", "items"):
                value = data.get(key)
                if isinstance(value, list):
                    antecedentes = value
                    break
        return {"antecedentes": antecedentes}
