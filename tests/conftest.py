from __future__ import annotations

import asyncio
import os
from typing import Any

import pytest

from core.config import AppSettings


class FakeAdapter:
    """Adaptador en memoria con latencia y fallo configurables."""

    def __init__(
        self,
        payload: Any = None,
        *,
        error: BaseException | None = None,
        delay: float = 0.0,
    ) -> None:
        self.payload = payload
        self.error = error
        self.delay = delay
        self.calls: list[Any] = []
        self.finished = False

    async def consultar_paciente(self, identidad: Any) -> Any:
        self.calls.append(identidad)
        if self.delay:
            await asyncio.sleep(self.delay)
        self.finished = True
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def clinical_payload() -> dict[str, Any]:
    return {"antecedentes": [{"tipo": "consulta", "descripcion": "control anual"}]}


@pytest.fixture
def police_records() -> list[dict[str, Any]]:
    return [
        {"tipo": "Robo", "descripcion": "sin relación"},
        {"categoria": "Corrupción administrativa"},
    ]


@pytest.fixture
def make_adapter() -> type[FakeAdapter]:
    return FakeAdapter


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Aísla `AppSettings` de cualquier `.env` y variable `BASES_EXT_*` del entorno."""

    for name in list(os.environ):
        if name.startswith("BASES_EXT_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    # La ruta del .env de usuario se fija al importar core.config.
    monkeypatch.setitem(AppSettings.model_config, "env_file", ".env")
