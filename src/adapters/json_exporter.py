"""Exportación JSON del reporte.

Por qué JSON:
- Es el formato que consume el handler HTTP y el expediente de la solicitud.
- Permite persistir evidencia sin depender de la presentación en consola.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import ReporteBases


def _default(value: Any) -> Any:
    # Payloads clínicos pueden traer modelos pydantic o fechas.
    dump = getattr(value, "model_dump", None)
    if callable(dump):
        return dump(mode="json")
    return str(value)


def report_to_json(reporte: ReporteBases) -> str:
    """Serializa el reporte con formato estable (claves ordenadas, UTF-8)."""

    return json.dumps(
        reporte.to_dict(),
        ensure_ascii=False,
        indent=2,
        sort_keys=True,
        default=_default,
    )


def export_report_json(*, reporte: ReporteBases, output_path: Path) -> Path:
    """Exporta `ReporteBases` a un archivo JSON UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(report_to_json(reporte) + "\n", encoding="utf-8")
    return output_path
