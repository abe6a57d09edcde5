"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `consultar` y `revisar`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.estado import EstadoSolicitud
from core.domain.models import FalloFuente, ReporteBases, ResultadoPolicial
from core.services.fraud import texto_busqueda
from core.services.revision import ResultadoRevision


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Se omite en modo `--json` para no ensuciar pipelines.
    """

    title = Text("BASES EXTERNAS", style="bold cyan")
    subtitle = Text("Historial clínico • Antecedentes • Fraude", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _contar_antecedentes(payload: Any) -> str:
    antecedentes = payload.get("antecedentes") if isinstance(payload, Mapping) else None
    if isinstance(antecedentes, list):
        return f"{len(antecedentes)} antecedentes"
    return "payload recibido"


def build_report_table(reporte: ReporteBases) -> Table:
    table = Table(title="Bases externas")
    table.add_column("Fuente", style="cyan", no_wrap=True)
    table.add_column("Estado", style="white")
    table.add_column("Detalle", style="dim")

    if isinstance(reporte.clinico, FalloFuente):
        table.add_row("Clínica", "[red]ERROR[/red]", reporte.clinico.error)
    else:
        table.add_row("Clínica", "[green]OK[/green]", _contar_antecedentes(reporte.clinico))

    if isinstance(reporte.policia, ResultadoPolicial):
        estado = "[red]FRAUDE[/red]" if reporte.policia.tiene_fraude else "[green]SIN FRAUDE[/green]"
        table.add_row("Policía", estado, f"{len(reporte.policia.registros)} registros")
    else:
        table.add_row("Policía", "[red]ERROR[/red]", reporte.policia.error)
    return table


def build_antecedentes_table(resultado: ResultadoPolicial) -> Table:
    table = Table(title="Antecedentes policiales")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Texto", style="white")
    for idx, registro in enumerate(resultado.registros, start=1):
        table.add_row(str(idx), texto_busqueda(registro) or "-")
    return table


def build_revision_panel(resultado: ResultadoRevision) -> Panel:
    colores = {
        EstadoSolicitud.APROBADA: "green",
        EstadoSolicitud.RECHAZADA: "red",
        EstadoSolicitud.PENDIENTE: "yellow",
    }
    color = colores[resultado.estado]

    body = Text()
    body.append(f"Solicitud: {resultado.solicitud.id}\n")
    body.append(f"Estado: {resultado.estado.value}\n", style=f"bold {color}")
    if resultado.solicitud.motivo_decision:
        body.append(f"Motivo: {resultado.solicitud.motivo_decision}\n")
    if resultado.solicitud.revisado_por:
        body.append(f"Revisado por: {resultado.solicitud.revisado_por}\n")
    for fuente, fallo in resultado.errores.items():
        body.append(f"Error {fuente}: {fallo.error}\n", style="red")
    if resultado.detalle:
        body.append(f"Detalle: {resultado.detalle}\n", style="red")

    return Panel(body, title=Text("Revisión automática", style="bold"), border_style=color)
