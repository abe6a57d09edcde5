"""CLI principal (typer).

Comandos:
- `consultar`: cruza un documento contra ambas bases y muestra el reporte.
- `revisar`: ejecuta la revisión automática de una solicitud pendiente.
- `doctor`: diagnóstico de configuración.
"""

from __future__ import annotations

import asyncio
import json
import uuid
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_report_json, report_to_json
from adapters.repositorio_memoria import RepositorioEnMemoria
from cli import doctor
from cli.ui_components import (
    build_antecedentes_table,
    build_report_table,
    build_revision_panel,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import IdentidadPaciente, ResultadoPolicial, Solicitud
from core.logging_setup import configure_logging
from core.services.factory import construir_fachada
from core.services.fachada import FachadaBasesExternas
from core.services.revision import RevisorSolicitudes

app = typer.Typer(
    no_args_is_help=True,
    help="Verificación de pacientes contra bases externas (clínica + policía).",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _settings(mocks: bool | None, scenario: str | None) -> AppSettings:
    settings = AppSettings()
    update: dict[str, object] = {}
    if mocks is not None:
        update["use_mocks"] = mocks
    if scenario:
        update["mock_scenario"] = scenario
    return settings.model_copy(update=update) if update else settings


def _fachada(settings: AppSettings) -> FachadaBasesExternas:
    try:
        return construir_fachada(settings)
    except ValueError as exc:
        _console.print(f"[red]Configuración inválida:[/red] {exc}")
        _console.print("Define las base URLs (BASES_EXT_*) o usa --mocks.")
        raise typer.Exit(code=2) from exc


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Nivel de logging (por defecto BASES_EXT_LOG_LEVEL).",
    ),
) -> None:
    configure_logging(log_level or AppSettings().log_level)


@app.command()
def consultar(
    documento: str = typer.Argument(..., help="Número de identificación del paciente."),
    mocks: Optional[bool] = typer.Option(None, "--mocks/--no-mocks", help="Forzar adaptadores simulados."),
    scenario: Optional[str] = typer.Option(None, "--scenario", help="Escenario mock (ok, fraude, fail_one, fail_all)."),
    as_json: bool = typer.Option(False, "--json", help="Imprimir el reporte como JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Guardar el reporte JSON en esta ruta."),
) -> None:
    """Consulta historial clínico y antecedentes policiales de un paciente."""

    settings = _settings(mocks, scenario)
    fachada = _fachada(settings)
    identidad = IdentidadPaciente(numero_identificacion=documento)

    reporte = asyncio.run(fachada.consultar_bases(identidad))

    if as_json:
        typer.echo(report_to_json(reporte))
    else:
        print_banner(_console)
        _console.print(build_report_table(reporte))
        if isinstance(reporte.policia, ResultadoPolicial) and reporte.policia.registros:
            _console.print(build_antecedentes_table(reporte.policia))

    if output is not None:
        path = export_report_json(reporte=reporte, output_path=output)
        if not as_json:
            _console.print(f"[green]Reporte guardado en:[/green] {path}")


@app.command()
def revisar(
    documento: str = typer.Argument(..., help="Número de identificación del paciente."),
    solicitud_id: Optional[str] = typer.Option(None, "--solicitud-id", help="Id de la solicitud (por defecto uno nuevo)."),
    mocks: Optional[bool] = typer.Option(None, "--mocks/--no-mocks", help="Forzar adaptadores simulados."),
    scenario: Optional[str] = typer.Option(None, "--scenario", help="Escenario mock (ok, fraude, fail_one, fail_all)."),
    revisado_por: Optional[str] = typer.Option(None, "--revisado-por", help="Usuario que registra la revisión."),
    as_json: bool = typer.Option(False, "--json", help="Imprimir el resultado como JSON."),
) -> None:
    """Revisa automáticamente una solicitud pendiente (APROBADA / RECHAZADA)."""

    settings = _settings(mocks, scenario)
    fachada = _fachada(settings)

    solicitud = Solicitud(
        id=solicitud_id or uuid.uuid4().hex,
        identidad=IdentidadPaciente(numero_identificacion=documento),
    )
    repositorio = RepositorioEnMemoria([solicitud])
    revisor = RevisorSolicitudes(fachada=fachada, repositorio=repositorio)

    resultado = asyncio.run(revisor.revisar(solicitud.id, revisado_por=revisado_por))

    if as_json:
        typer.echo(json.dumps(resultado.to_dict(), ensure_ascii=False, indent=2, sort_keys=True, default=str))
        return

    _console.print(build_revision_panel(resultado))
    if resultado.reporte is not None:
        _console.print(build_report_table(resultado.reporte))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
