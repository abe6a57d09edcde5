"""Configuración de logging para los entry-points.

Los módulos solo crean `logging.getLogger(__name__)`; quien ejecuta (CLI,
servidor, tests) decide handlers y nivel una única vez aquí.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING", *, console: Console | None = None) -> None:
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=resolved,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx registra cada request en INFO; solo lo queremos en DEBUG.
    if resolved > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
