"""Logging estructurado (structlog).

Todo sale por stderr para no mezclarse con las tablas de la CLI en stdout.
Al importar el módulo queda configurado a nivel WARNING, así que usar
`MarvelClient` como librería no imprime nada en stdout.
"""

from __future__ import annotations

import logging
import sys

import structlog

DEFAULT_LEVEL = "WARNING"

renderer = structlog.dev.ConsoleRenderer(colors=True)

processors = [
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%H:%M:%S"),
    renderer,
]


def _stderr_logger(*args: object) -> structlog.WriteLogger:
    # `sys.stderr` se resuelve en cada log: puede cambiar tras configurar
    # (p.ej. CliRunner lo sustituye y lo cierra).
    return structlog.WriteLogger(file=sys.stderr)


def configure_logging(level: str = DEFAULT_LEVEL) -> None:
    level_no = logging.getLevelName(level.upper())
    if not isinstance(level_no, int):
        level_no = logging.WARNING

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_no),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None):
    return structlog.get_logger(name or "marvel_explorer")


configure_logging()
