"""
structlog setup for switchyard's log events.

Library code logs through the stdlib "switchyard" logger and never
configures anything itself. configure_structlog() configures structlog for
the application and routes those stdlib records through the same processor
chain, so driver events and application events come out in one format.
"""

from __future__ import annotations

import logging

import structlog

from switchyard.config import SwitchyardSettings, get_settings

LOGGER_NAME = "switchyard"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def configure_structlog(settings: SwitchyardSettings | None = None) -> None:
    """
    Configure structlog for structured logging.

    log_format="json": JSON lines (machine-readable).
    log_format="console": colored, human-readable console output.
    """
    settings = settings or get_settings()
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[*_shared_processors(), renderer],
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level_number),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    library_logger = logging.getLogger(LOGGER_NAME)
    for existing in list(library_logger.handlers):
        library_logger.removeHandler(existing)
    library_logger.addHandler(handler)
    library_logger.setLevel(settings.log_level_number)
    library_logger.propagate = False
