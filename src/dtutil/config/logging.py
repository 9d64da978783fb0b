"""Logging setup for dtutil.

Modules log through stdlib ``logging.getLogger(__name__)``; structlog
renders those records on stderr, either as console lines or as JSON
(``--log-json``). Service calls bind the operation name with
:func:`operation_context`, so every line logged during a call carries
``op=format|parse|diff``.
"""

from __future__ import annotations

import logging
import sys
from contextlib import AbstractContextManager
from typing import Any

import structlog

LOGGER_NAME = "dtutil"


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install one stderr handler on the root logger.

    ``dtutil.*`` loggers log at DEBUG when *verbose*, WARNING otherwise.
    Other libraries stay at WARNING. Safe to call more than once.
    """
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*_processors(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_processors(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)


def operation_context(op: str, **values: Any) -> AbstractContextManager[Any]:
    """Bind *op* (and *values*) to every log line emitted inside the block."""
    return structlog.contextvars.bound_contextvars(op=op, **values)
