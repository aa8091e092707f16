"""structlog setup for pimctl, routed through stdlib logging.

Everything goes to stderr; stdout carries only command results. With
``--log-json`` each record is a JSON object on its own line, otherwise the
structlog console renderer is used (colored only on a TTY).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

LOGGER_NAME = "pimctl"


def get_logger(name: str) -> Any:
    """structlog logger over the stdlib logger *name*.

    Until :func:`configure_logging` runs, records go through stdlib
    logging unconfigured: debug/info are dropped and warnings reach stderr
    via the last-resort handler. Nothing is ever written to stdout.
    """
    return structlog.wrap_logger(logging.getLogger(name))


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(*, log_json: bool) -> logging.Handler:
    final: structlog.types.Processor
    if log_json:
        final = structlog.processors.JSONRenderer(ensure_ascii=False)
        tail = [structlog.processors.dict_tracebacks, final]
    else:
        final = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        tail = [final]

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *tail],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """(Re)configure logging for one invocation.

    ``verbose`` lowers the ``pimctl`` logger to DEBUG; third-party loggers
    stay at WARNING either way. Safe to call repeatedly: the root handler is
    replaced, not stacked.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers[:] = [_stderr_handler(log_json=log_json)]
    root.setLevel(logging.WARNING)
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)


def bind_invocation(*, config_root: str, profile: str | None) -> None:
    """Attach the policy source to every log line of this invocation."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(config_root=config_root, profile=profile or "-")
