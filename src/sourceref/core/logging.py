"""Structured logging: structlog events rendered by stdlib logging handlers.

Module loggers are lazy structlog proxies, so a logger created at import
time follows whatever configure_logging() installs later.

- One handler per LoggingConfig output (stderr, stdout or an absolute file)
- Console or JSON rendering, chosen per output
- Correlation id and per-resolution context via structlog.contextvars
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from sourceref.config.models import LoggingConfig, LogOutputConfig

# Transport libraries log every request at INFO/DEBUG
_QUIET_LIBRARIES = ("httpx", "httpcore")

_PRE_CHAIN: list[structlog.typing.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
]


def set_request_id(request_id: str | None = None) -> str:
    """Tag every event logged from the current context with a correlation id."""
    rid = request_id or uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(request_id=rid)
    return rid


def _level(name: str) -> int:
    return logging.getLevelNamesMapping()[name.upper()]


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
    verbose: bool = False,
) -> None:
    """Install handlers for every configured output.

    Args:
        config: Outputs and levels. When omitted, a single stderr output is
                built from ``json_format`` and ``level``.
        json_format: JSON rendering for the implicit stderr output
        level: Level for the implicit stderr output
        verbose: Force DEBUG on the root logger and on every output
    """
    from sourceref.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = logging.DEBUG if verbose else _level(config.level)

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Proxies re-read this configuration on every call
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(root_level)

    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    for output in config.outputs:
        handler = _handler_for(output)
        if verbose:
            handler.setLevel(logging.DEBUG)
        else:
            handler.setLevel(_level(output.level or config.level))
        root.addHandler(handler)


def _handler_for(output: LogOutputConfig) -> logging.Handler:
    handler: logging.Handler
    if output.destination in ("stderr", "stdout"):
        stream = sys.stderr if output.destination == "stderr" else sys.stdout
        handler = logging.StreamHandler(stream)
        is_tty = stream.isatty()
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        is_tty = False

    renderer: structlog.typing.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=is_tty, pad_event_to=0, pad_level=False)

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=_PRE_CHAIN,
        )
    )
    return handler


def get_logger(name: str) -> Any:
    """Lazy logger tagged with ``logger=name``.

    Each call goes through the configuration active at that moment.
    """
    # get_logger(logger=...) collides with wrap_logger's ``logger`` parameter
    return structlog._config.BoundLoggerLazyProxy(None, initial_values={"logger": name})
