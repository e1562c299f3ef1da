"""structlog setup and per-repeater log context.

Modules log through ``logging.getLogger(__name__)``; the formatter installed
here renders those records with the structlog context bound by
``log_context`` (the repeater being mapped, the CLI command), as console
lines in development and JSON in production.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from json_repeaters.config import Settings


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def configure_logging(
    level: str | None = None,
    json_output: bool | None = None,
    settings: Settings | None = None,
) -> None:
    """Install a single stderr handler on the root logger.

    ``level`` falls back to LOG_LEVEL and ``json_output`` to APP_ENV == "prod".
    """
    if level is None or json_output is None:
        from json_repeaters.config import get_settings

        settings = settings or get_settings()
        level = level or settings.log_level
        if json_output is None:
            json_output = settings.app_env == "prod"

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


@contextmanager
def log_context(**kwargs: object) -> Iterator[None]:
    """Attach key-value pairs to every record logged inside the block."""
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
