"""
Logging
=======

structlog setup for farmhand. Output goes to stderr so command results
printed by the CLI stay clean on stdout.

Two renderers are available:
- JSON lines (default), one object per event, for CI logs
- Colored console output with rich tracebacks when DEBUG is set

Usage:
    from farmhand.utils.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Device pool created", pool_arn=pool.arn)
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import Processor

from farmhand import __version__
from farmhand.config import get_settings

# Third-party loggers that are too verbose below WARNING
_QUIET_LOGGERS = ("botocore", "boto3", "s3transfer", "urllib3", "aiohttp.access")


def add_app_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Stamp every event with the farmhand name and version."""
    event_dict["app"] = "farmhand"
    event_dict["version"] = __version__
    return event_dict


def _renderer_chain(use_json: bool) -> list[Processor]:
    if use_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.rich_traceback,
        )
    ]


def setup_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Call once from an entry point. Library code only calls ``get_logger``.

    Args:
        level: Log level name. Defaults to ``LOG_LEVEL`` from settings.
        json_logs: Force the JSON (True) or console (False) renderer.
            Defaults to console when ``DEBUG`` is set, JSON otherwise.
    """
    settings = get_settings().logging
    numeric_level = getattr(logging, (level or settings.log_level).upper())
    use_json = (not settings.debug) if json_logs is None else json_logs

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        *_renderer_chain(use_json),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # boto and aiohttp log through stdlib
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return the structlog logger for module ``name``."""
    return structlog.get_logger(name)


class LogContext:
    """
    Bind key/value pairs to every event logged inside a ``with`` block.

    Values bound by an enclosing LogContext are restored on exit, so
    contexts can be nested:

        with LogContext(project_arn=project):
            with LogContext(upload_arn=upload.arn):
                logger.info("Waiting")  # carries both keys
    """

    def __init__(self, **kwargs: Any) -> None:
        self.context = kwargs
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)
