"""Logging configuration.

Exposes a module-level ``logger`` that supports contextual dimensions:

    from presida.core.logging import logger

    log = logger.with_context(event_type="checkout.session.completed")
    log.info("Processing webhook event")

Outside local development records are emitted as JSON so the dimensions end up
as searchable fields.
"""

import logging
import sys
from typing import Any, MutableMapping

from pythonjsonlogger.json import JsonFormatter

from presida.core.config import settings

_LOGGER_NAME = "presida"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a dict of dimensions into every record."""

    def __init__(self, logger: logging.Logger, dimensions: dict[str, Any] | None = None):
        """Wrap *logger* with an initial set of dimensions."""
        super().__init__(logger, dimensions or {})
        self.dimensions: dict[str, Any] = dict(dimensions or {})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping]:
        """Merge the adapter dimensions into ``extra``."""
        extra = dict(self.dimensions)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        if settings.is_local and self.dimensions:
            dims = " ".join(f"{k}={v}" for k, v in self.dimensions.items())
            msg = f"{msg} [{dims}]"
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with additional dimensions."""
        merged = {**self.dimensions, **{k: v for k, v in dimensions.items() if v is not None}}
        return ContextualLogger(self.logger, merged)


def _build_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if settings.is_local:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    else:
        handler.setFormatter(
            JsonFormatter(
                "%(asctime)s %(levelname)s %(name)s %(message)s",
                json_ensure_ascii=False,
            )
        )
    return handler


def _configure_base_logger() -> logging.Logger:
    base = logging.getLogger(_LOGGER_NAME)
    if not base.handlers:
        base.addHandler(_build_handler())
    base.setLevel(settings.LOG_LEVEL.upper())
    base.propagate = False
    return base


logger = ContextualLogger(_configure_base_logger())
