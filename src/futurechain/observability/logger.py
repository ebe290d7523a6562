"""Structured logging with chain_id support.

Library modules log through ``logging.getLogger(__name__)``.  Records the
combinators emit carry the ``chain_id`` of the context the chain was built
in: asyncio runs every done callback inside a copy of the context that was
current when it was attached, so setting a chain id before building a chain
tags all of its records.

``setup_logging`` routes those stdlib records through structlog's
``ProcessorFormatter`` for JSON or console rendering.  Nothing is
configured on import.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

from futurechain.core.config import ObservabilityConfig
from futurechain.core.enums import LogFormat

# Context var for chain_id propagation
_chain_id: ContextVar[str] = ContextVar("chain_id", default="")


def get_chain_id() -> str:
    """Get the chain ID bound to the current context ("" when unset)."""
    return _chain_id.get()


def set_chain_id(chain_id: str) -> None:
    """Set chain ID in context."""
    _chain_id.set(chain_id)


def new_chain_id() -> str:
    """Generate and set a new chain ID."""
    cid = str(uuid.uuid4())
    _chain_id.set(cid)
    return cid


def chain_extra(**fields: Any) -> dict[str, Any]:
    """``extra=`` payload for a library log record, tagged with chain_id."""
    return {"chain_id": _chain_id.get(), **fields}


def _add_chain_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add chain_id unless the record already has one."""
    if "chain_id" not in event_dict:
        cid = _chain_id.get()
        if cid:
            event_dict["chain_id"] = cid
    return event_dict


class _StructlogHandler(logging.StreamHandler):
    """Marker type so repeated setup replaces the previous handler."""


def setup_logging(
    level: str = "INFO",
    format: str | LogFormat = LogFormat.CONSOLE,
) -> logging.Handler:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for production, "console" for development.

    Returns:
        The handler installed on the root logger.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if LogFormat(format) == LogFormat.JSON:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ExtraAdder(),
            _add_chain_id,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = _StructlogHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, _StructlogHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)
    return handler


def setup_logging_from_config(config: ObservabilityConfig) -> logging.Handler:
    """Configure logging from the ``observability`` section of Settings."""
    return setup_logging(level=config.log_level, format=config.log_format)
