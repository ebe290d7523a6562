"""Logging setup for applications using futurechain."""

from futurechain.observability.logger import (
    get_chain_id,
    new_chain_id,
    set_chain_id,
    setup_logging,
    setup_logging_from_config,
)

__all__ = [
    "get_chain_id",
    "new_chain_id",
    "set_chain_id",
    "setup_logging",
    "setup_logging_from_config",
]
