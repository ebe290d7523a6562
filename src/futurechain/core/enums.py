"""Enumerations used across futurechain."""

from enum import Enum


class SettlementState(str, Enum):
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"
    CANCELLED = "cancelled"  # Cancelled from outside via the host future


class FailureKind(str, Enum):
    DOMAIN = "domain"  # Structured DomainError raised by user code
    HOST = "host"  # Any other Python exception
    UNKNOWN = "unknown"  # Rejected with a non-exception value


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"
