"""
Tagged parse results.

Every fallible parsing step returns a ParseOutcome instead of raising, so
callers have to look at `.ok` before touching `.value`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

# ── Failure reasons ──────────────────────────────────────────────────────────
EMPTY            = "empty response"
NO_TIME          = "no time in line"
TIME_NOT_FOUND   = "time not found in response"
UNPARSEABLE_TIME = "could not parse time"
INVALID_JSON     = "invalid json"
NO_OBJECT        = "no json object"


@dataclass(frozen=True)
class ParseOutcome(Generic[T]):
    """Either a parsed value or the reason parsing failed."""
    value: Optional[T] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "ParseOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str) -> "ParseOutcome[T]":
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        return self.reason is None

    def value_or(self, default: T) -> T:
        return self.value if self.ok else default
