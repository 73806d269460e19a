"""Retry policy and request lifecycle states for the API client."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass


@enum.unique
class RequestState(enum.StrEnum):
    """States a single logical request moves through.

    ADMITTING -> REQUESTING -> DONE on success. A 429 leads to COOLING_DOWN
    and back to ADMITTING without consuming an attempt; a transport failure
    leads to BACKING_OFF and back to ADMITTING until the attempt budget is
    spent, then to FAILED. Non-retryable errors go straight to FAILED.
    """

    ADMITTING = "admitting"
    REQUESTING = "requesting"
    BACKING_OFF = "backing_off"
    COOLING_DOWN = "cooling_down"
    DONE = "done"
    FAILED = "failed"


StateCallback = Callable[[RequestState, int], None]


@dataclass(frozen=True)
class RetryPolicy:
    """Retry timing for the API client.

    Attributes:
        max_attempts: Attempts allowed for transport failures
        backoff_seconds: Base of the linear backoff (delay = base * attempt)
        throttle_cooldown: Fixed wait after an HTTP 429 response
    """

    max_attempts: int = 3
    backoff_seconds: float = 2.0
    throttle_cooldown: float = 60.0

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retrying after the given failed attempt (1-based)."""
        return self.backoff_seconds * attempt

    def can_retry(self, attempt: int) -> bool:
        """Whether another attempt is allowed after ``attempt`` failures."""
        return attempt < self.max_attempts
