"""
Retry/backoff executor for calls to the DNS backend.

Every remote call goes through a RetryExecutor. The executor only decides
whether to try again; the exception that finally escapes is always the one
raised by the last attempt.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Optional

import requests

from ..exceptions import ApiError

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})
RETRYABLE_REASONS = frozenset(
    {"rateLimitExceeded", "userRateLimitExceeded", "backendError"}
)


@dataclass(frozen=True)
class RetryPolicy:
    """How many times, and how patiently, to retry a remote call."""

    max_retries: int = 3
    base_delay: float = 1.0
    multiplier: float = 2.0
    max_delay: float = 32.0
    jitter: bool = True
    retryable_statuses: FrozenSet[int] = field(default=RETRYABLE_STATUSES)
    retryable_reasons: FrozenSet[str] = field(default=RETRYABLE_REASONS)

    @classmethod
    def from_config(cls, config: Optional[Dict]) -> "RetryPolicy":
        """Build a policy from the ``retry`` section of the configuration."""
        config = config or {}
        defaults = cls()
        return cls(
            max_retries=int(config.get("max_retries", defaults.max_retries)),
            base_delay=float(config.get("base_delay", defaults.base_delay)),
            multiplier=float(config.get("multiplier", defaults.multiplier)),
            max_delay=float(config.get("max_delay", defaults.max_delay)),
            jitter=bool(config.get("jitter", defaults.jitter)),
        )

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the given (zero-based) failed attempt."""
        delay = min(self.max_delay, self.base_delay * (self.multiplier ** attempt))
        if self.jitter:
            delay = random.uniform(delay / 2, delay)
        return delay

    def is_retryable(self, error: Exception) -> bool:
        """Classify a failure as transient (retry) or fatal (propagate)."""
        if isinstance(error, ApiError):
            if error.status_code in self.retryable_statuses:
                return True
            return error.reason in self.retryable_reasons
        # Connection resets and timeouts are the transport's "unavailable".
        return isinstance(error, (requests.ConnectionError, requests.Timeout))


class RetryExecutor:
    """Runs a callable, retrying transient failures with exponential backoff."""

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    def execute(
        self,
        func: Callable[..., Any],
        *args,
        max_retries: Optional[int] = None,
        **kwargs,
    ) -> Any:
        """
        Call ``func(*args, **kwargs)`` until it succeeds or fails for good.

        Args:
            func: Performs exactly one remote call
            max_retries: Overrides the policy's retry count for this call

        Returns:
            Whatever ``func`` returns

        Raises:
            The exception of the last attempt, unchanged
        """
        retries = self.policy.max_retries if max_retries is None else max_retries
        attempt = 0
        while True:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if attempt >= retries or not self.policy.is_retryable(e):
                    raise
                delay = self.policy.delay_for(attempt)
                attempt += 1
                logger.warning(
                    f"Transient failure calling {getattr(func, '__name__', func)}: "
                    f"{e} (retry {attempt}/{retries} in {delay:.2f}s)"
                )
                self._sleep(delay)
