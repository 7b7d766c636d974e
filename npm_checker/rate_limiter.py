"""Request pacing for quota-constrained APIs.

Two layers compose on every gated call:

1. A token bucket that caps the steady request rate no matter what the server
   says. This is the floor guarantee, since header-reported quota can lag
   real usage.
2. A reactive check driven by ``X-RateLimit-Remaining`` / ``X-RateLimit-Reset``
   from the last response. When the remaining allowance hits zero, the next
   call sleeps until the reported reset time.

Call order for each request: ``acquire()`` -> send -> ``update_from_headers()``.
"""

import logging
import threading
import time
from collections.abc import Mapping

logger = logging.getLogger(__name__)

REMAINING_HEADER = "X-RateLimit-Remaining"
RESET_HEADER = "X-RateLimit-Reset"

DEFAULT_REQUESTS_PER_MINUTE = 29
QUOTA_WINDOW_SECONDS = 60.0


class Clock:
    """Wall time, monotonic time and blocking sleep.

    Swap in a fake in tests to simulate reset windows without sleeping.
    """

    def time(self) -> float:
        return time.time()

    def monotonic(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class TokenBucket:
    """Token bucket refilled at ``rate`` tokens/second, holding up to ``burst``.

    Reservations may drive the token count negative; the caller then sleeps
    off the deficit. Not thread-safe on its own, see RateLimiter.
    """

    def __init__(self, rate: float, burst: int = 1, clock: Clock | None = None):
        if rate <= 0:
            raise ValueError(f"rate must be positive, got {rate}")
        if burst < 1:
            raise ValueError(f"burst must be at least 1, got {burst}")
        self.rate = rate
        self.burst = burst
        self._clock = clock or Clock()
        self._tokens = float(burst)
        self._last = self._clock.monotonic()

    def _refill(self, now: float) -> None:
        elapsed = max(0.0, now - self._last)
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
        self._last = now

    def reserve(self) -> float:
        """Take one token and return how long to wait before using it."""
        self._refill(self._clock.monotonic())
        self._tokens -= 1
        if self._tokens >= 0:
            return 0.0
        return -self._tokens / self.rate

    def wait(self) -> float:
        """Block until a token is available. Returns the seconds slept."""
        delay = self.reserve()
        if delay > 0:
            self._clock.sleep(delay)
        return delay


class RateLimiter:
    """Paces calls with a token bucket plus server-reported quota.

    Build one per process and pass it to every client that talks to the
    quota-constrained API.
    """

    def __init__(
        self,
        requests_per_minute: int = DEFAULT_REQUESTS_PER_MINUTE,
        burst: int = 1,
        clock: Clock | None = None,
    ):
        self._clock = clock or Clock()
        self._bucket = TokenBucket(requests_per_minute / 60, burst, clock=self._clock)
        self._lock = threading.Lock()
        self.requests_per_minute = requests_per_minute
        # Seeded optimistically so nothing waits before the first response
        self.remaining = requests_per_minute
        self.reset = self._clock.time() + QUOTA_WINDOW_SECONDS
        self.reactive_waits = 0
        self.throttled_seconds = 0.0

    def wait(self) -> None:
        """Token-bucket wait."""
        self.throttled_seconds += self._bucket.wait()

    def check_rate_limit(self) -> None:
        """Sleep until the quota window resets if the last response said we're out."""
        if self.remaining > 0:
            return
        wait_time = self.reset - self._clock.time()
        if wait_time <= 0:
            return
        logger.warning("Rate limit reached. Waiting for %.0fs before next request.", wait_time)
        self.reactive_waits += 1
        self.throttled_seconds += wait_time
        self._clock.sleep(wait_time)

    def acquire(self) -> None:
        """Admission gate: run before every request to the paced API."""
        with self._lock:
            self.wait()
            self.check_rate_limit()

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Overwrite quota state from a response's rate limit headers.

        Absent headers leave the tracked value alone; so do values that don't
        parse as integers.
        """
        remaining = _parse_header_int(headers.get(REMAINING_HEADER))
        reset = _parse_header_int(headers.get(RESET_HEADER))
        with self._lock:
            if remaining is not None:
                self.remaining = remaining
            if reset is not None:
                self.reset = float(reset)
        if remaining is not None or reset is not None:
            logger.debug("Quota now %s remaining, resets at %s", self.remaining, self.reset)


def _parse_header_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring unparseable rate limit header value %r", value)
        return None
