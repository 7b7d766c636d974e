"""Shared fixtures: a deterministic clock for rate limiter tests."""

import pytest


class FakeClock:
    """Clock whose sleep() advances time instantly."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += max(seconds, 0.0)


@pytest.fixture
def clock():
    return FakeClock()
