"""Fetch metrics - per-profile attempt tracking."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict

from .classification import AttemptOutcome, AttemptResult


@dataclass
class ProfileStats:
    attempts: int = 0
    successes: int = 0
    outcomes: Counter = field(default_factory=Counter)

    @property
    def success_rate(self) -> float:
        """Success rate (0.0~1.0)."""
        return self.successes / self.attempts if self.attempts > 0 else 0.0


@dataclass
class FetchMetrics:
    """Counters for fetcher activity, exposed on /health."""

    fetches: int = 0
    fetch_successes: int = 0
    not_found: int = 0
    exhausted: int = 0
    profiles: Dict[str, ProfileStats] = field(default_factory=dict)

    def record_attempt(self, attempt: AttemptResult) -> None:
        stats = self.profiles.setdefault(attempt.profile_name, ProfileStats())
        stats.attempts += 1
        stats.outcomes[attempt.outcome.value] += 1
        if attempt.outcome is AttemptOutcome.SUCCESS:
            stats.successes += 1

    def record_fetch_started(self) -> None:
        self.fetches += 1

    def record_fetch_success(self) -> None:
        self.fetch_successes += 1

    def record_not_found(self) -> None:
        self.not_found += 1

    def record_exhausted(self) -> None:
        self.exhausted += 1

    def snapshot(self) -> Dict[str, Any]:
        return {
            "fetches": self.fetches,
            "fetch_successes": self.fetch_successes,
            "not_found": self.not_found,
            "exhausted": self.exhausted,
            "profiles": {
                name: {
                    "attempts": stats.attempts,
                    "successes": stats.successes,
                    "success_rate": round(stats.success_rate, 3),
                    "outcomes": dict(stats.outcomes),
                }
                for name, stats in self.profiles.items()
            },
        }

    def __repr__(self) -> str:
        return (
            f"FetchMetrics(fetches={self.fetches}, ok={self.fetch_successes}, "
            f"not_found={self.not_found}, exhausted={self.exhausted})"
        )
