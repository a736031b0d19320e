"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CoinBalance:
    """Balance of one coin type held by an address."""

    coin_type: str
    coin_object_count: int
    total_balance: int


@dataclass(frozen=True)
class BatchResult:
    """One submitted merge transaction."""

    index: int
    size: int
    digest: str


@dataclass(frozen=True)
class MergeSummary:
    """Outcome of merging a single coin type."""

    coin_type: str
    objects_found: int
    batches: tuple[BatchResult, ...] = ()
    skipped: bool = False

    @property
    def transactions(self) -> int:
        return len(self.batches)


@dataclass(frozen=True)
class RunReport:
    """Outcome of a merge run across coin types."""

    address: str
    summaries: tuple[MergeSummary, ...] = ()
    failures: tuple[tuple[str, str], ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures
