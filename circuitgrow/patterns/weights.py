"""
Probability tables: weighted draws and mass-preserving label removal.

A table maps labels to non-negative weights summing to 1. Iteration order is
the dict's insertion order, so a seeded RNG gives repeatable draws.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Generic, List, Mapping, Optional, TypeVar, Union

K = TypeVar("K")


class ProbabilityTableError(RuntimeError):
    """Raised when a draw runs past the end of a table whose weights are too small."""


@dataclass(frozen=True)
class Drawn(Generic[K]):
    label: K


@dataclass(frozen=True)
class Malformed:
    reason: str
    sample: float
    total: float


DrawResult = Union[Drawn, Malformed]


def table_total(table: Mapping[K, float]) -> float:
    return sum(table.values())


def choose_from_table(
    table: Mapping[K, float], rng: random.Random, tolerance: float = 1e-9
) -> DrawResult:
    """
    Draw one label with probability equal to its weight.

    Labels with a weight of zero or less are never returned. A shortfall no
    larger than `tolerance` (rounding in redistributed tables) falls to the
    last positive label. Returns Malformed instead of raising so configuration
    code can report it as a setup error.
    """
    sample = rng.random()
    remaining = sample
    last: Optional[K] = None
    for label, weight in table.items():
        if weight <= 0:
            continue
        last = label
        remaining -= weight
        if remaining <= 0:
            return Drawn(label)
    if last is not None and remaining <= tolerance:
        return Drawn(last)
    total = table_total(table)
    return Malformed(
        reason=f"weights sum to {total:.6f}, below drawn sample {sample:.6f}",
        sample=sample,
        total=total,
    )


def draw(table: Mapping[K, float], rng: random.Random) -> K:
    """Like choose_from_table, but a malformed table is fatal."""
    result = choose_from_table(table, rng)
    if isinstance(result, Malformed):
        raise ProbabilityTableError(f"Invalid probability table {dict(table)!r}: {result.reason}")
    return result.label


def table_without(removed: K, table: Mapping[K, float]) -> Dict[K, float]:
    """Copy of table without `removed`; its weight is shared evenly by the rest."""
    share_from = table[removed]
    left = [label for label in table if label != removed]
    if not left:
        return {}
    share = share_from / len(left)
    return {label: table[label] + share for label in left}


def check_table(table: Mapping[K, float], tolerance: float = 1e-6) -> List[str]:
    """Return a list of problems with a table (empty when it is well formed)."""
    problems: List[str] = []
    if not table:
        problems.append("table is empty")
        return problems
    for label, weight in table.items():
        if not isinstance(weight, (int, float)) or isinstance(weight, bool):
            problems.append(f"weight for {label!r} must be a number")
        elif weight < 0:
            problems.append(f"weight for {label!r} is negative ({weight})")
    if not problems:
        total = table_total(table)
        if abs(total - 1.0) > tolerance:
            problems.append(f"weights sum to {total:.6f}, expected 1")
    return problems
