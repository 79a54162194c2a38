"""Per-class range tables with 16-/32-bit width selection.

A ClassTable keeps two sorted tuples of Ranges: ``r16`` for ranges whose
bounds both fit in 16 bits and ``r32`` for everything else. A range that
starts below 0x10000 and ends above it is stored wholesale in ``r32``.
Lookups search both tuples, so no split is needed for correctness.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Literal

from mathclass.types import (
    MAX_R16,
    CodePoint,
    Err,
    MathClass,
    Ok,
    Range,
    RangeOrderError,
    Result,
)

type Ordering = Literal["validate", "sort"]


def _search(ranges: tuple[Range, ...], los: tuple[int, ...], code_point: int) -> Range | None:
    idx = bisect.bisect_right(los, code_point) - 1
    if idx < 0:
        return None
    candidate = ranges[idx]
    return candidate if code_point <= candidate.hi else None


def first_order_violation(ranges: Sequence[Range]) -> tuple[Range, Range] | None:
    """First adjacent pair that is not strictly ascending and disjoint."""
    for prev, cur in zip(ranges, ranges[1:]):
        if cur.lo <= prev.hi:
            return prev, cur
    return None


@dataclass(frozen=True, slots=True)
class ClassTable:
    """Immutable sorted ranges for one math class.

    Invariants (enforced in __post_init__):
        - every range in r16 has hi <= 0xFFFF, every range in r32 does not
        - r16 and r32 together are strictly ascending and non-overlapping
    """
    label: MathClass
    r16: tuple[Range, ...] = ()
    r32: tuple[Range, ...] = ()
    _lo16: tuple[int, ...] = field(init=False, repr=False, compare=False)
    _lo32: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for r in self.r16:
            if not r.is_r16:
                raise ValueError(f"{self.label.display_name}: {r} does not fit in r16")
        for r in self.r32:
            if r.is_r16:
                raise ValueError(f"{self.label.display_name}: {r} belongs in r16")
        for ranges in (self.r16, self.r32, sorted(self.r16 + self.r32)):
            violation = first_order_violation(ranges)
            if violation is not None:
                raise ValueError(
                    f"{self.label.display_name}: {violation[1]} follows {violation[0]}"
                )
        object.__setattr__(self, "_lo16", tuple(r.lo for r in self.r16))
        object.__setattr__(self, "_lo32", tuple(r.lo for r in self.r32))

    def find(self, code_point: CodePoint) -> Range | None:
        """Return the range containing ``code_point``, or None."""
        if code_point <= MAX_R16:
            found = _search(self.r16, self._lo16, code_point)
            if found is not None:
                return found
        return _search(self.r32, self._lo32, code_point)

    def __contains__(self, code_point: object) -> bool:
        return isinstance(code_point, int) and self.find(code_point) is not None

    def __iter__(self) -> Iterator[Range]:
        yield from self.r16
        yield from self.r32

    def __len__(self) -> int:
        return len(self.r16) + len(self.r32)

    @property
    def code_point_count(self) -> int:
        return sum(r.hi - r.lo + 1 for r in self)


@dataclass(slots=True)
class ClassTableBuilder:
    """Accumulates ranges per class in source order.

    ``add`` never fails and never merges. Ordering is checked (or
    restored) once, in ``freeze``.
    """
    _ranges: dict[MathClass, list[Range]] = field(
        default_factory=lambda: {label: [] for label in MathClass},
    )

    def add(self, label: MathClass, code_range: Range) -> None:
        """Append ``code_range`` to the table for ``label``."""
        self._ranges[label].append(code_range)

    def freeze(
        self, *, ordering: Ordering = "validate",
    ) -> Result[dict[MathClass, ClassTable], RangeOrderError]:
        """Produce immutable tables, one per class, in declaration order.

        ``"validate"`` keeps source order and fails on the first pair that
        is out of order or overlapping. ``"sort"`` sorts by ``lo`` first
        and fails only on overlap. Each range then lands in ``r16`` or
        ``r32`` by the width of its upper bound.
        """
        if ordering not in ("validate", "sort"):
            raise ValueError(f"unknown ordering {ordering!r}")
        tables: dict[MathClass, ClassTable] = {}
        for label in MathClass:
            ranges = self._ranges[label]
            ordered = sorted(ranges) if ordering == "sort" else ranges
            violation = first_order_violation(ordered)
            if violation is not None:
                return Err(RangeOrderError(label, violation[0], violation[1]))
            tables[label] = ClassTable(
                label,
                r16=tuple(r for r in ordered if r.is_r16),
                r32=tuple(r for r in ordered if not r.is_r16),
            )
        return Ok(tables)
