"""ClassificationIndex construction and code point classification.

``build`` makes one forward pass over the source lines and returns either
a complete immutable index or the first error encountered. ``classify``
is a pure, total lookup over that index and is safe to call from any
number of threads without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

from mathclass.line_parser import parse_lines
from mathclass.range_table import ClassTable, ClassTableBuilder, Ordering
from mathclass.types import (
    MAX_CODE_POINT,
    AmbiguousClassError,
    BuildError,
    ClassOverlapError,
    CodePoint,
    Err,
    MathClass,
    Ok,
    Range,
    Result,
    UnknownClassTag,
)

type UnknownTagPolicy = Literal["abort", "skip"]


@dataclass(frozen=True, slots=True)
class IndexDiagnostics:
    """Counters and non-fatal events recorded while building an index."""

    data_lines: int = 0
    ranges_r16: int = 0
    ranges_r32: int = 0
    skipped_unknown_tags: tuple[UnknownClassTag, ...] = ()
    ordering: str = "validate"
    strict: bool = False


@dataclass(frozen=True, slots=True)
class ClassificationIndex:
    """All fifteen class tables. Built once by ``build``; never mutated."""

    tables: Mapping[MathClass, ClassTable]
    diagnostics: IndexDiagnostics = field(default_factory=IndexDiagnostics)

    def __post_init__(self) -> None:
        missing = [label for label in MathClass if label not in self.tables]
        if missing:
            names = ", ".join(label.display_name for label in missing)
            raise ValueError(f"ClassificationIndex missing tables for: {names}")
        ordered = {label: self.tables[label] for label in MathClass}
        object.__setattr__(self, "tables", MappingProxyType(ordered))

    def __getitem__(self, label: MathClass) -> ClassTable:
        return self.tables[label]

    def ranges(self, label: MathClass) -> tuple[Range, ...]:
        """All ranges of ``label`` sorted by lo, r16 and r32 combined."""
        return tuple(sorted(self.tables[label]))


def _to_code_point(code_point: CodePoint | str) -> int:
    if isinstance(code_point, str):
        if len(code_point) != 1:
            raise ValueError(
                f"expected a single character, got {len(code_point)} characters",
            )
        return ord(code_point)
    return code_point


def classify_all(index: ClassificationIndex, code_point: CodePoint | str) -> tuple[MathClass, ...]:
    """Every class whose table contains ``code_point``, in declaration order."""
    cp = _to_code_point(code_point)
    if cp < 0 or cp > MAX_CODE_POINT:
        return ()
    return tuple(label for label, table in index.tables.items() if table.find(cp) is not None)


def classify(
    index: ClassificationIndex,
    code_point: CodePoint | str,
    *,
    strict: bool = False,
) -> MathClass | None:
    """Math class of ``code_point`` (an int or a one-character str).

    Classes are tried in declaration order and the first hit wins. Values
    outside 0..0x10FFFF, and code points in no table, return None. With
    ``strict=True`` a code point claimed by several classes raises
    AmbiguousClassError instead of silently returning the first.
    """
    cp = _to_code_point(code_point)
    if cp < 0 or cp > MAX_CODE_POINT:
        return None
    if strict:
        matches = classify_all(index, cp)
        if len(matches) > 1:
            raise AmbiguousClassError(cp, matches)
        return matches[0] if matches else None
    for label, table in index.tables.items():
        if table.find(cp) is not None:
            return label
    return None


def find_class_overlap(tables: Mapping[MathClass, ClassTable]) -> ClassOverlapError | None:
    """First pair of ranges from different classes that share a code point.

    Sweeps all ranges sorted by lo, tracking the range that reaches
    furthest so far; any later range starting at or before its end
    overlaps it.
    """
    tagged = sorted(
        ((r, label) for label in MathClass for r in tables[label]),
        key=lambda item: (item[0].lo, item[0].hi),
    )
    reach: tuple[Range, MathClass] | None = None
    for r, label in tagged:
        if reach is not None and r.lo <= reach[0].hi and label is not reach[1]:
            return ClassOverlapError(reach[1], reach[0], label, r)
        if reach is None or r.hi > reach[0].hi:
            reach = (r, label)
    return None


def build(
    lines: Iterable[str],
    *,
    ordering: Ordering = "validate",
    strict: bool = False,
    on_unknown_tag: UnknownTagPolicy = "abort",
) -> Result[ClassificationIndex, BuildError]:
    """Build a ClassificationIndex from MathClass source lines.

    All-or-nothing: the first parse, ordering or (with ``strict``)
    cross-class overlap error is returned as ``Err`` and no index is
    produced. ``on_unknown_tag="skip"`` drops lines with an unrecognized
    tag and records them in the diagnostics instead of aborting.
    """
    if on_unknown_tag not in ("abort", "skip"):
        raise ValueError(f"unknown on_unknown_tag policy {on_unknown_tag!r}")

    builder = ClassTableBuilder()
    data_lines = 0
    skipped: list[UnknownClassTag] = []
    for result in parse_lines(lines):
        data_lines += 1
        match result:
            case Ok(value=parsed):
                builder.add(parsed.label, parsed.code_range)
            case Err(error=UnknownClassTag() as unknown) if on_unknown_tag == "skip":
                skipped.append(unknown)
            case Err(error=error):
                return Err(error)

    frozen = builder.freeze(ordering=ordering)
    if isinstance(frozen, Err):
        return frozen
    tables = frozen.value

    if strict:
        overlap = find_class_overlap(tables)
        if overlap is not None:
            return Err(overlap)

    diagnostics = IndexDiagnostics(
        data_lines=data_lines,
        ranges_r16=sum(len(t.r16) for t in tables.values()),
        ranges_r32=sum(len(t.r32) for t in tables.values()),
        skipped_unknown_tags=tuple(skipped),
        ordering=ordering,
        strict=strict,
    )
    return Ok(ClassificationIndex(tables, diagnostics))
