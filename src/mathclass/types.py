"""Core types for MathClass table parsing and classification.

Every layer shares these types. All dataclasses use slots=True and are
frozen: a built index is never mutated.

Type hierarchy:
  Ok[T] / Err[E]     — Strict algebraic Result type
  MathClass          — The fifteen math classes, in lookup order
  Range              — Inclusive code point interval
  ParsedLine         — One data line of the source table
  MalformedLine      — Line does not split into two ';' fields
  InvalidCodePoint   — Bad hex literal or reversed range
  UnknownClassTag    — Class tag outside the recognized letters
  RangeOrderError    — Class table out of order / self-overlapping
  ClassOverlapError  — Two classes claim the same code point (strict)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MAX_CODE_POINT = 0x10FFFF
MAX_R16 = 0xFFFF

type CodePoint = int


# ---------------------------------------------------------------------------
# Result ADT — strict Ok/Err, NOT tuple hack
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success case of Result[T, E].

    Usage::

        result = build(lines)
        match result:
            case Ok(value=index): classify(index, "+")
            case Err(error=e): print(e.message)
    """
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failure case of Result[T, E]. Preserves the typed failure reason."""
    error: E


type Result[T, E] = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# MathClass
# ---------------------------------------------------------------------------

class MathClass(Enum):
    """Math class of a character. Declaration order is lookup order."""

    NORMAL = "N"        # includes all digits and symbols requiring only one form
    ALPHABETIC = "A"
    BINARY = "B"
    CLOSING = "C"       # usually paired with opening delimiter
    DIACRITIC = "D"
    FENCE = "F"         # unpaired delimiter (often used as opening or closing)
    GLYPH_PART = "G"    # piece of large operator
    LARGE = "L"         # n-ary or large operator, often takes limits
    OPENING = "O"       # usually paired with closing delimiter
    PUNCTUATION = "P"
    RELATION = "R"      # includes arrows
    SPACE = "S"
    UNARY = "U"         # operators that are only unary
    VARY = "V"          # unary or binary depending on context
    SPECIAL = "X"       # characters not covered by other classes

    @property
    def tag(self) -> str:
        """One-letter tag used in the source table."""
        return self.value

    @property
    def display_name(self) -> str:
        """Name as written in the source table header, e.g. ``Glyph_Part``."""
        return "_".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def from_tag(cls, tag: str) -> MathClass | None:
        """Look up a class by its one-letter tag; None if unrecognized."""
        return _BY_TAG.get(tag)


_BY_TAG: dict[str, MathClass] = {member.value: member for member in MathClass}


# ---------------------------------------------------------------------------
# Range
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True, order=True)
class Range:
    """Inclusive interval [lo, hi] of code points.

    Invariants (enforced in __post_init__):
        - 0 <= lo <= hi <= MAX_CODE_POINT
    """
    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo < 0:
            raise ValueError(f"Range.lo must be >= 0, got {self.lo}")
        if self.hi < self.lo:
            raise ValueError(f"Range.hi ({self.hi:#x}) must be >= lo ({self.lo:#x})")
        if self.hi > MAX_CODE_POINT:
            raise ValueError(
                f"Range.hi must be <= {MAX_CODE_POINT:#x}, got {self.hi:#x}"
            )

    @property
    def is_r16(self) -> bool:
        """True when both bounds fit in 16 bits."""
        return self.hi <= MAX_R16

    def contains(self, code_point: int) -> bool:
        return self.lo <= code_point <= self.hi

    def overlaps(self, other: Range) -> bool:
        return self.lo <= other.hi and other.lo <= self.hi

    def __str__(self) -> str:
        if self.lo == self.hi:
            return f"{self.lo:04X}"
        return f"{self.lo:04X}..{self.hi:04X}"


@dataclass(frozen=True, slots=True)
class ParsedLine:
    """One data line of the source table."""
    code_range: Range
    label: MathClass
    line_number: int


# ---------------------------------------------------------------------------
# Typed build failures
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MalformedLine:
    """Line does not split into exactly two ';'-delimited fields."""
    line: str
    line_number: int = 0

    @property
    def message(self) -> str:
        return (
            f"line {self.line_number}: expected two semicolon delimited "
            f"fields, got {self.line!r}"
        )


@dataclass(frozen=True, slots=True)
class InvalidCodePoint:
    """Hex literal failed to parse, exceeds MAX_CODE_POINT, or END < START."""
    literal: str
    line: str = ""
    line_number: int = 0
    reason: str = "invalid_hex"  # "invalid_hex" | "out_of_range" | "reversed_range" | "bad_range_syntax"

    @property
    def message(self) -> str:
        return f"line {self.line_number}: invalid code point {self.literal!r} ({self.reason})"


@dataclass(frozen=True, slots=True)
class UnknownClassTag:
    """Class tag is not one of the recognized one-letter codes."""
    tag: str
    line: str = ""
    line_number: int = 0

    @property
    def message(self) -> str:
        return f"line {self.line_number}: unknown math class tag {self.tag!r}"


@dataclass(frozen=True, slots=True)
class RangeOrderError:
    """A class table is not strictly ascending and non-overlapping."""
    label: MathClass
    previous: Range
    current: Range

    @property
    def message(self) -> str:
        return (
            f"{self.label.display_name}: range {self.current} does not follow "
            f"{self.previous} in ascending non-overlapping order"
        )


@dataclass(frozen=True, slots=True)
class ClassOverlapError:
    """Two classes claim at least one common code point."""
    first: MathClass
    first_range: Range
    second: MathClass
    second_range: Range

    @property
    def message(self) -> str:
        return (
            f"{self.first.display_name} range {self.first_range} overlaps "
            f"{self.second.display_name} range {self.second_range}"
        )


type ParseError = MalformedLine | InvalidCodePoint | UnknownClassTag
type BuildError = ParseError | RangeOrderError | ClassOverlapError


class AmbiguousClassError(RuntimeError):
    """Raised by strict classification when several classes match."""

    def __init__(self, code_point: int, classes: tuple[MathClass, ...]) -> None:
        names = ", ".join(c.display_name for c in classes)
        super().__init__(f"U+{code_point:04X} matches several classes: {names}")
        self.code_point = code_point
        self.classes = classes
