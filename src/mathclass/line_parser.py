"""Line parser for the Unicode MathClass table.

Data lines look like::

    002F;B
    0030..0039;N

Lines starting with ``#`` and blank lines are skipped. Every failure is
returned as ``Err`` with a typed reason; nothing here raises on bad input.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from mathclass.types import (
    MAX_CODE_POINT,
    Err,
    InvalidCodePoint,
    MalformedLine,
    MathClass,
    Ok,
    ParsedLine,
    ParseError,
    Range,
    Result,
    UnknownClassTag,
)

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")
_RANGE_SEP = ".."


def _parse_hex(literal: str, line: str, line_number: int) -> Result[int, InvalidCodePoint]:
    # int(x, 16) also accepts "0x", signs, "_" and inner whitespace
    if not _HEX_RE.fullmatch(literal):
        return Err(InvalidCodePoint(literal, line, line_number, "invalid_hex"))
    value = int(literal, 16)
    if value > MAX_CODE_POINT:
        return Err(InvalidCodePoint(literal, line, line_number, "out_of_range"))
    return Ok(value)


def parse_code_points(
    specifier: str, line: str = "", line_number: int = 0,
) -> Result[Range, InvalidCodePoint]:
    """Parse ``HEX`` or ``START..END`` (END inclusive) into a Range."""
    specifier = specifier.strip()
    if _RANGE_SEP not in specifier:
        match _parse_hex(specifier, line, line_number):
            case Ok(value=cp):
                return Ok(Range(cp, cp))
            case Err() as err:
                return err

    parts = specifier.split(_RANGE_SEP)
    if len(parts) != 2:
        return Err(InvalidCodePoint(specifier, line, line_number, "bad_range_syntax"))
    raw_start, raw_end = parts[0].strip(), parts[1].strip()
    start = _parse_hex(raw_start, line, line_number)
    if isinstance(start, Err):
        return start
    end = _parse_hex(raw_end, line, line_number)
    if isinstance(end, Err):
        return end
    if end.value < start.value:
        return Err(InvalidCodePoint(specifier, line, line_number, "reversed_range"))
    return Ok(Range(start.value, end.value))


def is_data_line(text: str) -> bool:
    """False for comment lines and blank lines."""
    return bool(text.strip()) and not text.startswith("#")


def parse_line(text: str, line_number: int = 0) -> Result[ParsedLine, ParseError]:
    """Parse one data line into a ParsedLine.

    The caller is expected to have filtered comments and blank lines
    (see ``is_data_line``); a comment passed here is reported as malformed
    unless it happens to contain exactly one ``;``.
    """
    line = text.rstrip("\r\n")
    parts = line.split(";")
    if len(parts) != 2:
        return Err(MalformedLine(line, line_number))
    raw_range, raw_tag = parts

    tag = raw_tag.strip()
    label = MathClass.from_tag(tag)
    if label is None:
        return Err(UnknownClassTag(tag, line, line_number))

    match parse_code_points(raw_range, line, line_number):
        case Ok(value=code_range):
            return Ok(ParsedLine(code_range, label, line_number))
        case Err() as err:
            return err


def parse_lines(lines: Iterable[str]) -> Iterator[Result[ParsedLine, ParseError]]:
    """Lazily parse source lines, one Result per data line.

    Single forward pass over ``lines``. Line numbers are 1-based and count
    skipped lines, so they point into the source file. The generator does
    not stop on errors; ``build`` decides what an error means.
    """
    for line_number, text in enumerate(lines, start=1):
        if not is_data_line(text):
            continue
        yield parse_line(text, line_number)
