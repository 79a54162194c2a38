"""I/O utilities: source line reading and orjson-backed JSON export.

The core never touches the filesystem; these helpers sit at the edge for
scripts and tests.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson

from mathclass.classifier import ClassificationIndex


def read_lines(path: Path) -> list[str]:
    """Read a UTF-8 text file into lines without trailing newlines."""
    return path.read_text(encoding="utf-8").splitlines()


def load_json(path: Path) -> Any:
    """Load JSON from a file using orjson."""
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON using orjson, keys sorted."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS if pretty else orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(obj, option=opts))


def index_to_dict(index: ClassificationIndex) -> dict[str, Any]:
    """JSON-ready view of an index: per-class r16/r32 ranges plus diagnostics."""
    classes: dict[str, Any] = {}
    for label, table in index.tables.items():
        classes[label.display_name] = {
            "tag": label.tag,
            "r16": [[r.lo, r.hi] for r in table.r16],
            "r32": [[r.lo, r.hi] for r in table.r32],
        }
    diag = index.diagnostics
    return {
        "classes": classes,
        "diagnostics": {
            "data_lines": diag.data_lines,
            "ranges_r16": diag.ranges_r16,
            "ranges_r32": diag.ranges_r32,
            "ordering": diag.ordering,
            "strict": diag.strict,
            "skipped_unknown_tags": [
                {"tag": s.tag, "line": s.line, "line_number": s.line_number}
                for s in diag.skipped_unknown_tags
            ],
        },
    }


def index_summary(index: ClassificationIndex) -> dict[str, Any]:
    """Compact per-class counts for CLI output."""
    per_class: dict[str, dict[str, int]] = {}
    for label, table in index.tables.items():
        per_class[label.display_name] = {
            "r16": len(table.r16),
            "r32": len(table.r32),
            "code_points": table.code_point_count,
        }
    diag = index.diagnostics
    return {
        "classes": per_class,
        "total_ranges": diag.ranges_r16 + diag.ranges_r32,
        "total_code_points": sum(c["code_points"] for c in per_class.values()),
        "data_lines": diag.data_lines,
        "skipped_unknown_tags": len(diag.skipped_unknown_tags),
    }
