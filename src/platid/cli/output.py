"""Rendering of command results as JSON or plain text."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

FORMATS = ("json", "text")


def render(records: List[Dict[str, Any]], fmt: str, columns: Sequence[str]) -> str:
    """Render result records.

    Args:
        records: One dict per result.
        fmt: ``json`` for a JSON array, ``text`` for tab-separated lines.
        columns: Keys printed, in order, by the text format.

    Returns:
        The rendered document without a trailing newline.
    """
    if fmt == "json":
        return json.dumps(records, indent=2)
    return "\n".join(
        "\t".join("" if record.get(col) is None else str(record[col]) for col in columns)
        for record in records
    )
