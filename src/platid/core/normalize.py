"""Token normalization for platform identifier matching.

Every classifier works on a normalized token rather than the raw input:
ASCII letters are lowercased, digits and lowercase letters are kept, and
everything else is either replaced by a dash or dropped.
"""

from __future__ import annotations

SEPARATOR = "-"


def normalize(text: str, strip: bool = False) -> str:
    """Normalize arbitrary text into a matching token.

    Args:
        text: Raw input (target triple, file name, host property, ...).
        strip: Drop non-alphanumeric characters instead of replacing each
            of them with a dash.

    Returns:
        Token matching ``[a-z0-9-]*`` (or ``[a-z0-9]*`` when stripping).
    """
    if not text:
        return ""
    chars = []
    for c in text:
        if "0" <= c <= "9" or "a" <= c <= "z":
            chars.append(c)
        elif "A" <= c <= "Z":
            chars.append(chr(ord(c) + 32))
        elif not strip:
            chars.append(SEPARATOR)
    return "".join(chars)

