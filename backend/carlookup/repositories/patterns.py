"""
CarLookup Backend: LIKE Pattern Helpers
========================================

What:  Escapes user text so it matches literally inside a LIKE/ILIKE pattern.
Why:   A name filter of "50%" must find "50%" and not every name starting with 50.
How:   The escape character (or the opening bracket, in bracket-class mode)
       is escaped first, then `%`, then `_`. Order matters: escaping `%` first
       would double-escape the brackets it introduces.

Two output styles:
    escape_char=None   → bracket classes:   Test_Data → Test[_]Data, [ → [[
    escape_char="\\"   → prefix escapes:    Test_Data → Test\\_Data
                         (pair with `column.ilike(pattern, escape="\\")`)
"""

from typing import Optional


def escape_like_pattern(value: Optional[str], escape_char: Optional[str] = None) -> Optional[str]:
    """Escape LIKE metacharacters; empty or None input is returned unchanged."""
    if not value:
        return value

    if escape_char is None:
        return (
            value.replace("[", "[[")
            .replace("%", "[%]")
            .replace("_", "[_]")
        )

    if len(escape_char) != 1:
        raise ValueError("escape_char must be a single character")

    return (
        value.replace(escape_char, escape_char * 2)
        .replace("%", f"{escape_char}%")
        .replace("_", f"{escape_char}_")
    )


def to_contains_pattern(value: Optional[str], escape_char: Optional[str] = None) -> str:
    """
    Build a substring pattern: `%<escaped, trimmed value>%`.

    Blank input yields "%", which matches every row.
    """
    if value is None or not value.strip():
        return "%"
    return f"%{escape_like_pattern(value.strip(), escape_char)}%"
