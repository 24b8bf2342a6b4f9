"""Rule data structure and selector escaping helpers."""

from __future__ import annotations

from dataclasses import dataclass

# ASCII punctuation allowed unescaped in an identifier
_IDENT_SPECIAL = frozenset("-_")


@dataclass(frozen=True, slots=True)
class Rule:
    """One resolved CSS rule, optionally scoped to a min-width media query."""

    selector: str
    declarations: tuple[tuple[str, str], ...]
    media_query: str | None = None
    min_width: int | None = None  # ordering key for media groups

    @property
    def key(self) -> tuple[str | None, str]:
        """Deduplication key: the same selector in two media scopes is two rules."""
        return (self.media_query, self.selector)

    @property
    def is_empty(self) -> bool:
        return not self.declarations


def is_ident_char(ch: str) -> bool:
    """Return True if ch may appear unescaped in a CSS identifier."""
    return not ch.isascii() or ch.isalnum() or ch in _IDENT_SPECIAL


def escape_selector(token: str) -> str:
    """Escape a class token so it can follow a '.' in a CSS selector.

    Leading digits (or a digit right after a leading '-') use the hex code
    point form, e.g. '2xl:flex' -> '\\32 xl\\:flex'.
    """
    if token == "-":
        return "\\-"
    out: list[str] = []
    for i, ch in enumerate(token):
        if ch.isascii() and ch.isdigit() and (i == 0 or (i == 1 and token[0] == "-")):
            out.append(f"\\{ord(ch):x} ")
        elif is_ident_char(ch):
            out.append(ch)
        else:
            out.append("\\" + ch)
    return "".join(out)
