"""CSS emitter: resolve tokens to rules, deduplicate, group by media query, serialize."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from vibecss import __version__
from vibecss.base import load_base_css
from vibecss.rules import Rule
from vibecss.variants import resolve


@dataclass(frozen=True, slots=True)
class EmitStats:
    """Classification of one token set, plus the size of the emitted CSS."""

    total: int
    recognized: tuple[str, ...]
    unknown: tuple[str, ...]
    css_size: int = 0


class CssEmitter:
    """Turn a token sequence into stylesheet text."""

    def __init__(self, prefix: str = "vibe", allow_unprefixed: bool = False) -> None:
        self.prefix = prefix
        self.allow_unprefixed = allow_unprefixed

    def resolve_all(self, tokens: Iterable[str]) -> tuple[list[Rule], list[str], list[str]]:
        """Return (rules, recognized, unknown) for unique tokens in first-seen order."""
        rules: list[Rule] = []
        recognized: list[str] = []
        unknown: list[str] = []
        for token in dict.fromkeys(tokens):
            rule = resolve(token, self.prefix, self.allow_unprefixed)
            if rule is None:
                unknown.append(token)
            else:
                rules.append(rule)
                recognized.append(token)
        return rules, recognized, unknown

    def stats(self, tokens: Iterable[str]) -> EmitStats:
        _, recognized, unknown = self.resolve_all(tokens)
        return EmitStats(
            total=len(recognized) + len(unknown),
            recognized=tuple(recognized),
            unknown=tuple(unknown),
        )

    def emit(
        self,
        tokens: Iterable[str],
        include_base: bool = False,
        base_css_path: Path | str | None = None,
    ) -> tuple[str, EmitStats]:
        rules, recognized, unknown = self.resolve_all(tokens)
        base = load_base_css(base_css_path) if include_base else None
        css = render(rules, base=base)
        stats = EmitStats(
            total=len(recognized) + len(unknown),
            recognized=tuple(recognized),
            unknown=tuple(unknown),
            css_size=len(css.encode("utf-8")),
        )
        return css, stats


HEADER = f"/* Generated by vibecss {__version__} */"


def render(rules: Iterable[Rule], base: str | None = None) -> str:
    """Serialize rules: plain rules first, then one block per breakpoint ascending."""
    plain: list[Rule] = []
    media: dict[str, list[Rule]] = {}
    widths: dict[str, int] = {}
    seen: set[tuple[str | None, str]] = set()

    for rule in rules:
        if rule.key in seen or rule.is_empty:
            continue
        seen.add(rule.key)
        if rule.media_query is None:
            plain.append(rule)
        else:
            media.setdefault(rule.media_query, []).append(rule)
            widths[rule.media_query] = rule.min_width or 0

    parts: list[str] = [HEADER]
    if base:
        parts.append(base.strip("\n"))
    for rule in plain:
        parts.append(render_rule(rule))
    for query in sorted(media, key=lambda q: widths[q]):
        inner = "\n\n".join(_indent(render_rule(r)) for r in media[query])
        parts.append(f"{query} {{\n{inner}\n}}")

    return "\n\n".join(parts) + "\n"


# ---------------------------------------------------------------------------
# Rule formatting
# ---------------------------------------------------------------------------


def render_rule(rule: Rule) -> str:
    """Format one rule block without its media wrapper."""
    lines = [f"{rule.selector} {{"]
    for prop, value in rule.declarations:
        lines.append(f"  {prop}: {value};")
    lines.append("}")
    return "\n".join(lines)


def render_scoped(rule: Rule) -> str:
    """Format one rule inside its own media wrapper, if it has one."""
    block = render_rule(rule)
    if rule.media_query is None:
        return block
    return f"{rule.media_query} {{\n{_indent(block)}\n}}"


def _indent(block: str) -> str:
    return "\n".join(f"  {line}" if line else line for line in block.split("\n"))
