"""--debug rule dump to stderr."""

from __future__ import annotations

import sys
from typing import Iterable, TextIO

from vibecss.rules import Rule
from vibecss.variants import resolve


def dump_rules(
    tokens: Iterable[str],
    *,
    prefix: str = "vibe",
    allow_unprefixed: bool = False,
    file: TextIO = sys.stderr,
) -> None:
    """Print how each unique token resolved to *file*."""
    resolved: list[tuple[str, Rule]] = []
    unknown: list[str] = []
    for token in dict.fromkeys(tokens):
        rule = resolve(token, prefix, allow_unprefixed)
        if rule is None:
            unknown.append(token)
        else:
            resolved.append((token, rule))

    file.write(f"Rules ({len(resolved)})\n")
    for token, rule in resolved:
        _dump_rule(token, rule, 1, file)
    file.write(f"Unknown ({len(unknown)})\n")
    for token in unknown:
        file.write(f"{_indent(1)}{token}\n")


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_rule(token: str, rule: Rule, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}{token}\n")
    if rule.media_query is not None:
        f.write(f"{_indent(depth + 1)}{rule.media_query}\n")
    f.write(f"{_indent(depth + 1)}{rule.selector}\n")
    if rule.is_empty:
        f.write(f"{_indent(depth + 2)}(no declarations)\n")
    for prop, value in rule.declarations:
        f.write(f"{_indent(depth + 2)}{prop}: {value}\n")
