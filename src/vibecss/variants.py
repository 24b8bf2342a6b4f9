"""Variant resolver: split a token into variant chain + base utility and build its Rule."""

from __future__ import annotations

from vibecss.rules import Rule, escape_selector
from vibecss.scales import BREAKPOINTS
from vibecss.utilities import generate

PSEUDO_CLASSES: dict[str, str] = {
    "hover": ":hover",
    "focus": ":focus",
    "active": ":active",
    "disabled": ":disabled",
    "visited": ":visited",
    "checked": ":checked",
    "focus-visible": ":focus-visible",
    "focus-within": ":focus-within",
    "first": ":first-child",
    "last": ":last-child",
    "odd": ":nth-child(odd)",
    "even": ":nth-child(even)",
}

PSEUDO_ELEMENTS: dict[str, str] = {
    "placeholder": "::placeholder",
}

# group-{state} -> state pseudo-class applied to the group ancestor
GROUP_VARIANTS: dict[str, str] = {
    "group-hover": ":hover",
    "group-focus": ":focus",
    "group-focus-within": ":focus-within",
}

DARK_VARIANT = "dark"


def split_variants(token: str) -> list[str] | None:
    """Split on ':' outside [...] and not preceded by a backslash.

    Returns None for unbalanced brackets or empty segments.
    """
    segments: list[str] = []
    current: list[str] = []
    depth = 0
    i = 0
    while i < len(token):
        ch = token[i]
        if ch == "\\" and i + 1 < len(token):
            current.append(token[i : i + 2])
            i += 2
            continue
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth < 0:
                return None
        elif ch == ":" and depth == 0:
            segments.append("".join(current))
            current = []
            i += 1
            continue
        current.append(ch)
        i += 1

    if depth != 0:
        return None
    segments.append("".join(current))
    if any(not s for s in segments):
        return None
    return segments


def strip_prefix(base: str, prefix: str, allow_unprefixed: bool) -> str | None:
    """Remove '{prefix}-' from a base segment; None if it is required but missing."""
    if not prefix:
        return base
    marker = prefix + "-"
    if base.startswith(marker):
        return base[len(marker) :]
    if allow_unprefixed:
        return base
    return None


def resolve(token: str, prefix: str = "vibe", allow_unprefixed: bool = False) -> Rule | None:
    """Resolve a full class token to its Rule, or None if any part is unknown."""
    segments = split_variants(token)
    if segments is None:
        return None
    *variants, base = segments

    name = strip_prefix(base, prefix, allow_unprefixed)
    if name is None:
        return None
    style = generate(name)
    if style is None:
        return None

    ancestors: list[str] = []
    pseudo_classes: list[str] = []
    pseudo_element = ""
    screen: str | None = None
    seen: set[str] = set()

    for variant in variants:
        if variant in seen:
            return None
        seen.add(variant)

        if variant in PSEUDO_CLASSES:
            pseudo_classes.append(PSEUDO_CLASSES[variant])
        elif variant in PSEUDO_ELEMENTS:
            if pseudo_element:
                return None
            pseudo_element = PSEUDO_ELEMENTS[variant]
        elif variant in GROUP_VARIANTS:
            group = f".{prefix}-group" if prefix else ".group"
            ancestors.append(f"{group}{GROUP_VARIANTS[variant]} ")
        elif variant == DARK_VARIANT:
            ancestors.append(".dark ")
        elif variant in BREAKPOINTS:
            if screen is not None:
                return None
            screen = variant
        else:
            return None

    selector = (
        "".join(ancestors)
        + "."
        + escape_selector(token)
        + "".join(pseudo_classes)
        + pseudo_element
        + style.suffix
    )

    if screen is None:
        return Rule(selector, style.declarations)
    min_width = BREAKPOINTS[screen]
    return Rule(
        selector,
        style.declarations,
        media_query=f"@media (min-width: {min_width}px)",
        min_width=min_width,
    )
