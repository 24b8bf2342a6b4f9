"""Utility generator: parse a bare utility name into a tagged form, then into a Style.

Forms are tried in a fixed priority: keyword, palette color, fraction,
scale, arbitrary value. The first form that fully matches wins, so
``w-1/2`` is a fraction and never an unknown arbitrary value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext

from vibecss.palette import (
    SEMANTIC_COLORS,
    percent_to_decimal,
    try_get_color,
    try_get_special,
    with_opacity,
)
from vibecss.scales import (
    BORDER_RADIUS,
    BORDER_WIDTHS,
    FONT_SIZES,
    FONT_WEIGHTS,
    HEIGHT_OVERRIDES,
    KEYWORDS,
    LETTER_SPACINGS,
    LINE_HEIGHTS,
    MAX_GRID_COLUMNS,
    MAX_WIDTHS,
    OPACITY,
    RING_WIDTHS,
    SIZING,
    SPACING,
    TRANSFORM,
    Z_INDEX,
    Declarations,
)

_CHILDREN = " > :not([hidden]) ~ :not([hidden])"
_GRADIENT_TO = "var(--tw-gradient-to, rgb(255 255 255 / 0))"
_FRACTION_STEP = Decimal("0.000001")
# Longest numeric segment accepted in a class name.
_MAX_DIGITS = 6


@dataclass(frozen=True, slots=True)
class Style:
    """Declarations for one utility, plus a selector suffix for child-targeting utilities."""

    declarations: Declarations
    suffix: str = ""


# ---------------------------------------------------------------------------
# Tagged utility forms
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class KeywordUtility:
    """Exact-match name from the keyword table (flex, hidden, truncate)."""

    name: str


@dataclass(frozen=True, slots=True)
class ColorUtility:
    """prefix-{family}-{shade}[/opacity], prefix-{special} or prefix-{semantic}."""

    prefix: str
    color: str
    opacity: int | None


@dataclass(frozen=True, slots=True)
class FractionUtility:
    """prefix-{a}/{b} for sizing and offset properties."""

    prefix: str
    numerator: int
    denominator: int


@dataclass(frozen=True, slots=True)
class ScaleUtility:
    """prefix-{key} looked up in a numeric or named scale."""

    prefix: str
    key: str
    negative: bool = False


@dataclass(frozen=True, slots=True)
class ArbitraryUtility:
    """prefix-[raw] with the bracket contents passed through verbatim."""

    prefix: str
    value: str


BaseUtility = KeywordUtility | ColorUtility | FractionUtility | ScaleUtility | ArbitraryUtility


# ---------------------------------------------------------------------------
# Property tables
# ---------------------------------------------------------------------------

COLOR_PROPERTIES: dict[str, tuple[str, ...]] = {
    "text": ("color",),
    "bg": ("background-color",),
    "border": ("border-color",),
    "border-t": ("border-top-color",),
    "border-r": ("border-right-color",),
    "border-b": ("border-bottom-color",),
    "border-l": ("border-left-color",),
    "border-x": ("border-left-color", "border-right-color"),
    "border-y": ("border-top-color", "border-bottom-color"),
    "ring": ("--tw-ring-color",),
    "accent": ("accent-color",),
    "caret": ("caret-color",),
    "fill": ("fill",),
    "stroke": ("stroke",),
    "outline": ("outline-color",),
    "decoration": ("text-decoration-color",),
    "divide": ("--vibe-divide-color",),
    "placeholder": ("color",),
    "from": ("--tw-gradient-from",),
    "via": ("--tw-gradient-stops",),
    "to": ("--tw-gradient-to",),
}

SPACING_PROPERTIES: dict[str, tuple[str, ...]] = {
    "p": ("padding",),
    "px": ("padding-left", "padding-right"),
    "py": ("padding-top", "padding-bottom"),
    "pt": ("padding-top",),
    "pr": ("padding-right",),
    "pb": ("padding-bottom",),
    "pl": ("padding-left",),
    "ps": ("padding-inline-start",),
    "pe": ("padding-inline-end",),
    "gap": ("gap",),
    "gap-x": ("column-gap",),
    "gap-y": ("row-gap",),
}

MARGIN_PROPERTIES: dict[str, tuple[str, ...]] = {
    "m": ("margin",),
    "mx": ("margin-left", "margin-right"),
    "my": ("margin-top", "margin-bottom"),
    "mt": ("margin-top",),
    "mr": ("margin-right",),
    "mb": ("margin-bottom",),
    "ml": ("margin-left",),
    "ms": ("margin-inline-start",),
    "me": ("margin-inline-end",),
}

# Prefixes that accept a leading '-' to flip the sign
MARGIN_FAMILY = frozenset(MARGIN_PROPERTIES) | {"space-x", "space-y"}

SIZING_PROPERTIES: dict[str, tuple[str, ...]] = {
    "w": ("width",),
    "h": ("height",),
    "size": ("width", "height"),
    "min-w": ("min-width",),
    "max-w": ("max-width",),
    "min-h": ("min-height",),
    "max-h": ("max-height",),
    "basis": ("flex-basis",),
}

_HEIGHT_PREFIXES = frozenset({"h", "min-h", "max-h"})

INSET_PROPERTIES: dict[str, tuple[str, ...]] = {
    "inset": ("inset",),
    "inset-x": ("left", "right"),
    "inset-y": ("top", "bottom"),
    "top": ("top",),
    "right": ("right",),
    "bottom": ("bottom",),
    "left": ("left",),
}

BORDER_WIDTH_PROPERTIES: dict[str, tuple[str, ...]] = {
    "border": ("border-width",),
    "border-t": ("border-top-width",),
    "border-r": ("border-right-width",),
    "border-b": ("border-bottom-width",),
    "border-l": ("border-left-width",),
    "border-x": ("border-left-width", "border-right-width"),
    "border-y": ("border-top-width", "border-bottom-width"),
}

RADIUS_PROPERTIES: dict[str, tuple[str, ...]] = {
    "rounded": ("border-radius",),
    "rounded-t": ("border-top-left-radius", "border-top-right-radius"),
    "rounded-r": ("border-top-right-radius", "border-bottom-right-radius"),
    "rounded-b": ("border-bottom-left-radius", "border-bottom-right-radius"),
    "rounded-l": ("border-top-left-radius", "border-bottom-left-radius"),
    "rounded-tl": ("border-top-left-radius",),
    "rounded-tr": ("border-top-right-radius",),
    "rounded-bl": ("border-bottom-left-radius",),
    "rounded-br": ("border-bottom-right-radius",),
}

TRANSLATE_PROPERTIES: dict[str, str] = {
    "translate-x": "--tw-translate-x",
    "translate-y": "--tw-translate-y",
}

FRACTION_PREFIXES = (
    frozenset(SIZING_PROPERTIES) | frozenset(INSET_PROPERTIES) | frozenset(TRANSLATE_PROPERTIES)
)

# Single-property prefixes resolved against a lookup table
_TABLE_PROPERTIES: dict[str, tuple[str, dict[str, str]]] = {
    "font": ("font-weight", FONT_WEIGHTS),
    "tracking": ("letter-spacing", LETTER_SPACINGS),
    "opacity": ("opacity", OPACITY),
    "z": ("z-index", Z_INDEX),
    "ring-offset": ("--tw-ring-offset-width", RING_WIDTHS),
}

ARBITRARY_PROPERTIES: dict[str, tuple[str, ...]] = {
    **SIZING_PROPERTIES,
    **SPACING_PROPERTIES,
    **MARGIN_PROPERTIES,
    **INSET_PROPERTIES,
    "rounded": ("border-radius",),
    "z": ("z-index",),
    "opacity": ("opacity",),
    "leading": ("line-height",),
    "tracking": ("letter-spacing",),
    "grid-cols": ("grid-template-columns",),
    "grid-rows": ("grid-template-rows",),
    "col-span": ("grid-column",),
    "row-span": ("grid-row",),
    "duration": ("transition-duration",),
    "delay": ("transition-delay",),
    "fill": ("fill",),
    "stroke": ("stroke",),
    "shadow": ("box-shadow",),
}

_SCALE_PREFIXES: tuple[str, ...] = tuple(
    sorted(
        {
            *SPACING_PROPERTIES,
            *MARGIN_PROPERTIES,
            *SIZING_PROPERTIES,
            *INSET_PROPERTIES,
            *BORDER_WIDTH_PROPERTIES,
            *RADIUS_PROPERTIES,
            *TRANSLATE_PROPERTIES,
            *_TABLE_PROPERTIES,
            "space-x",
            "space-y",
            "divide-x",
            "divide-y",
            "ring",
            "text",
            "leading",
            "grid-cols",
            "grid-rows",
            "col-span",
            "row-span",
            "order",
            "duration",
            "delay",
            "rotate",
            "scale",
            "line-clamp",
        },
        key=len,
        reverse=True,
    )
)

_COLOR_PREFIXES: tuple[str, ...] = tuple(sorted(COLOR_PROPERTIES, key=len, reverse=True))

_FRACTION_RE = re.compile(r"^(?P<prefix>[a-z-]+?)-(?P<num>[0-9]{1,6})/(?P<den>[0-9]{1,6})$")
_ARBITRARY_RE = re.compile(r"^(?P<prefix>.+?)-\[(?P<value>.+)\]$")
_ARBITRARY_FORBIDDEN = frozenset(";{}\"'\\")
_COLOR_FUNCTIONS = ("#", "rgb(", "rgba(", "hsl(", "hsla(", "oklch(", "oklab(", "color-mix(", "var(--")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_utility(name: str) -> BaseUtility | None:
    """Classify a utility name (variants and prefix already removed)."""
    if name in KEYWORDS:
        return KeywordUtility(name)

    color = _parse_color(name)
    if color is not None:
        return color

    fraction = _parse_fraction(name)
    if fraction is not None:
        return fraction

    scale = _parse_scale(name)
    if scale is not None:
        return scale

    return _parse_arbitrary(name)


def generate(name: str) -> Style | None:
    """Return the Style for a utility name, or None if it is unknown."""
    utility = parse_utility(name)
    if utility is None:
        return None
    return style_for(utility)


def style_for(utility: BaseUtility) -> Style | None:
    match utility:
        case KeywordUtility(name=name):
            keyword = KEYWORDS[name]
            return Style(keyword.declarations, keyword.suffix)
        case ColorUtility(prefix=prefix, color=color, opacity=opacity):
            value = resolve_color(color, opacity)
            return None if value is None else _color_style(prefix, value)
        case FractionUtility(prefix=prefix, numerator=num, denominator=den):
            value = format_fraction(num, den)
            return None if value is None else _fraction_style(prefix, value)
        case ScaleUtility(prefix=prefix, key=key, negative=negative):
            return _scale_style(prefix, key, negative)
        case ArbitraryUtility(prefix=prefix, value=value):
            return _arbitrary_style(prefix, value)
    return None


def resolve_color(color: str, opacity: int | None = None) -> str | None:
    """Resolve a color name (red-500, white, primary) to a CSS value."""
    special = try_get_special(color)
    if special is not None:
        if opacity is not None and special.startswith("#"):
            return with_opacity(special, opacity)
        return special

    if _is_semantic(color):
        value = f"var(--vibe-{color})"
        if opacity is not None:
            return f"color-mix(in srgb, {value} {opacity}%, transparent)"
        return value

    family, _, shade_text = color.rpartition("-")
    if not family or not _is_canonical_int(shade_text):
        return None
    hex_value = try_get_color(family, int(shade_text))
    if hex_value is None:
        return None
    if opacity is not None:
        return with_opacity(hex_value, opacity)
    return hex_value


def format_fraction(numerator: int, denominator: int) -> str | None:
    """100*a/b as a percentage, 6 decimals half-even, trailing zeros trimmed."""
    if denominator == 0:
        return None
    with localcontext() as ctx:
        ctx.prec = 40
        try:
            value = (Decimal(100 * numerator) / Decimal(denominator)).quantize(
                _FRACTION_STEP, rounding=ROUND_HALF_EVEN
            )
        except InvalidOperation:
            # More integer digits than the context precision holds.
            return None
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text}%"


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------


def _parse_color(name: str) -> ColorUtility | None:
    for prefix in _COLOR_PREFIXES:
        if not name.startswith(prefix + "-"):
            continue
        rest = name[len(prefix) + 1 :]
        color, slash, opacity_text = rest.partition("/")
        opacity: int | None = None
        if slash:
            if not _is_canonical_int(opacity_text) or int(opacity_text) > 100:
                continue
            opacity = int(opacity_text)
        if resolve_color(color, opacity) is not None:
            return ColorUtility(prefix, color, opacity)
    return None


def _parse_fraction(name: str) -> FractionUtility | None:
    m = _FRACTION_RE.match(name)
    if m is None or m.group("prefix") not in FRACTION_PREFIXES:
        return None
    num, den = int(m.group("num")), int(m.group("den"))
    if den == 0:
        return None
    return FractionUtility(m.group("prefix"), num, den)


def _parse_scale(name: str) -> ScaleUtility | None:
    negative = name.startswith("-")
    body = name[1:] if negative else name
    for prefix in _SCALE_PREFIXES:
        if not body.startswith(prefix + "-"):
            continue
        if negative and prefix not in MARGIN_FAMILY:
            return None
        key = body[len(prefix) + 1 :]
        if _scale_style(prefix, key, negative) is not None:
            return ScaleUtility(prefix, key, negative)
    return None


def _parse_arbitrary(name: str) -> ArbitraryUtility | None:
    m = _ARBITRARY_RE.match(name)
    if m is None:
        return None
    prefix, value = m.group("prefix"), m.group("value")
    if not _balanced(value) or any(ch in _ARBITRARY_FORBIDDEN or ch.isspace() for ch in value):
        return None
    if prefix not in ARBITRARY_PROPERTIES and prefix not in ("text", "bg", "border"):
        return None
    return ArbitraryUtility(prefix, value)


# ---------------------------------------------------------------------------
# Style builders
# ---------------------------------------------------------------------------


def _fill(props: tuple[str, ...], value: str) -> Declarations:
    return tuple((prop, value) for prop in props)


def _color_style(prefix: str, value: str) -> Style:
    match prefix:
        case "placeholder":
            return Style((("color", value),), "::placeholder")
        case "from":
            return Style(
                (
                    ("--tw-gradient-from", value),
                    ("--tw-gradient-stops", f"var(--tw-gradient-from), {_GRADIENT_TO}"),
                )
            )
        case "via":
            return Style(
                (("--tw-gradient-stops", f"var(--tw-gradient-from), {value}, {_GRADIENT_TO}"),)
            )
    return Style(_fill(COLOR_PROPERTIES[prefix], value))


def _fraction_style(prefix: str, value: str) -> Style:
    if prefix in TRANSLATE_PROPERTIES:
        return Style(((TRANSLATE_PROPERTIES[prefix], value), ("transform", TRANSFORM)))
    props = SIZING_PROPERTIES.get(prefix) or INSET_PROPERTIES[prefix]
    return Style(_fill(props, value))


def _scale_style(prefix: str, key: str, negative: bool = False) -> Style | None:
    value = _scale_value(prefix, key)
    if value is None:
        return None
    if negative:
        value = _negate(value)
        if value is None:
            return None

    if prefix in SPACING_PROPERTIES:
        return Style(_fill(SPACING_PROPERTIES[prefix], value))
    if prefix in MARGIN_PROPERTIES:
        return Style(_fill(MARGIN_PROPERTIES[prefix], value))
    if prefix in SIZING_PROPERTIES:
        return Style(_fill(SIZING_PROPERTIES[prefix], value))
    if prefix in INSET_PROPERTIES:
        return Style(_fill(INSET_PROPERTIES[prefix], value))
    if prefix in BORDER_WIDTH_PROPERTIES:
        return Style(_fill(BORDER_WIDTH_PROPERTIES[prefix], value))
    if prefix in RADIUS_PROPERTIES:
        return Style(_fill(RADIUS_PROPERTIES[prefix], value))
    if prefix in TRANSLATE_PROPERTIES:
        return Style(((TRANSLATE_PROPERTIES[prefix], value), ("transform", TRANSFORM)))
    if prefix in _TABLE_PROPERTIES:
        return Style(((_TABLE_PROPERTIES[prefix][0], value),))

    match prefix:
        case "space-x":
            return Style(
                (
                    ("--tw-space-x-reverse", "0"),
                    ("margin-right", f"calc({value} * var(--tw-space-x-reverse))"),
                    ("margin-left", f"calc({value} * calc(1 - var(--tw-space-x-reverse)))"),
                ),
                _CHILDREN,
            )
        case "space-y":
            return Style(
                (
                    ("--tw-space-y-reverse", "0"),
                    ("margin-bottom", f"calc({value} * var(--tw-space-y-reverse))"),
                    ("margin-top", f"calc({value} * calc(1 - var(--tw-space-y-reverse)))"),
                ),
                _CHILDREN,
            )
        case "divide-x":
            return Style(
                (
                    ("border-left-width", value),
                    ("border-right-width", "0px"),
                    ("border-style", "solid"),
                    ("border-color", "var(--vibe-divide-color, currentColor)"),
                ),
                _CHILDREN,
            )
        case "divide-y":
            return Style(
                (
                    ("border-top-width", value),
                    ("border-bottom-width", "0px"),
                    ("border-style", "solid"),
                    ("border-color", "var(--vibe-divide-color, currentColor)"),
                ),
                _CHILDREN,
            )
        case "ring":
            return Style(
                (
                    (
                        "box-shadow",
                        f"var(--tw-ring-inset) 0 0 0 calc({value} + var(--tw-ring-offset-width)) "
                        "var(--tw-ring-color)",
                    ),
                )
            )
        case "text":
            size, line_height = FONT_SIZES[key]
            return Style((("font-size", size), ("line-height", line_height)))
        case "leading":
            return Style((("line-height", value),))
        case "grid-cols":
            return Style((("grid-template-columns", value),))
        case "grid-rows":
            return Style((("grid-template-rows", value),))
        case "col-span":
            return Style((("grid-column", value),))
        case "row-span":
            return Style((("grid-row", value),))
        case "order":
            return Style((("order", value),))
        case "duration":
            return Style((("transition-duration", value),))
        case "delay":
            return Style((("transition-delay", value),))
        case "rotate":
            return Style((("--tw-rotate", value), ("transform", TRANSFORM)))
        case "scale":
            return Style(
                (("--tw-scale-x", value), ("--tw-scale-y", value), ("transform", TRANSFORM))
            )
        case "line-clamp":
            return Style(
                (
                    ("display", "-webkit-box"),
                    ("-webkit-box-orient", "vertical"),
                    ("-webkit-line-clamp", value),
                    ("overflow", "hidden"),
                )
            )
    return None


def _scale_value(prefix: str, key: str) -> str | None:
    """Look up the raw value for prefix-key, before any sign flip."""
    if prefix in SPACING_PROPERTIES or prefix in ("space-x", "space-y"):
        return SPACING.get(key)
    if prefix in MARGIN_PROPERTIES:
        return "auto" if key == "auto" else SPACING.get(key)
    if prefix in SIZING_PROPERTIES:
        if prefix in _HEIGHT_PREFIXES and key in HEIGHT_OVERRIDES:
            return HEIGHT_OVERRIDES[key]
        if prefix == "max-w" and key in MAX_WIDTHS:
            return MAX_WIDTHS[key]
        return SIZING.get(key) or SPACING.get(key)
    if prefix in INSET_PROPERTIES:
        if key in ("auto", "full"):
            return SIZING[key]
        return SPACING.get(key)
    if prefix in BORDER_WIDTH_PROPERTIES or prefix in ("divide-x", "divide-y"):
        return BORDER_WIDTHS.get(key)
    if prefix in RADIUS_PROPERTIES:
        return BORDER_RADIUS.get(key) if key else None
    if prefix in TRANSLATE_PROPERTIES:
        return "100%" if key == "full" else SPACING.get(key)
    if prefix in _TABLE_PROPERTIES:
        return _TABLE_PROPERTIES[prefix][1].get(key)

    match prefix:
        case "ring":
            return RING_WIDTHS.get(key)
        case "text":
            return FONT_SIZES[key][0] if key in FONT_SIZES else None
        case "leading":
            return LINE_HEIGHTS.get(key) or SPACING.get(key)
        case "grid-cols" | "grid-rows":
            if key in ("none", "subgrid"):
                return key
            n = _grid_count(key)
            return None if n is None else f"repeat({n}, minmax(0, 1fr))"
        case "col-span" | "row-span":
            if key == "auto":
                return "auto"
            if key == "full":
                return "1 / -1"
            n = _grid_count(key)
            return None if n is None else f"span {n} / span {n}"
        case "order":
            named = {"first": "-9999", "last": "9999", "none": "0"}
            if key in named:
                return named[key]
            n = _grid_count(key)
            return None if n is None else str(n)
        case "duration" | "delay":
            return f"{key}ms" if _is_canonical_int(key) else None
        case "rotate":
            return f"{key}deg" if _is_canonical_int(key) else None
        case "scale":
            return percent_to_decimal(int(key)) if _is_canonical_int(key) else None
        case "line-clamp":
            return key if _is_canonical_int(key) and int(key) > 0 else None
    return None


def _arbitrary_style(prefix: str, value: str) -> Style:
    match prefix:
        case "text":
            prop = "color" if _looks_like_color(value) else "font-size"
            return Style(((prop, value),))
        case "bg":
            prop = "background-image" if value.startswith("url(") else "background-color"
            return Style(((prop, value),))
        case "border":
            prop = "border-color" if _looks_like_color(value) else "border-width"
            return Style(((prop, value),))
    return Style(_fill(ARBITRARY_PROPERTIES[prefix], value))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_canonical_int(text: str) -> bool:
    """Plain ASCII digits without leading zeros ('0' itself is allowed)."""
    if not (0 < len(text) <= _MAX_DIGITS and text.isascii() and text.isdigit()):
        return False
    return str(int(text)) == text


def _is_semantic(color: str) -> bool:
    if color in SEMANTIC_COLORS:
        return True
    base, sep, tail = color.rpartition("-")
    return bool(sep) and tail == "foreground" and base in SEMANTIC_COLORS


def _grid_count(key: str) -> int | None:
    if not _is_canonical_int(key):
        return None
    n = int(key)
    return n if 1 <= n <= MAX_GRID_COLUMNS else None


def _negate(value: str) -> str | None:
    if value == "0":
        return value
    if value[:1].isdigit():
        return "-" + value
    return None


def _balanced(value: str) -> bool:
    depth = 0
    for ch in value:
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def _looks_like_color(value: str) -> bool:
    return value.startswith(_COLOR_FUNCTIONS)
