"""Scale and keyword tables: spacing, sizing, typography, effects, breakpoints."""

from __future__ import annotations

from dataclasses import dataclass

Declarations = tuple[tuple[str, str], ...]

SPACING: dict[str, str] = {
    "0": "0",
    "px": "1px",
    "0.5": "0.125rem",
    "1": "0.25rem",
    "1.5": "0.375rem",
    "2": "0.5rem",
    "2.5": "0.625rem",
    "3": "0.75rem",
    "3.5": "0.875rem",
    "4": "1rem",
    "5": "1.25rem",
    "6": "1.5rem",
    "7": "1.75rem",
    "8": "2rem",
    "9": "2.25rem",
    "10": "2.5rem",
    "11": "2.75rem",
    "12": "3rem",
    "14": "3.5rem",
    "16": "4rem",
    "20": "5rem",
    "24": "6rem",
    "28": "7rem",
    "32": "8rem",
    "36": "9rem",
    "40": "10rem",
    "44": "11rem",
    "48": "12rem",
    "52": "13rem",
    "56": "14rem",
    "60": "15rem",
    "64": "16rem",
    "72": "18rem",
    "80": "20rem",
    "96": "24rem",
}

# Named sizing buckets layered over SPACING for width/height utilities
SIZING: dict[str, str] = {
    "full": "100%",
    "screen": "100vw",
    "svw": "100svw",
    "lvw": "100lvw",
    "dvw": "100dvw",
    "min": "min-content",
    "max": "max-content",
    "fit": "fit-content",
    "auto": "auto",
}

HEIGHT_OVERRIDES: dict[str, str] = {
    "screen": "100vh",
    "svh": "100svh",
    "lvh": "100lvh",
    "dvh": "100dvh",
}

MAX_WIDTHS: dict[str, str] = {
    "none": "none",
    "xs": "20rem",
    "sm": "24rem",
    "md": "28rem",
    "lg": "32rem",
    "xl": "36rem",
    "2xl": "42rem",
    "3xl": "48rem",
    "4xl": "56rem",
    "5xl": "64rem",
    "6xl": "72rem",
    "7xl": "80rem",
    "prose": "65ch",
    "screen-sm": "640px",
    "screen-md": "768px",
    "screen-lg": "1024px",
    "screen-xl": "1280px",
    "screen-2xl": "1536px",
}

# name -> (font-size, line-height)
FONT_SIZES: dict[str, tuple[str, str]] = {
    "xs": ("0.75rem", "1rem"),
    "sm": ("0.875rem", "1.25rem"),
    "base": ("1rem", "1.5rem"),
    "lg": ("1.125rem", "1.75rem"),
    "xl": ("1.25rem", "1.75rem"),
    "2xl": ("1.5rem", "2rem"),
    "3xl": ("1.875rem", "2.25rem"),
    "4xl": ("2.25rem", "2.5rem"),
    "5xl": ("3rem", "1"),
    "6xl": ("3.75rem", "1"),
    "7xl": ("4.5rem", "1"),
    "8xl": ("6rem", "1"),
    "9xl": ("8rem", "1"),
}

FONT_WEIGHTS: dict[str, str] = {
    "thin": "100",
    "extralight": "200",
    "light": "300",
    "normal": "400",
    "medium": "500",
    "semibold": "600",
    "bold": "700",
    "extrabold": "800",
    "black": "900",
}

LINE_HEIGHTS: dict[str, str] = {
    "none": "1",
    "tight": "1.25",
    "snug": "1.375",
    "normal": "1.5",
    "relaxed": "1.625",
    "loose": "2",
}

LETTER_SPACINGS: dict[str, str] = {
    "tighter": "-0.05em",
    "tight": "-0.025em",
    "normal": "0em",
    "wide": "0.025em",
    "wider": "0.05em",
    "widest": "0.1em",
}

# "" is the bare `rounded` keyword
BORDER_RADIUS: dict[str, str] = {
    "none": "0",
    "sm": "0.125rem",
    "": "0.25rem",
    "md": "0.375rem",
    "lg": "0.5rem",
    "xl": "0.75rem",
    "2xl": "1rem",
    "3xl": "1.5rem",
    "full": "9999px",
}

BORDER_WIDTHS: dict[str, str] = {
    "0": "0px",
    "2": "2px",
    "4": "4px",
    "8": "8px",
}

RING_WIDTHS: dict[str, str] = {
    "0": "0px",
    "1": "1px",
    "2": "2px",
    "4": "4px",
    "8": "8px",
}

OPACITY: dict[str, str] = {
    "0": "0",
    "5": "0.05",
    "10": "0.1",
    "15": "0.15",
    "20": "0.2",
    "25": "0.25",
    "30": "0.3",
    "35": "0.35",
    "40": "0.4",
    "45": "0.45",
    "50": "0.5",
    "55": "0.55",
    "60": "0.6",
    "65": "0.65",
    "70": "0.7",
    "75": "0.75",
    "80": "0.8",
    "85": "0.85",
    "90": "0.9",
    "95": "0.95",
    "100": "1",
}

Z_INDEX: dict[str, str] = {
    "0": "0",
    "10": "10",
    "20": "20",
    "30": "30",
    "40": "40",
    "50": "50",
    "auto": "auto",
}

MAX_GRID_COLUMNS = 12

BREAKPOINTS: dict[str, int] = {
    "sm": 640,
    "md": 768,
    "lg": 1024,
    "xl": 1280,
    "2xl": 1536,
}

TRANSFORM = (
    "translate(var(--tw-translate-x, 0), var(--tw-translate-y, 0)) "
    "rotate(var(--tw-rotate, 0)) "
    "scaleX(var(--tw-scale-x, 1)) scaleY(var(--tw-scale-y, 1))"
)

_EASE = "cubic-bezier(0.4, 0, 0.2, 1)"
_TRANSITION_COLORS = "color, background-color, border-color, text-decoration-color, fill, stroke"


@dataclass(frozen=True, slots=True)
class Keyword:
    """A utility whose name maps to a fixed declaration block."""

    name: str
    declarations: Declarations
    suffix: str = ""


def _make_keywords() -> dict[str, Keyword]:
    defs: dict[str, Keyword] = {}

    def d(name: str, *decls: tuple[str, str], suffix: str = "") -> None:
        defs[name] = Keyword(name, tuple(decls), suffix)

    def each(prop: str, values: dict[str, str], prefix: str = "") -> None:
        for key, value in values.items():
            d(f"{prefix}{key}", (prop, value))

    # Display
    each(
        "display",
        {
            "block": "block",
            "inline": "inline",
            "inline-block": "inline-block",
            "flex": "flex",
            "inline-flex": "inline-flex",
            "grid": "grid",
            "inline-grid": "inline-grid",
            "contents": "contents",
            "flow-root": "flow-root",
            "table": "table",
            "table-row": "table-row",
            "table-cell": "table-cell",
            "hidden": "none",
        },
    )

    # Flexbox
    each(
        "flex-direction",
        {"row": "row", "row-reverse": "row-reverse", "col": "column", "col-reverse": "column-reverse"},
        "flex-",
    )
    each("flex-wrap", {"wrap": "wrap", "wrap-reverse": "wrap-reverse", "nowrap": "nowrap"}, "flex-")
    each("flex", {"1": "1 1 0%", "auto": "1 1 auto", "initial": "0 1 auto", "none": "none"}, "flex-")
    d("grow", ("flex-grow", "1"))
    d("grow-0", ("flex-grow", "0"))
    d("shrink", ("flex-shrink", "1"))
    d("shrink-0", ("flex-shrink", "0"))
    each(
        "align-items",
        {
            "start": "flex-start",
            "end": "flex-end",
            "center": "center",
            "baseline": "baseline",
            "stretch": "stretch",
        },
        "items-",
    )
    each(
        "justify-content",
        {
            "start": "flex-start",
            "end": "flex-end",
            "center": "center",
            "between": "space-between",
            "around": "space-around",
            "evenly": "space-evenly",
            "stretch": "stretch",
        },
        "justify-",
    )
    each(
        "align-self",
        {
            "auto": "auto",
            "start": "flex-start",
            "end": "flex-end",
            "center": "center",
            "stretch": "stretch",
            "baseline": "baseline",
        },
        "self-",
    )

    # Typography
    each(
        "text-align",
        {
            "left": "left",
            "center": "center",
            "right": "right",
            "justify": "justify",
            "start": "start",
            "end": "end",
        },
        "text-",
    )
    transforms = {
        "uppercase": "uppercase",
        "lowercase": "lowercase",
        "capitalize": "capitalize",
        "normal-case": "none",
    }
    each("text-transform", transforms)
    each("text-transform", transforms, "text-")
    decorations = {
        "underline": "underline",
        "overline": "overline",
        "line-through": "line-through",
        "no-underline": "none",
    }
    each("text-decoration-line", decorations)
    each("text-decoration-line", decorations, "text-")
    each("text-wrap", {v: v for v in ("wrap", "nowrap", "balance", "pretty")}, "text-")
    d("text-ellipsis", ("text-overflow", "ellipsis"))
    d("text-clip", ("text-overflow", "clip"))
    d("text-transparent", ("color", "transparent"), ("-webkit-text-fill-color", "transparent"))
    d("italic", ("font-style", "italic"))
    d("not-italic", ("font-style", "normal"))
    d("font-italic", ("font-style", "italic"))
    d("font-not-italic", ("font-style", "normal"))
    d(
        "font-sans",
        (
            "font-family",
            'ui-sans-serif, system-ui, sans-serif, "Apple Color Emoji", '
            '"Segoe UI Emoji", "Segoe UI Symbol", "Noto Color Emoji"',
        ),
    )
    d("font-serif", ("font-family", 'ui-serif, Georgia, Cambria, "Times New Roman", Times, serif'))
    d(
        "font-mono",
        (
            "font-family",
            'ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, "Liberation Mono", '
            '"Courier New", monospace',
        ),
    )
    d("truncate", ("overflow", "hidden"), ("text-overflow", "ellipsis"), ("white-space", "nowrap"))
    each(
        "white-space",
        {v: v for v in ("normal", "nowrap", "pre", "pre-line", "pre-wrap", "break-spaces")},
        "whitespace-",
    )
    d("break-normal", ("overflow-wrap", "normal"), ("word-break", "normal"))
    d("break-words", ("overflow-wrap", "break-word"))
    d("break-all", ("word-break", "break-all"))
    d("break-keep", ("word-break", "keep-all"))

    # Borders
    d("border", ("border-width", "1px"))
    for side, prop in (
        ("t", "border-top-width"),
        ("r", "border-right-width"),
        ("b", "border-bottom-width"),
        ("l", "border-left-width"),
    ):
        d(f"border-{side}", (prop, "1px"))
    d("border-x", ("border-left-width", "1px"), ("border-right-width", "1px"))
    d("border-y", ("border-top-width", "1px"), ("border-bottom-width", "1px"))
    each(
        "border-style",
        {v: v for v in ("solid", "dashed", "dotted", "double", "hidden", "none")},
        "border-",
    )
    d("rounded", ("border-radius", BORDER_RADIUS[""]))
    divide_children = " > :not([hidden]) ~ :not([hidden])"
    divide_color = "var(--vibe-divide-color, currentColor)"
    d(
        "divide-x",
        ("border-left-width", "1px"),
        ("border-right-width", "0px"),
        ("border-style", "solid"),
        ("border-color", divide_color),
        suffix=divide_children,
    )
    d(
        "divide-y",
        ("border-top-width", "1px"),
        ("border-bottom-width", "0px"),
        ("border-style", "solid"),
        ("border-color", divide_color),
        suffix=divide_children,
    )
    d(
        "ring",
        (
            "box-shadow",
            "var(--tw-ring-inset) 0 0 0 calc(3px + var(--tw-ring-offset-width)) var(--tw-ring-color)",
        ),
    )
    d("ring-inset", ("--tw-ring-inset", "inset"))
    d("outline-none", ("outline", "none"))

    # Effects
    each(
        "box-shadow",
        {
            "shadow-sm": "0 1px 2px 0 rgb(0 0 0 / 0.05)",
            "shadow": "0 1px 3px 0 rgb(0 0 0 / 0.1), 0 1px 2px -1px rgb(0 0 0 / 0.1)",
            "shadow-md": "0 4px 6px -1px rgb(0 0 0 / 0.1), 0 2px 4px -2px rgb(0 0 0 / 0.1)",
            "shadow-lg": "0 10px 15px -3px rgb(0 0 0 / 0.1), 0 4px 6px -4px rgb(0 0 0 / 0.1)",
            "shadow-xl": "0 20px 25px -5px rgb(0 0 0 / 0.1), 0 8px 10px -6px rgb(0 0 0 / 0.1)",
            "shadow-2xl": "0 25px 50px -12px rgb(0 0 0 / 0.25)",
            "shadow-inner": "inset 0 2px 4px 0 rgb(0 0 0 / 0.05)",
            "shadow-none": "0 0 #0000",
        },
    )
    d("transition-none", ("transition-property", "none"))
    for name, props in (
        ("transition", f"{_TRANSITION_COLORS}, opacity, box-shadow, transform, filter, backdrop-filter"),
        ("transition-all", "all"),
        ("transition-colors", _TRANSITION_COLORS),
        ("transition-opacity", "opacity"),
        ("transition-shadow", "box-shadow"),
        ("transition-transform", "transform"),
    ):
        d(
            name,
            ("transition-property", props),
            ("transition-timing-function", _EASE),
            ("transition-duration", "150ms"),
        )
    each(
        "transition-timing-function",
        {
            "ease-linear": "linear",
            "ease-in": "cubic-bezier(0.4, 0, 1, 1)",
            "ease-out": "cubic-bezier(0, 0, 0.2, 1)",
            "ease-in-out": _EASE,
        },
    )
    each(
        "animation",
        {
            "animate-none": "none",
            "animate-spin": "spin 1s linear infinite",
            "animate-ping": "ping 1s cubic-bezier(0, 0, 0.2, 1) infinite",
            "animate-pulse": "pulse 2s cubic-bezier(0.4, 0, 0.6, 1) infinite",
            "animate-bounce": "bounce 1s infinite",
        },
    )
    for name, blur in (
        ("backdrop-blur-none", "0"),
        ("backdrop-blur-sm", "4px"),
        ("backdrop-blur", "8px"),
        ("backdrop-blur-md", "12px"),
        ("backdrop-blur-lg", "16px"),
        ("backdrop-blur-xl", "24px"),
        ("backdrop-blur-2xl", "40px"),
        ("backdrop-blur-3xl", "64px"),
    ):
        d(name, ("-webkit-backdrop-filter", f"blur({blur})"), ("backdrop-filter", f"blur({blur})"))
    d("bg-clip-text", ("-webkit-background-clip", "text"), ("background-clip", "text"))
    for key, direction in (
        ("t", "top"),
        ("tr", "top right"),
        ("r", "right"),
        ("br", "bottom right"),
        ("b", "bottom"),
        ("bl", "bottom left"),
        ("l", "left"),
        ("tl", "top left"),
    ):
        d(
            f"bg-gradient-to-{key}",
            ("background-image", f"linear-gradient(to {direction}, var(--tw-gradient-stops))"),
        )

    # Layout
    each("position", {v: v for v in ("static", "fixed", "absolute", "relative", "sticky")})
    for axis in ("", "x-", "y-"):
        prop = f"overflow-{axis[:-1]}" if axis else "overflow"
        each(prop, {v: v for v in ("auto", "hidden", "clip", "visible", "scroll")}, f"overflow-{axis}")
    each(
        "object-fit",
        {v: v for v in ("contain", "cover", "fill", "none", "scale-down")},
        "object-",
    )
    each("visibility", {"visible": "visible", "invisible": "hidden", "collapse": "collapse"})

    # Interactivity
    each(
        "cursor",
        {
            v: v
            for v in (
                "auto", "default", "pointer", "wait", "text", "move", "help", "not-allowed",
                "none", "context-menu", "progress", "cell", "crosshair", "vertical-text",
                "alias", "copy", "no-drop", "grab", "grabbing", "all-scroll", "col-resize",
                "row-resize", "n-resize", "e-resize", "s-resize", "w-resize", "ne-resize",
                "nw-resize", "se-resize", "sw-resize", "ew-resize", "ns-resize",
                "nesw-resize", "nwse-resize", "zoom-in", "zoom-out",
            )
        },
        "cursor-",
    )
    each("pointer-events", {"none": "none", "auto": "auto"}, "pointer-events-")
    each("user-select", {v: v for v in ("none", "text", "all", "auto")}, "select-")
    each(
        "touch-action",
        {
            v: v
            for v in (
                "auto", "none", "pan-x", "pan-left", "pan-right", "pan-y", "pan-up",
                "pan-down", "pinch-zoom", "manipulation",
            )
        },
        "touch-",
    )
    each(
        "resize",
        {"resize-none": "none", "resize-y": "vertical", "resize-x": "horizontal", "resize": "both"},
    )
    each("scroll-behavior", {"auto": "auto", "smooth": "smooth"}, "scroll-")
    for value in ("none", "auto"):
        d(f"appearance-{value}", ("-webkit-appearance", value), ("appearance", value))
    d(
        "sr-only",
        ("position", "absolute"),
        ("width", "1px"),
        ("height", "1px"),
        ("padding", "0"),
        ("margin", "-1px"),
        ("overflow", "hidden"),
        ("clip", "rect(0, 0, 0, 0)"),
        ("white-space", "nowrap"),
        ("border-width", "0"),
    )
    d(
        "not-sr-only",
        ("position", "static"),
        ("width", "auto"),
        ("height", "auto"),
        ("padding", "0"),
        ("margin", "0"),
        ("overflow", "visible"),
        ("clip", "auto"),
        ("white-space", "normal"),
    )

    # Marker class for group-* variants
    d("group")

    return defs


KEYWORDS: dict[str, Keyword] = _make_keywords()
