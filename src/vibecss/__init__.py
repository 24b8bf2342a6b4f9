"""On-demand utility CSS generator."""

from __future__ import annotations

__version__ = "0.1.0"


def generate_css(
    content: str,
    extension: str = ".razor",
    prefix: str = "vibe",
    include_base: bool = False,
    allow_unprefixed: bool = False,
) -> str:
    """Scan a markup or source string and return the stylesheet it needs."""
    from vibecss.engine import generate_from_content

    return generate_from_content(
        content,
        extension,
        prefix=prefix,
        include_base=include_base,
        allow_unprefixed=allow_unprefixed,
    )
