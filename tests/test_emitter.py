"""CSS emitter: grouping, ordering, deduplication and exact serialization."""

from __future__ import annotations

from pathlib import Path

from vibecss import __version__
from vibecss.base import DEFAULT_BASE_CSS
from vibecss.emitter import HEADER, CssEmitter, render, render_rule, render_scoped
from vibecss.rules import Rule


def _emit(*tokens: str, **kwargs) -> str:
    css, _ = CssEmitter().emit(tokens, **kwargs)
    return css


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestSerialization:
    def test_header(self) -> None:
        assert HEADER == f"/* Generated by vibecss {__version__} */"

    def test_single_rule(self) -> None:
        assert _emit("vibe-flex") == f"{HEADER}\n\n.vibe-flex {{\n  display: flex;\n}}\n"

    def test_media_block(self) -> None:
        assert _emit("vibe-flex", "sm:vibe-flex") == (
            f"{HEADER}\n"
            "\n"
            ".vibe-flex {\n"
            "  display: flex;\n"
            "}\n"
            "\n"
            "@media (min-width: 640px) {\n"
            "  .sm\\:vibe-flex {\n"
            "    display: flex;\n"
            "  }\n"
            "}\n"
        )

    def test_rules_in_one_media_block_separated(self) -> None:
        css = _emit("sm:vibe-flex", "sm:vibe-p-4")
        assert css.count("@media (min-width: 640px)") == 1
        assert "  }\n\n  .sm\\:vibe-p-4 {\n" in css

    def test_empty_input(self) -> None:
        assert _emit() == f"{HEADER}\n"

    def test_render_rule(self) -> None:
        rule = Rule(".x", (("margin-left", "auto"), ("margin-right", "auto")))
        assert render_rule(rule) == ".x {\n  margin-left: auto;\n  margin-right: auto;\n}"

    def test_render_scoped(self) -> None:
        rule = Rule(".x", (("display", "none"),), "@media (min-width: 768px)", 768)
        assert render_scoped(rule) == (
            "@media (min-width: 768px) {\n  .x {\n    display: none;\n  }\n}"
        )


# ---------------------------------------------------------------------------
# Ordering and deduplication
# ---------------------------------------------------------------------------


class TestOrdering:
    def test_breakpoints_ascending(self) -> None:
        css = _emit("lg:vibe-flex", "sm:vibe-flex", "md:vibe-flex")
        sm = css.index("@media (min-width: 640px)")
        md = css.index("@media (min-width: 768px)")
        lg = css.index("@media (min-width: 1024px)")
        assert sm < md < lg

    def test_plain_rules_before_media(self) -> None:
        css = _emit("md:vibe-block", "vibe-hidden")
        assert css.index(".vibe-hidden") < css.index("@media")

    def test_first_seen_order(self) -> None:
        css = _emit("vibe-p-4", "vibe-flex", "vibe-m-2")
        assert css.index(".vibe-p-4") < css.index(".vibe-flex") < css.index(".vibe-m-2")

    def test_duplicates_collapse(self) -> None:
        css = _emit("vibe-flex", "vibe-flex")
        assert css.count(".vibe-flex {") == 1

    def test_render_dedupes_on_selector_and_media(self) -> None:
        first = Rule(".a", (("display", "flex"),))
        second = Rule(".a", (("display", "block"),))
        css = render([first, second])
        assert "display: flex" in css
        assert "display: block" not in css

    def test_deterministic(self) -> None:
        tokens = ("md:vibe-p-4", "vibe-flex", "hover:vibe-bg-red-500", "sm:vibe-grid")
        assert _emit(*tokens) == _emit(*tokens)


# ---------------------------------------------------------------------------
# Unknown and empty rules
# ---------------------------------------------------------------------------


class TestUnknown:
    def test_unprefixed_not_emitted(self) -> None:
        css, stats = CssEmitter().emit(["flex", "vibe-flex"])
        assert ".flex {" not in css
        assert stats.unknown == ("flex",)
        assert stats.recognized == ("vibe-flex",)
        assert stats.total == 2

    def test_group_marker_recognized_but_silent(self) -> None:
        css, stats = CssEmitter().emit(["vibe-group"])
        assert ".vibe-group" not in css
        assert stats.recognized == ("vibe-group",)

    def test_stats_without_serialization(self) -> None:
        stats = CssEmitter().stats(["vibe-flex", "vibe-nope", "vibe-flex"])
        assert stats.total == 2
        assert stats.unknown == ("vibe-nope",)
        assert stats.css_size == 0

    def test_css_size_is_utf8_bytes(self) -> None:
        css, stats = CssEmitter().emit(["vibe-flex"])
        assert stats.css_size == len(css.encode("utf-8"))


# ---------------------------------------------------------------------------
# Base stylesheet
# ---------------------------------------------------------------------------


class TestBase:
    def test_default_base_after_header(self) -> None:
        css = _emit("vibe-flex", include_base=True)
        assert css.startswith(f"{HEADER}\n\n:root {{")
        assert DEFAULT_BASE_CSS.strip("\n") in css
        assert css.index("@keyframes spin") < css.index(".vibe-flex {")

    def test_project_base_file(self, tmp_path: Path) -> None:
        base = tmp_path / "vibe-base.css"
        base.write_text(":root { --brand: red; }\n", encoding="utf-8")
        css = _emit("vibe-flex", include_base=True, base_css_path=base)
        assert ":root { --brand: red; }" in css
        assert "--vibe-primary" not in css

    def test_missing_base_file_falls_back(self, tmp_path: Path) -> None:
        css = _emit(include_base=True, base_css_path=tmp_path / "nope.css")
        assert "--vibe-primary" in css

    def test_base_omitted_by_default(self) -> None:
        assert ":root" not in _emit("vibe-flex")
