"""Class scanner: markup/code extraction, token filtering and deterministic order."""

from __future__ import annotations

from pathlib import Path

import pytest

from vibecss.errors import ReadFailureError
from vibecss.scanner import DEFAULT_PATTERNS, ClassScanner, clean_token

INDEX_RAZOR = """\
<div class="vibe-flex vibe-p-4 other">
  <span class="hover:vibe-bg-red-500 vibe-flex">x</span>
  <button class="@(active ? "vibe-bg-blue-500" : "vibe-bg-gray-100")">b</button>
</div>
"""

ABOUT_CSHTML = """\
<p class="vibe-text-lg sm:vibe-w-1/2">About</p>
<Card CssClass="vibe-rounded-lg" />
"""

CARD_CS = """\
public class Card
{
    private string css = "vibe-text-sm vibe-font-bold";
    private string greeting = "hello world";
    public string CssClass { get; set; } = "vibe-m-2";
}
"""


# ---------------------------------------------------------------------------
# Directory scanning
# ---------------------------------------------------------------------------


class TestScanDirectory:
    def test_fixture_tokens(self, project) -> None:
        root = project(
            {
                "index.razor": INDEX_RAZOR,
                "pages/about.cshtml": ABOUT_CSHTML,
                "Card.cs": CARD_CS,
                "notes.txt": 'class="vibe-hidden"',
            }
        )
        assert ClassScanner().scan_directory(root) == [
            "vibe-flex",
            "vibe-p-4",
            "hover:vibe-bg-red-500",
            "vibe-bg-blue-500",
            "vibe-bg-gray-100",
            "vibe-text-lg",
            "sm:vibe-w-1/2",
            "vibe-rounded-lg",
        ]

    def test_code_files_need_explicit_pattern(self, project) -> None:
        root = project({"Card.cs": CARD_CS})
        assert ClassScanner().scan_directory(root) == []
        assert ClassScanner().scan_directory(root, ["*.cs"]) == [
            "vibe-text-sm",
            "vibe-font-bold",
            "vibe-m-2",
        ]

    def test_files_visited_in_sorted_order(self, project) -> None:
        root = project(
            {
                "b.html": '<i class="vibe-block"></i>',
                "a.html": '<i class="vibe-hidden vibe-block"></i>',
                "a/z.html": '<i class="vibe-grid"></i>',
            }
        )
        # "a.html" < "a/z.html" < "b.html" by relative posix path
        assert ClassScanner().scan_directory(root) == ["vibe-hidden", "vibe-block", "vibe-grid"]

    def test_repeated_scans_are_identical(self, project) -> None:
        files = {f"page{i}.razor": f'<div class="vibe-p-{i} vibe-flex"></div>' for i in range(20)}
        root = project(files)
        scanner = ClassScanner()
        assert scanner.scan_directory(root) == scanner.scan_directory(root)

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert ClassScanner().scan_directory(tmp_path) == []

    def test_find_files_deduplicates_overlapping_patterns(self, project) -> None:
        root = project({"x.html": "", "y.razor": ""})
        files = ClassScanner().find_files(root, ["*.html", "*.htm*", *DEFAULT_PATTERNS])
        assert [f.name for f in files] == ["x.html", "y.razor"]

    def test_file_deleted_before_read(self, tmp_path: Path) -> None:
        with pytest.raises(ReadFailureError, match="cannot read input") as info:
            ClassScanner().scan_file(tmp_path / "gone.html")
        assert info.value.path == tmp_path / "gone.html"
        assert isinstance(info.value.__cause__, FileNotFoundError)

    def test_read_failure_surfaces_from_directory_scan(self, project, monkeypatch) -> None:
        root = project({"a.html": '<i class="vibe-flex"></i>', "b.html": '<i class="vibe-grid"></i>'})
        original = Path.read_text

        def read_text(self, *args, **kwargs):
            if self.name == "b.html":
                raise PermissionError(13, "Permission denied", str(self))
            return original(self, *args, **kwargs)

        monkeypatch.setattr(Path, "read_text", read_text)
        with pytest.raises(ReadFailureError) as info:
            ClassScanner().scan_directory(root)
        assert info.value.reason == "Permission denied"


# ---------------------------------------------------------------------------
# Markup extraction
# ---------------------------------------------------------------------------


class TestMarkup:
    def test_class_attribute(self) -> None:
        assert ClassScanner().scan_content('<a class="vibe-underline">') == ["vibe-underline"]

    def test_attribute_is_case_insensitive(self) -> None:
        assert ClassScanner().scan_content('<a CLASS="vibe-underline">') == ["vibe-underline"]

    def test_razor_class_forms(self) -> None:
        content = '<a @class="vibe-block"></a><b class=@"vibe-grid"></b>'
        assert ClassScanner().scan_content(content) == ["vibe-block", "vibe-grid"]

    def test_classname_attribute(self) -> None:
        assert ClassScanner().scan_content('<X className="vibe-p-2" />') == ["vibe-p-2"]

    def test_component_parameters(self) -> None:
        content = '<Btn AdditionalClasses="vibe-m-1" ExtraClasses="vibe-m-2" />'
        assert ClassScanner().scan_content(content) == ["vibe-m-1", "vibe-m-2"]

    def test_expression_literals(self) -> None:
        content = '<div class="@(on ? "vibe-bg-white" : "vibe-bg-black")"></div>'
        assert ClassScanner().scan_content(content) == ["vibe-bg-white", "vibe-bg-black"]

    def test_razor_directives_dropped(self) -> None:
        content = '<div class="vibe-p-4 @extraCss @(x)"></div>'
        assert ClassScanner().scan_content(content) == ["vibe-p-4"]

    def test_unprefixed_dropped_by_default(self) -> None:
        assert ClassScanner().scan_content('<div class="flex p-4"></div>') == []

    def test_allow_unprefixed(self) -> None:
        scanner = ClassScanner(allow_unprefixed=True)
        assert scanner.scan_content('<div class="flex p-4"></div>') == ["flex", "p-4"]

    def test_custom_prefix(self) -> None:
        scanner = ClassScanner(prefix="ui")
        assert scanner.scan_content('<div class="ui-flex vibe-flex"></div>') == ["ui-flex"]

    def test_ignore_classes(self) -> None:
        scanner = ClassScanner()
        scanner.ignore_classes("vibe-legacy")
        assert scanner.scan_content('<i class="vibe-legacy vibe-flex"></i>') == ["vibe-flex"]

    def test_arbitrary_value_with_parentheses(self) -> None:
        content = '<div class="vibe-w-[calc(100%-2rem)]"></div>'
        assert ClassScanner().scan_content(content) == ["vibe-w-[calc(100%-2rem)]"]

    def test_braces_rejected(self) -> None:
        assert ClassScanner().scan_content('<div class="vibe-{size}"></div>') == []


# ---------------------------------------------------------------------------
# Code extraction
# ---------------------------------------------------------------------------


class TestCode:
    def test_string_literals_and_assignments(self) -> None:
        assert ClassScanner().scan_content(CARD_CS, ".cs") == [
            "vibe-text-sm",
            "vibe-font-bold",
            "vibe-m-2",
        ]

    def test_variant_literal(self) -> None:
        content = 'var c = "md:vibe-hidden";'
        assert ClassScanner().scan_content(content, ".cs") == ["md:vibe-hidden"]

    def test_plain_strings_ignored(self) -> None:
        assert ClassScanner().scan_content('Log("started ok");', ".cs") == []


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------


class TestTokenHelpers:
    def test_clean_token(self) -> None:
        assert clean_token('"vibe-flex"') == "vibe-flex"
        assert clean_token("vibe-flex,") == "vibe-flex"
        assert clean_token("(vibe-flex)") == "vibe-flex"
        assert clean_token("vibe-flex;") == "vibe-flex"

    def test_operators_rejected(self) -> None:
        scanner = ClassScanner(allow_unprefixed=True)
        for op in ("==", "&&", "?", ":", "=>"):
            assert not scanner.accepts(op)

    def test_looks_like_utility(self) -> None:
        scanner = ClassScanner()
        assert scanner.looks_like_utility("vibe-flex")
        assert scanner.looks_like_utility("hover:vibe-flex")
        assert not scanner.looks_like_utility("flex")
        assert not scanner.looks_like_utility("   ")
