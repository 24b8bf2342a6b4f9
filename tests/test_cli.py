"""Tests for the CLI module: arg parsing, exit codes, scan/generate output, end-to-end."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from vibecss.cli import (
    CliOptions,
    build_parser,
    main,
    parse_bool_arg,
    parse_patterns_arg,
    run_generate,
)

PAGE = '<div class="vibe-flex md:vibe-p-4 vibe-nope"></div>\n'

# ---------------------------------------------------------------------------
# Argument parsing helpers
# ---------------------------------------------------------------------------


class TestParseHelpers:
    def test_parse_bool_true(self) -> None:
        assert parse_bool_arg("true") is True
        assert parse_bool_arg("Yes") is True

    def test_parse_bool_false(self) -> None:
        assert parse_bool_arg("false") is False
        assert parse_bool_arg("0") is False

    def test_parse_bool_invalid_raises(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_bool_arg("maybe")

    def test_parse_patterns(self) -> None:
        assert parse_patterns_arg("*.razor, *.html,,") == ("*.razor", "*.html")


# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_scan(self) -> None:
        ns = build_parser().parse_args(["scan", "src", "-v"])
        assert ns.command == "scan"
        assert ns.directory == "src"
        assert ns.verbose is True

    def test_generate_defaults(self) -> None:
        ns = build_parser().parse_args(["generate", "src"])
        assert ns.command == "generate"
        assert ns.output is None
        assert ns.with_base is None
        assert ns.allow_unprefixed is None
        assert ns.watch is False

    def test_generate_flags(self) -> None:
        ns = build_parser().parse_args(
            [
                "generate",
                "src",
                "-o",
                "out.css",
                "--prefix",
                "ui",
                "--with-base",
                "false",
                "--patterns",
                "*.html",
                "--allow-unprefixed",
                "--debug",
            ]
        )
        assert ns.output == "out.css"
        assert ns.prefix == "ui"
        assert ns.with_base == "false"
        assert ns.patterns == "*.html"
        assert ns.allow_unprefixed is True
        assert ns.debug is True

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ---------------------------------------------------------------------------
# scan
# ---------------------------------------------------------------------------


class TestScanCommand:
    def test_counts(self, project, capsys) -> None:
        root = project({"index.razor": PAGE})
        assert main(["scan", str(root)]) == 0
        out = capsys.readouterr().out
        assert "Total classes found: 3" in out
        assert "Recognized: 2" in out
        assert "Unknown: 1" in out
        assert "  - vibe-nope" in out

    def test_verbose_lists_recognized(self, project, capsys) -> None:
        root = project({"index.razor": PAGE})
        assert main(["scan", str(root), "--verbose"]) == 0
        out = capsys.readouterr().out
        assert "Recognized classes:" in out
        assert "  - md:vibe-p-4" in out

    def test_unknown_list_truncated(self, project, capsys) -> None:
        classes = " ".join(f"vibe-nope-{i}" for i in range(25))
        root = project({"index.razor": f'<div class="{classes}"></div>'})
        assert main(["scan", str(root)]) == 0
        out = capsys.readouterr().out
        assert "Unknown classes (first 20):" in out
        assert "  - vibe-nope-19" in out
        assert "vibe-nope-20" not in out
        assert "  ... and 5 more" in out

    def test_missing_directory_returns_1(self, tmp_path: Path, capsys) -> None:
        assert main(["scan", str(tmp_path / "missing")]) == 1
        assert capsys.readouterr().err.startswith("error: directory not found")

    def test_unreadable_file_returns_1(self, project, capsys, monkeypatch) -> None:
        root = project({"a.html": PAGE, "b.html": PAGE})
        original = Path.read_text

        def read_text(self, *args, **kwargs):
            if self.name == "a.html":
                raise PermissionError(13, "Permission denied", str(self))
            return original(self, *args, **kwargs)

        monkeypatch.setattr(Path, "read_text", read_text)
        assert main(["scan", str(root)]) == 1
        captured = capsys.readouterr()
        assert captured.err == f"error: cannot read input: Permission denied\n  --> {root / 'a.html'}\n"
        assert "Traceback" not in captured.err
        assert captured.out == ""


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


class TestGenerateCommand:
    def test_writes_css(self, project, tmp_path: Path, capsys) -> None:
        root = project({"index.razor": PAGE})
        out = tmp_path / "dist" / "site.css"
        assert main(["generate", str(root), "-o", str(out)]) == 0
        css = out.read_text(encoding="utf-8")
        assert ".vibe-flex {" in css
        assert "@media (min-width: 768px)" in css
        stdout = capsys.readouterr().out
        assert "Classes found: 3" in stdout
        assert "Classes generated: 2" in stdout
        assert f"CSS size: {len(css.encode('utf-8'))} bytes" in stdout

    def test_default_output_in_cwd(self, project, tmp_path: Path, monkeypatch) -> None:
        root = project({"src/index.razor": PAGE})
        monkeypatch.chdir(tmp_path)
        assert main(["generate", str(root / "src")]) == 0
        assert (tmp_path / "vibe.css").is_file()

    def test_with_base_false(self, project, tmp_path: Path) -> None:
        root = project({"index.razor": PAGE})
        out = tmp_path / "vibe.css"
        assert main(["generate", str(root), "-o", str(out), "--with-base", "false"]) == 0
        assert ":root" not in out.read_text(encoding="utf-8")

    def test_with_base_invalid_returns_2(self, project, tmp_path: Path, capsys) -> None:
        root = project({"index.razor": PAGE})
        assert main(["generate", str(root), "--with-base", "maybe"]) == 2
        assert "error:" in capsys.readouterr().err

    def test_missing_directory_returns_1(self, tmp_path: Path) -> None:
        assert main(["generate", str(tmp_path / "missing"), "-o", str(tmp_path / "x.css")]) == 1

    def test_write_failure_returns_1(self, project, tmp_path: Path, capsys) -> None:
        root = project({"index.razor": PAGE, "blocker": "not a directory"})
        assert main(["generate", str(root), "-o", str(root / "blocker" / "vibe.css")]) == 1
        assert "cannot write output" in capsys.readouterr().err

    def test_debug_dumps_rules(self, project, tmp_path: Path, capsys) -> None:
        root = project({"index.razor": PAGE})
        assert main(["generate", str(root), "-o", str(tmp_path / "vibe.css"), "--debug"]) == 0
        err = capsys.readouterr().err
        assert "Rules (2)" in err
        assert "Unknown (1)" in err

    def test_watch_delegates_to_watcher(self, project, tmp_path: Path, monkeypatch) -> None:
        from vibecss.watch import ProjectWatcher

        seen: list[Path] = []
        monkeypatch.setattr(ProjectWatcher, "run", lambda self: seen.append(self.output))
        root = project({"index.razor": PAGE})
        out = tmp_path / "vibe.css"
        assert main(["generate", str(root), "-o", str(out), "--watch"]) == 0
        assert seen == [out]


# ---------------------------------------------------------------------------
# run_generate smoke test
# ---------------------------------------------------------------------------


class TestRunGenerate:
    def test_basic(self, project, tmp_path: Path) -> None:
        root = project({"index.razor": PAGE})
        opts = CliOptions(
            command="generate",
            directory=root,
            output=tmp_path / "out.css",
            patterns=None,
            prefix="vibe",
            allow_unprefixed=False,
            include_base=False,
            ignore=("vibe-nope",),
            verbose=False,
            watch=False,
            debug=False,
            interval=0.5,
            debounce=0.3,
        )
        run_generate(opts)
        css = (tmp_path / "out.css").read_text(encoding="utf-8")
        assert css.startswith("/* Generated by vibecss")
        assert ".vibe-flex {" in css
