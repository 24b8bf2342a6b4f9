"""Engine entry points: scan a project, generate its stylesheet, write it atomically."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from vibecss.emitter import CssEmitter
from vibecss.errors import DirectoryNotFoundError, WriteFailureError
from vibecss.scanner import ClassScanner


@dataclass(frozen=True, slots=True)
class ScanResult:
    total: int
    recognized: tuple[str, ...]
    unknown: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class GenerationResult:
    output: Path
    total: int
    recognized: tuple[str, ...]
    unknown: tuple[str, ...]
    css: str
    css_size: int

    @property
    def generated(self) -> int:
        return len(self.recognized)


def base_css_path(directory: Path | str) -> Path:
    """Conventional location of a project's own base stylesheet."""
    return Path(directory) / "wwwroot" / "css" / "vibe-base.css"


def make_scanner(
    prefix: str = "vibe",
    allow_unprefixed: bool = False,
    ignore: Iterable[str] = (),
) -> ClassScanner:
    scanner = ClassScanner(prefix, allow_unprefixed)
    scanner.ignore_classes(*ignore)
    return scanner


def scan(
    directory: Path | str,
    patterns: Iterable[str] | None = None,
    prefix: str = "vibe",
    allow_unprefixed: bool = False,
    ignore: Iterable[str] = (),
) -> ScanResult:
    """Scan a directory and classify every candidate token."""
    root = _check_directory(directory)
    tokens = make_scanner(prefix, allow_unprefixed, ignore).scan_directory(root, patterns)
    stats = CssEmitter(prefix, allow_unprefixed).stats(tokens)
    return ScanResult(total=stats.total, recognized=stats.recognized, unknown=stats.unknown)


def generate(
    directory: Path | str,
    output: Path | str,
    patterns: Iterable[str] | None = None,
    prefix: str = "vibe",
    include_base: bool = True,
    allow_unprefixed: bool = False,
    ignore: Iterable[str] = (),
) -> GenerationResult:
    """Scan a directory and write the generated stylesheet to output."""
    root = _check_directory(directory)
    tokens = make_scanner(prefix, allow_unprefixed, ignore).scan_directory(root, patterns)
    return generate_from_tokens(
        tokens,
        output,
        prefix=prefix,
        include_base=include_base,
        allow_unprefixed=allow_unprefixed,
        base_path=base_css_path(root),
    )


def generate_from_tokens(
    tokens: Iterable[str],
    output: Path | str,
    *,
    prefix: str = "vibe",
    include_base: bool = True,
    allow_unprefixed: bool = False,
    base_path: Path | None = None,
) -> GenerationResult:
    """Emit CSS for an already-scanned token sequence and write it."""
    output = Path(output)
    css, stats = CssEmitter(prefix, allow_unprefixed).emit(tokens, include_base, base_path)
    write_atomic(output, css)
    return GenerationResult(
        output=output,
        total=stats.total,
        recognized=stats.recognized,
        unknown=stats.unknown,
        css=css,
        css_size=stats.css_size,
    )


def generate_from_content(
    content: str,
    extension: str = ".razor",
    prefix: str = "vibe",
    include_base: bool = False,
    allow_unprefixed: bool = False,
) -> str:
    """Generate CSS for a single in-memory document."""
    tokens = ClassScanner(prefix, allow_unprefixed).scan_content(content, extension)
    css, _ = CssEmitter(prefix, allow_unprefixed).emit(tokens, include_base)
    return css


def write_atomic(path: Path | str, text: str) -> None:
    """Write text via a temp file in the same directory, then rename over path.

    Either the old file stays untouched or the new content is fully in place.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as exc:
        raise WriteFailureError(path, exc.strerror or str(exc)) from exc

    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp, path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise WriteFailureError(path, exc.strerror or str(exc)) from exc
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def _check_directory(directory: Path | str) -> Path:
    root = Path(directory)
    if not root.is_dir():
        raise DirectoryNotFoundError(root)
    return root
