"""Class scanner: extract candidate utility tokens from markup and source files."""

from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from vibecss.errors import ReadFailureError

DEFAULT_PATTERNS: tuple[str, ...] = ("*.razor", "*.cshtml", "*.html")

# Extensions scanned as source code rather than markup
CODE_EXTENSIONS = frozenset({".cs"})

# Markup attributes whose value is a whitespace-separated class list
_MARKUP_PATTERNS = (
    re.compile(r'class\s*=\s*"([^"]*)"', re.IGNORECASE),
    re.compile(r'@class\s*=\s*"([^"]*)"'),
    re.compile(r'class\s*=\s*@"([^"]*)"', re.IGNORECASE),
    re.compile(r'className\s*=\s*"([^"]*)"'),
    re.compile(
        r'(?:AdditionalClasses|CssClass|ExtraClasses|ClassNames)\s*=\s*"([^"]*)"',
        re.IGNORECASE,
    ),
)

# class="@(...)": each string literal inside the expression is its own class list
_EXPRESSION_PATTERN = re.compile(r'class\s*=\s*"@\(([^)]+)\)"', re.IGNORECASE)

_STRING_LITERAL = re.compile(r'"([^"\\]*(?:\\.[^"\\]*)*)"')

_ASSIGNMENT_PATTERN = re.compile(
    r'(?:CssClass|Class|ClassName|Classes)\s*=\s*"([^"]*)"',
    re.IGNORECASE,
)

_TOKEN_CHARS = re.compile(r"^[A-Za-z0-9_:\[\]\-./%#(),]+$")

_OPERATORS = frozenset({"==", "!=", "&&", "||", "?", ":", "=>", "="})


def clean_token(raw: str) -> str:
    """Strip quotes and expression punctuation left around a class token."""
    token = raw.strip().strip("\"'")
    return token.rstrip("),;").lstrip("(")


def _has_code_punctuation(token: str) -> bool:
    """True if the token has ( ) { } outside an arbitrary-value bracket."""
    depth = 0
    for ch in token:
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        elif ch in "(){}" and depth <= 0:
            return True
        elif ch in "{}":
            return True
    return False


class ClassScanner:
    """Collect unique candidate class tokens, in first-seen order."""

    def __init__(self, prefix: str = "vibe", allow_unprefixed: bool = False) -> None:
        self.prefix = prefix
        self.allow_unprefixed = allow_unprefixed
        self._ignored: set[str] = set()

    def ignore_classes(self, *names: str) -> None:
        """Drop these exact tokens from every future result."""
        self._ignored.update(names)

    # ------------------------------------------------------------------
    # Directory / file entry points
    # ------------------------------------------------------------------

    def find_files(self, directory: Path | str, patterns: Iterable[str] | None = None) -> list[Path]:
        """Return matching files under directory, deduplicated and sorted."""
        root = Path(directory)
        found: set[Path] = set()
        for pattern in patterns or DEFAULT_PATTERNS:
            found.update(p for p in root.rglob(pattern) if p.is_file())
        return sorted(found, key=lambda p: p.relative_to(root).as_posix())

    def scan_directory(
        self,
        directory: Path | str,
        patterns: Iterable[str] | None = None,
    ) -> list[str]:
        """Scan every matching file; workers return local lists merged in file order."""
        files = self.find_files(directory, patterns)
        if not files:
            return []
        with ThreadPoolExecutor(max_workers=min(8, len(files))) as ex:
            per_file = list(ex.map(self.scan_file, files))
        return _merge(per_file)

    def scan_file(self, path: Path | str) -> list[str]:
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ReadFailureError(path, exc.strerror or str(exc)) from exc
        return self.scan_content(content, path.suffix)

    def scan_content(self, content: str, extension: str = ".razor") -> list[str]:
        """Extract tokens from text, choosing the strategy by file extension."""
        out: list[str] = []
        if extension.lower() in CODE_EXTENSIONS:
            self._extract_from_code(content, out)
        else:
            self._extract_from_markup(content, out)
        return _merge([out])

    # ------------------------------------------------------------------
    # Extraction strategies
    # ------------------------------------------------------------------

    def _extract_from_markup(self, content: str, out: list[str]) -> None:
        # (offset, is_expression, text), visited in source order
        hits: list[tuple[int, bool, str]] = []
        for pattern in _MARKUP_PATTERNS:
            hits.extend((m.start(1), False, m.group(1)) for m in pattern.finditer(content))
        hits.extend((m.start(1), True, m.group(1)) for m in _EXPRESSION_PATTERN.finditer(content))
        hits.sort(key=lambda h: (h[0], h[1]))

        for _, is_expression, value in hits:
            if not is_expression:
                self._extract_classes(value, out)
            if is_expression or "@(" in value:
                self._extract_from_expression(value, out)

    def _extract_from_code(self, content: str, out: list[str]) -> None:
        hits: list[tuple[int, str]] = []
        for m in _STRING_LITERAL.finditer(content):
            value = m.group(1)
            if self.allow_unprefixed or self.looks_like_utility(value):
                hits.append((m.start(1), value))
        hits.extend((m.start(1), m.group(1)) for m in _ASSIGNMENT_PATTERN.finditer(content))
        hits.sort(key=lambda h: h[0])

        for _, value in hits:
            self._extract_classes(value, out)

    def _extract_from_expression(self, expression: str, out: list[str]) -> None:
        for m in _STRING_LITERAL.finditer(expression):
            self._extract_classes(m.group(1), out)

    def _extract_classes(self, value: str, out: list[str]) -> None:
        for raw in value.split():
            token = clean_token(raw)
            if self.accepts(token):
                out.append(token)

    # ------------------------------------------------------------------
    # Token filters
    # ------------------------------------------------------------------

    def accepts(self, token: str) -> bool:
        """Return True if a cleaned token is a candidate class name."""
        if not token or token in self._ignored or token in _OPERATORS:
            return False
        if token.startswith("@") or _has_code_punctuation(token):
            return False
        if not _TOKEN_CHARS.match(token):
            return False
        return self.allow_unprefixed or self.looks_like_utility(token)

    def looks_like_utility(self, value: str) -> bool:
        """True if value starts with '{prefix}-', directly or after its last ':'."""
        if not value.strip():
            return False
        if not self.prefix:
            return True
        marker = self.prefix + "-"
        if value.startswith(marker):
            return True
        idx = value.rfind(":")
        return idx > 0 and value[idx + 1 :].startswith(marker)


def _merge(chunks: Iterable[list[str]]) -> list[str]:
    """Concatenate token lists keeping only the first occurrence of each."""
    seen: dict[str, None] = {}
    for chunk in chunks:
        for token in chunk:
            seen.setdefault(token, None)
    return list(seen)
