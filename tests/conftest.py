"""Shared test fixtures and helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from vibecss.rules import Rule
from vibecss.variants import resolve


@pytest.fixture
def rule_for():
    """Return a helper that resolves a token with default options and asserts it is known."""

    def _rule_for(token: str, prefix: str = "vibe", allow_unprefixed: bool = False) -> Rule:
        rule = resolve(token, prefix, allow_unprefixed)
        assert rule is not None, f"Expected {token!r} to resolve"
        return rule

    return _rule_for


@pytest.fixture
def project(tmp_path: Path):
    """Return a helper that writes {relative path: text} under tmp_path and returns the root."""

    def _project(files: dict[str, str]) -> Path:
        for rel, text in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return tmp_path

    return _project

