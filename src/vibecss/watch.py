"""Polling watch loop with debounce and incremental rescans."""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Callable, Iterable, TextIO

from vibecss.engine import GenerationResult, base_css_path, generate_from_tokens, make_scanner
from vibecss.errors import DirectoryNotFoundError, ReadFailureError, VibeCssError

# (mtime_ns, size) per watched file
Snapshot = dict[Path, tuple[int, int]]


class ProjectWatcher:
    """Keep a project's token index current and regenerate its stylesheet on change.

    Changes are coalesced until the tree has been quiet for ``debounce``
    seconds; a change seen during that window restarts it, so at most one
    regeneration runs at a time.
    """

    def __init__(
        self,
        directory: Path | str,
        output: Path | str,
        *,
        patterns: Iterable[str] | None = None,
        prefix: str = "vibe",
        include_base: bool = True,
        allow_unprefixed: bool = False,
        ignore: Iterable[str] = (),
        interval: float = 0.5,
        debounce: float = 0.3,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        file: TextIO | None = None,
    ) -> None:
        self.directory = Path(directory)
        self.output = Path(output)
        self.patterns = tuple(patterns) if patterns else None
        self.prefix = prefix
        self.include_base = include_base
        self.allow_unprefixed = allow_unprefixed
        self.interval = interval
        self.debounce = debounce
        self.scanner = make_scanner(prefix, allow_unprefixed, ignore)
        self.base_path = base_css_path(self.directory)
        self.file_tokens: dict[Path, list[str]] = {}
        self.token_files: dict[str, set[Path]] = {}
        self._clock = clock
        self._sleep = sleep
        self._file = file
        self._snapshot: Snapshot = {}

    # ------------------------------------------------------------------
    # Index maintenance
    # ------------------------------------------------------------------

    def prime(self) -> None:
        """Scan the whole tree and build the index from scratch."""
        if not self.directory.is_dir():
            raise DirectoryNotFoundError(self.directory)
        self.file_tokens.clear()
        self.token_files.clear()
        self._snapshot = self.snapshot()
        for path in self._snapshot:
            self._add_file(path)

    def snapshot(self) -> Snapshot:
        out: Snapshot = {}
        output = self.output.resolve()
        watched = self.scanner.find_files(self.directory, self.patterns)
        # The project base stylesheet is watched but never scanned for tokens.
        if self.include_base and self.base_path.is_file():
            watched.append(self.base_path)
        for path in watched:
            if path.resolve() == output:
                continue
            try:
                st = path.stat()
            except OSError:
                continue
            out[path] = (st.st_mtime_ns, st.st_size)
        return out

    def poll(self) -> set[Path]:
        """Return files created, modified or deleted since the last snapshot."""
        current = self.snapshot()
        previous = self._snapshot
        changed = {p for p in current if previous.get(p) != current[p]}
        changed.update(p for p in previous if p not in current)
        self._snapshot = current
        return changed

    def apply_changes(self, changed: Iterable[Path]) -> None:
        """Rescan only the changed files; deleted files just drop their tokens."""
        for path in changed:
            self._remove_file(path)
            if path.is_file():
                self._add_file(path)

    def tokens(self) -> list[str]:
        """Unique tokens in sorted-file, then textual, order."""
        ordered = sorted(self.file_tokens, key=lambda p: p.relative_to(self.directory).as_posix())
        seen: dict[str, None] = {}
        for path in ordered:
            for token in self.file_tokens[path]:
                seen.setdefault(token, None)
        return list(seen)

    def files_for(self, token: str) -> set[Path]:
        return set(self.token_files.get(token, ()))

    def _add_file(self, path: Path) -> None:
        if path == self.base_path:
            return
        try:
            found = self.scanner.scan_file(path)
        except ReadFailureError as exc:
            self._log(str(exc))
            return
        self.file_tokens[path] = found
        for token in found:
            self.token_files.setdefault(token, set()).add(path)

    def _remove_file(self, path: Path) -> None:
        for token in self.file_tokens.pop(path, ()):
            owners = self.token_files.get(token)
            if owners is None:
                continue
            owners.discard(path)
            if not owners:
                del self.token_files[token]

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def regenerate(self) -> GenerationResult:
        return generate_from_tokens(
            self.tokens(),
            self.output,
            prefix=self.prefix,
            include_base=self.include_base,
            allow_unprefixed=self.allow_unprefixed,
            base_path=self.base_path,
        )

    def run(self, max_polls: int | None = None) -> None:
        """Prime, generate once, then poll until interrupted."""
        self.prime()
        self._report()
        self._log(f"Watching {self.directory} for changes...")

        pending: set[Path] = set()
        deadline = 0.0
        polls = 0
        try:
            while max_polls is None or polls < max_polls:
                self._sleep(self.interval)
                polls += 1
                changed = self.poll()
                if changed:
                    pending |= changed
                    deadline = self._clock() + self.debounce
                elif pending and self._clock() >= deadline:
                    self.apply_changes(pending)
                    pending = set()
                    self._report()
        except KeyboardInterrupt:
            pass

    def _report(self) -> None:
        try:
            result = self.regenerate()
        except VibeCssError as exc:
            self._log(str(exc))
            return
        self._log(f"Generated {result.output} ({result.generated} classes, {result.css_size} bytes)")

    def _log(self, message: str) -> None:
        print(message, file=self._file or sys.stderr)
