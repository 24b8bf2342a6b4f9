"""Command-line interface for vibecss."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from vibecss.errors import VibeCssError

CONFIG_NAME = "vibecss.toml"
DEFAULT_OUTPUT = "vibe.css"
MAX_UNKNOWN_LISTED = 20


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    command: str
    directory: Path
    output: Path
    patterns: tuple[str, ...] | None
    prefix: str
    allow_unprefixed: bool
    include_base: bool
    ignore: tuple[str, ...]
    verbose: bool
    watch: bool
    debug: bool
    interval: float
    debounce: float


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("directory", help="Project directory to scan")
    p.add_argument(
        "--patterns",
        metavar="GLOB[,GLOB...]",
        help="Comma-separated file patterns (default: *.razor,*.cshtml,*.html)",
    )
    p.add_argument("--prefix", metavar="NAME", help="Class prefix (default: vibe)")
    p.add_argument(
        "--allow-unprefixed",
        action="store_true",
        default=None,
        help="Also accept class names without the prefix",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="vibecss",
        description="On-demand utility CSS generator",
    )
    sub = p.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", help="List recognized and unknown classes")
    _add_common(scan)
    scan.add_argument("-v", "--verbose", action="store_true", help="List recognized classes")

    gen = sub.add_parser("generate", help="Write the stylesheet")
    _add_common(gen)
    gen.add_argument("-o", "--output", metavar="FILE", help=f"Output file (default: {DEFAULT_OUTPUT})")
    gen.add_argument(
        "--with-base",
        metavar="true|false",
        help="Prepend the base stylesheet (default: true)",
    )
    gen.add_argument("--watch", action="store_true", help="Watch for changes and regenerate")
    gen.add_argument("--debug", action="store_true", help="Dump resolved rules to stderr")
    return p


def parse_bool_arg(s: str) -> bool:
    """Parse a true/false style flag value."""
    value = s.strip().lower()
    if value in ("true", "yes", "1", "on"):
        return True
    if value in ("false", "no", "0", "off"):
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean (expected true or false): {s}")


def parse_patterns_arg(s: str) -> tuple[str, ...]:
    """Split a comma-separated glob list, dropping empty entries."""
    return tuple(p.strip() for p in s.split(",") if p.strip())


def load_config(config_path: Path | None, directory: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else directory / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    directory = Path(args.directory)
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, directory)

    cfg_generate = config.get("generate")
    if not isinstance(cfg_generate, dict):
        cfg_generate = {}
    cfg_watch = config.get("watch")
    if not isinstance(cfg_watch, dict):
        cfg_watch = {}

    # Prefix: default < config < CLI
    prefix = "vibe"
    if isinstance(config.get("prefix"), str):
        prefix = config["prefix"]
    if args.prefix is not None:
        prefix = args.prefix

    # Patterns: default (None) < config < CLI
    patterns: tuple[str, ...] | None = None
    cfg_patterns = config.get("patterns")
    if isinstance(cfg_patterns, list):
        patterns = tuple(str(p) for p in cfg_patterns) or None
    if args.patterns:
        patterns = parse_patterns_arg(args.patterns) or None

    allow_unprefixed = False
    if isinstance(config.get("allow_unprefixed"), bool):
        allow_unprefixed = config["allow_unprefixed"]
    if args.allow_unprefixed is not None:
        allow_unprefixed = args.allow_unprefixed

    ignore: tuple[str, ...] = ()
    cfg_ignore = config.get("ignore")
    if isinstance(cfg_ignore, list):
        ignore = tuple(str(c) for c in cfg_ignore)

    # Output: config paths are relative to the project, CLI paths to the cwd
    output = Path(DEFAULT_OUTPUT)
    if isinstance(cfg_generate.get("output"), str):
        output = directory / cfg_generate["output"]
    raw_output = getattr(args, "output", None)
    if raw_output:
        output = Path(raw_output)

    include_base = True
    if isinstance(cfg_generate.get("with_base"), bool):
        include_base = cfg_generate["with_base"]
    raw_base = getattr(args, "with_base", None)
    if raw_base is not None:
        include_base = parse_bool_arg(raw_base)

    interval = 0.5
    if isinstance(cfg_watch.get("interval"), (int, float)):
        interval = float(cfg_watch["interval"])
    debounce = 0.3
    if isinstance(cfg_watch.get("debounce"), (int, float)):
        debounce = float(cfg_watch["debounce"])

    return CliOptions(
        command=args.command,
        directory=directory,
        output=output,
        patterns=patterns,
        prefix=prefix,
        allow_unprefixed=allow_unprefixed,
        include_base=include_base,
        ignore=ignore,
        verbose=getattr(args, "verbose", False),
        watch=getattr(args, "watch", False),
        debug=getattr(args, "debug", False),
        interval=interval,
        debounce=debounce,
    )


def run_scan(options: CliOptions) -> None:
    from vibecss.engine import scan

    result = scan(
        options.directory,
        options.patterns,
        prefix=options.prefix,
        allow_unprefixed=options.allow_unprefixed,
        ignore=options.ignore,
    )
    print(f"Total classes found: {result.total}")
    print(f"Recognized: {len(result.recognized)}")
    print(f"Unknown: {len(result.unknown)}")

    if options.verbose and result.recognized:
        print()
        print("Recognized classes:")
        for cls in result.recognized:
            print(f"  - {cls}")

    if result.unknown:
        print()
        print(f"Unknown classes (first {MAX_UNKNOWN_LISTED}):")
        for cls in result.unknown[:MAX_UNKNOWN_LISTED]:
            print(f"  - {cls}")
        extra = len(result.unknown) - MAX_UNKNOWN_LISTED
        if extra > 0:
            print(f"  ... and {extra} more")


def run_generate(options: CliOptions) -> None:
    from vibecss.debug import dump_rules
    from vibecss.engine import generate, make_scanner

    if options.debug:
        tokens = make_scanner(
            options.prefix, options.allow_unprefixed, options.ignore
        ).scan_directory(options.directory, options.patterns)
        dump_rules(
            tokens,
            prefix=options.prefix,
            allow_unprefixed=options.allow_unprefixed,
            file=sys.stderr,
        )

    result = generate(
        options.directory,
        options.output,
        options.patterns,
        prefix=options.prefix,
        include_base=options.include_base,
        allow_unprefixed=options.allow_unprefixed,
        ignore=options.ignore,
    )
    print(f"Classes found: {result.total}")
    print(f"Classes generated: {result.generated}")
    if result.unknown:
        print(f"Unknown classes: {len(result.unknown)}")
    print(f"CSS size: {result.css_size} bytes")
    print(f"Wrote {result.output}")


def watch_loop(options: CliOptions) -> None:
    """Regenerate on every debounced change until interrupted."""
    from vibecss.watch import ProjectWatcher

    watcher = ProjectWatcher(
        options.directory,
        options.output,
        patterns=options.patterns,
        prefix=options.prefix,
        include_base=options.include_base,
        allow_unprefixed=options.allow_unprefixed,
        ignore=options.ignore,
        interval=options.interval,
        debounce=options.debounce,
    )
    watcher.run()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        if options.command == "scan":
            run_scan(options)
        elif options.watch:
            watch_loop(options)
        else:
            run_generate(options)
    except VibeCssError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    return 0
