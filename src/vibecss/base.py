"""Compiled-in base stylesheet: theme custom properties and animation keyframes."""

from __future__ import annotations

from pathlib import Path

from vibecss.errors import ReadFailureError

DEFAULT_BASE_CSS = """\
:root {
  --vibe-background: #ffffff;
  --vibe-foreground: #0a0a0a;
  --vibe-card: #ffffff;
  --vibe-card-foreground: #0a0a0a;
  --vibe-popover: #ffffff;
  --vibe-popover-foreground: #0a0a0a;
  --vibe-primary: #171717;
  --vibe-primary-foreground: #fafafa;
  --vibe-secondary: #f5f5f5;
  --vibe-secondary-foreground: #171717;
  --vibe-muted: #f5f5f5;
  --vibe-muted-foreground: #737373;
  --vibe-accent: #f5f5f5;
  --vibe-accent-foreground: #171717;
  --vibe-destructive: #ef4444;
  --vibe-destructive-foreground: #fafafa;
  --vibe-success: #22c55e;
  --vibe-success-foreground: #fafafa;
  --vibe-warning: #f59e0b;
  --vibe-warning-foreground: #0a0a0a;
  --vibe-info: #3b82f6;
  --vibe-info-foreground: #fafafa;
  --vibe-border: #e5e5e5;
  --vibe-input: #e5e5e5;
  --vibe-ring: #0a0a0a;
  --vibe-radius: 0.5rem;
  --tw-ring-inset: ;
  --tw-ring-offset-width: 0px;
  --tw-ring-color: rgb(59 130 246 / 0.5);
}

.dark {
  --vibe-background: #0a0a0a;
  --vibe-foreground: #fafafa;
  --vibe-card: #0a0a0a;
  --vibe-card-foreground: #fafafa;
  --vibe-popover: #0a0a0a;
  --vibe-popover-foreground: #fafafa;
  --vibe-primary: #fafafa;
  --vibe-primary-foreground: #171717;
  --vibe-secondary: #262626;
  --vibe-secondary-foreground: #fafafa;
  --vibe-muted: #262626;
  --vibe-muted-foreground: #a3a3a3;
  --vibe-accent: #262626;
  --vibe-accent-foreground: #fafafa;
  --vibe-destructive: #7f1d1d;
  --vibe-destructive-foreground: #fafafa;
  --vibe-border: #262626;
  --vibe-input: #262626;
  --vibe-ring: #d4d4d4;
}

*,
::before,
::after {
  box-sizing: border-box;
  border-width: 0;
  border-style: solid;
  border-color: var(--vibe-border);
}

@keyframes spin {
  to {
    transform: rotate(360deg);
  }
}

@keyframes ping {
  75%,
  100% {
    transform: scale(2);
    opacity: 0;
  }
}

@keyframes pulse {
  50% {
    opacity: 0.5;
  }
}

@keyframes bounce {
  0%,
  100% {
    transform: translateY(-25%);
    animation-timing-function: cubic-bezier(0.8, 0, 1, 1);
  }
  50% {
    transform: none;
    animation-timing-function: cubic-bezier(0, 0, 0.2, 1);
  }
}
"""


def load_base_css(path: Path | str | None = None) -> str:
    """Return the project's base stylesheet if it exists, else the default."""
    if path is not None:
        path = Path(path)
        if path.is_file():
            try:
                return path.read_text(encoding="utf-8")
            except OSError as exc:
                raise ReadFailureError(path, exc.strerror or str(exc)) from exc
    return DEFAULT_BASE_CSS
