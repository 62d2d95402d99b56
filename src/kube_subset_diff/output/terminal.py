"""Rich terminal colored output."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

# Style per unified-diff line prefix, checked in order
LINE_STYLES = (
    ("+++", "bold"),
    ("---", "bold"),
    ("@@", "cyan"),
    ("+", "green"),
    ("-", "red"),
)


def render_terminal(diff_text: str | None, no_color: bool = False) -> None:
    """Print a subset diff, or a notice when there is nothing to show."""
    console = Console(no_color=no_color, highlight=False)

    if diff_text is None:
        console.print("[dim]No differences.[/dim]")
        return

    console.print(colorize(diff_text), end="", soft_wrap=True)


def colorize(diff_text: str) -> Text:
    """Build a styled Text from unified diff output."""
    text = Text()
    for line in diff_text.splitlines(keepends=True):
        text.append(line, style=_line_style(line))
    if not diff_text.endswith("\n"):
        text.append("\n")
    return text


def _line_style(line: str) -> str:
    for prefix, style in LINE_STYLES:
        if line.startswith(prefix):
            return style
    return ""
