"""Unified text diff of two serialized objects."""

from __future__ import annotations

import difflib

from kube_subset_diff.config import DEFAULT_CONTEXT_LINES


def diff_str(name: str, live: str, merged: str, context_lines: int = DEFAULT_CONTEXT_LINES) -> str:
    """Unified diff from `live` to `merged`, labelled LIVE/<name> and MERGED/<name>.

    Returns "" when both texts are equal. Every output line ends in a newline,
    including the last one, even if the inputs lack a trailing newline.
    """
    if live == merged:
        return ""

    lines = difflib.unified_diff(
        live.splitlines(),
        merged.splitlines(),
        fromfile=f"LIVE/{name}",
        tofile=f"MERGED/{name}",
        n=context_lines,
        lineterm="",
    )
    return "".join(f"{line}\n" for line in lines)
