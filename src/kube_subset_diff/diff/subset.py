"""Reduce a live object to the keys present in the desired object.

The cluster returns many more fields than a manifest sets (status, uid,
defaulted spec fields, ...). Comparing the full live object against the
manifest would report all of them as changes, so before diffing the live
object is narrowed down to the subset of keys the manifest mentions.
"""

from __future__ import annotations

from typing import Any


def subset(desired: dict[str, Any], live: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of `live` holding only keys that are also set in `desired`.

    Rules, applied at every nesting level:

    - `namespace` is taken from `desired` whenever it is set there, so a
      defaulted or server-assigned namespace never shows up as a change.
    - `apiVersion` is taken from `desired` when both sides set it; version
      skew is not diffed.
    - keys whose value in `desired` is missing or null are dropped.
    - nested mappings are reduced recursively.
    - lists are reduced element by element while `desired` has an element at
      the same index. Elements past the end of the desired list are kept
      unreduced, so they still show up in the diff.
    - everything else is kept as-is.

    Neither argument is modified.
    """
    result = dict(live)

    if desired.get("namespace") is not None:
        result["namespace"] = desired["namespace"]

    if desired.get("apiVersion") is not None and result.get("apiVersion") is not None:
        result["apiVersion"] = desired["apiVersion"]

    for key in list(result):
        want = desired.get(key)
        if want is None:
            del result[key]
            continue

        have = result[key]
        if isinstance(have, dict) and isinstance(want, dict):
            result[key] = subset(want, have)
        elif isinstance(have, list) and isinstance(want, list):
            result[key] = _subset_list(want, have)

    return result


def _subset_list(desired: list[Any], live: list[Any]) -> list[Any]:
    result = list(live)
    for i, have in enumerate(live):
        if i >= len(desired):
            # desired list is shorter, nothing left to compare against
            break
        want = desired[i]
        if isinstance(want, dict) and isinstance(have, dict):
            result[i] = subset(want, have)
    return result
