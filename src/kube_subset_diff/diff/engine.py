"""Subset diff: compare manifests against the matching subset of live state.

This is the fallback for clusters that cannot compute a server-side dry-run
diff. It may miss changes to fields the manifest does not set, but it never
reports server-populated fields as changes.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Callable

from kube_subset_diff.config import EMPTY_OBJECT_TEXT
from kube_subset_diff.core.kubectl import ClusterClient, ClusterError, ResourceNotFound
from kube_subset_diff.diff.render import diff_str
from kube_subset_diff.diff.subset import subset
from kube_subset_diff.observability.logging import get_logger
from kube_subset_diff.parser.manifest import Resource, diff_name, to_yaml

log = get_logger("subset_diff")

Renderer = Callable[[str, str, str], str]


class DiffError(Exception):
    """Raised when a diff cannot be computed. No partial diff is produced."""


@dataclass
class Difference:
    name: str
    live: str  # live state reduced to the manifest's keys, "" if absent
    desired: str  # the manifest itself


def subset_diff_one(client: ClusterClient, resource: Resource) -> Difference:
    """Fetch the live state of one resource and pair it with the manifest."""
    name = diff_name(resource)
    log.debug("diff worker started", resource=name)

    live_obj: dict[str, Any]
    try:
        live_obj = client.get(resource.namespace, resource.kind, resource.name)
    except ResourceNotFound:
        log.info("resource not found in cluster", resource=name)
        live_obj = {}
    except ClusterError as e:
        raise DiffError(f"getting state from cluster: {e}") from e

    desired = to_yaml(resource.body)
    live = to_yaml(subset(resource.body, live_obj))
    if live == EMPTY_OBJECT_TEXT:
        live = ""

    log.debug("diff worker finished", resource=name, exists=bool(live))
    return Difference(name=name, live=live, desired=desired)


def subset_diff(
    client: ClusterClient,
    resources: list[Resource],
    renderer: Renderer = diff_str,
    max_workers: int | None = None,
) -> str | None:
    """Diff every resource against the cluster, one worker per resource.

    Returns the concatenated diff in input order, or None when nothing
    differs. If any worker fails, all workers are still awaited and the
    last observed error is raised as DiffError.

    max_workers bounds the pool; None runs every resource at once.
    """
    if not resources:
        return None

    workers = max_workers or len(resources)
    results: dict[int, Difference] = {}
    last_err: Exception | None = None

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="subset-diff") as executor:
        futures: dict[Future[Difference], int] = {
            executor.submit(subset_diff_one, client, res): i
            for i, res in enumerate(resources)
        }
        for future in as_completed(futures):
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as e:
                log.warning("diff worker failed", resource=resources[index].key, error=str(e))
                last_err = e

    if last_err is not None:
        raise DiffError(f"calculating subset: {last_err}") from last_err

    diffs = ""
    docs = [results[i] for i in range(len(resources))]
    for doc in docs:
        try:
            diff_text = renderer(doc.name, doc.live, doc.desired)
        except Exception as e:
            raise DiffError(f"invoking diff: {e}") from e
        if diff_text:
            diff_text += "\n"
        diffs += diff_text
    diffs = diffs.removesuffix("\n")

    log.info("subset diff computed", resources=len(resources), changed=bool(diffs))
    if not diffs:
        return None
    return diffs
