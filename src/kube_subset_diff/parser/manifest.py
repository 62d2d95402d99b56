"""Multi-doc YAML parsing, resource labels and serialization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import yaml

from kube_subset_diff.config import DEFAULT_NAMESPACE


@dataclass
class Resource:
    api_version: str
    kind: str
    namespace: str
    name: str
    body: dict

    @property
    def key(self) -> str:
        return f"{self.api_version}/{self.kind}/{self.namespace}/{self.name}"


def parse_multi_doc(yaml_text: str, default_namespace: str = DEFAULT_NAMESPACE) -> list[Resource]:
    """Load multi-doc YAML into Resource objects.

    Skips empty docs and non-resource docs (those without apiVersion/kind).
    `kind: List` documents are flattened into their items.
    """
    resources: list[Resource] = []

    for body in yaml.safe_load_all(yaml_text):
        if not isinstance(body, dict):
            continue

        if body.get("kind") == "List" and isinstance(body.get("items"), list):
            docs = body["items"]
        else:
            docs = [body]

        for doc in docs:
            resource = _to_resource(doc, default_namespace)
            if resource is not None:
                resources.append(resource)

    return resources


def _to_resource(body: Any, default_namespace: str) -> Resource | None:
    # Must have apiVersion and kind to be a resource
    if not isinstance(body, dict) or "apiVersion" not in body or "kind" not in body:
        return None

    metadata = body.get("metadata") or {}
    return Resource(
        api_version=body["apiVersion"],
        kind=body["kind"],
        namespace=metadata.get("namespace", default_namespace),
        name=metadata.get("name", ""),
        body=body,
    )


def diff_name(resource: Resource) -> str:
    """Label a resource for diff headers: apiVersion.kind.namespace.name.

    Slashes (as in apps/v1) become dashes so the label is usable as a path.
    """
    label = f"{resource.api_version}.{resource.kind}.{resource.namespace}.{resource.name}"
    return label.replace("/", "-")


def to_yaml(body: dict) -> str:
    """Serialize a manifest tree to stable, key-sorted block YAML."""
    return yaml.safe_dump(body, default_flow_style=False, sort_keys=True)
