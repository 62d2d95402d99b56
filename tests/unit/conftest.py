"""Shared fixtures for kube-subset-diff tests.

Provides an in-memory cluster client and a manifest factory so diff tests
can run without kubectl or a real cluster.
"""

from __future__ import annotations

import copy
import threading
import time
from typing import Any

import pytest
import structlog

from kube_subset_diff.core.kubectl import ResourceNotFound
from kube_subset_diff.parser.manifest import Resource

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _silent_logs():
    """Route structlog to a no-op logger so tests never write to closed streams."""
    structlog.configure(
        processors=[structlog.processors.add_log_level, structlog.processors.KeyValueRenderer()],
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeClient:
    """Cluster client serving objects from a dict keyed by (namespace, kind, name).

    Unknown keys raise ResourceNotFound. `errors` maps keys to exceptions to
    raise instead, `delays` maps keys to seconds to sleep before answering.
    """

    def __init__(
        self,
        objects: dict[tuple[str, str, str], dict[str, Any]] | None = None,
        errors: dict[tuple[str, str, str], Exception] | None = None,
        delays: dict[tuple[str, str, str], float] | None = None,
    ) -> None:
        self.objects = objects or {}
        self.errors = errors or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, str, str]] = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def get(self, namespace: str, kind: str, name: str) -> dict[str, Any]:
        key = (namespace, kind, name)
        with self._lock:
            self.calls.append(key)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if key in self.delays:
                time.sleep(self.delays[key])
            if key in self.errors:
                raise self.errors[key]
            if key not in self.objects:
                raise ResourceNotFound(namespace, kind, name)
            return copy.deepcopy(self.objects[key])
        finally:
            with self._lock:
                self.active -= 1


def make_resource(
    kind: str = "ConfigMap",
    name: str = "app",
    namespace: str = "default",
    api_version: str = "v1",
    **fields: Any,
) -> Resource:
    """Build a Resource whose body holds apiVersion, kind, metadata and `fields`."""
    body: dict[str, Any] = {
        "apiVersion": api_version,
        "kind": kind,
        "metadata": {"name": name, "namespace": namespace},
    }
    body.update(fields)
    return Resource(
        api_version=api_version,
        kind=kind,
        namespace=namespace,
        name=name,
        body=body,
    )


def live_object(resource: Resource, **server_fields: Any) -> dict[str, Any]:
    """Copy of a resource body as the API server would return it."""
    body = copy.deepcopy(resource.body)
    body["metadata"].update({
        "uid": "6f1c1a2e-0000-4000-8000-000000000001",
        "resourceVersion": "12345",
        "creationTimestamp": "2024-01-01T00:00:00Z",
    })
    body.update(server_fields)
    return body


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()
