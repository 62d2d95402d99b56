"""Shell out to kubectl CLI."""

from __future__ import annotations

from typing import Any, Protocol

import yaml

from kube_subset_diff.config import DEFAULT_TIMEOUT
from kube_subset_diff.core.runner import RunError, run
from kube_subset_diff.observability.logging import get_logger

log = get_logger("kubectl")

_NOT_FOUND_MARKER = "(NotFound)"


class ClusterError(Exception):
    """Raised when the live state of a resource cannot be retrieved."""


class ResourceNotFound(ClusterError):
    """The requested resource does not exist in the cluster."""

    def __init__(self, namespace: str, kind: str, name: str) -> None:
        self.namespace = namespace
        self.kind = kind
        self.name = name
        where = f" in namespace {namespace!r}" if namespace else ""
        super().__init__(f"{kind} {name!r} not found{where}")


class ClusterClient(Protocol):
    """Anything that can fetch the live state of one resource."""

    def get(self, namespace: str, kind: str, name: str) -> dict[str, Any]: ...


def _kube_flags(**kube_opts: str | None) -> list[str]:
    """Build common kubectl flags from options."""
    flags: list[str] = []
    if kube_opts.get("kubeconfig"):
        flags += ["--kubeconfig", kube_opts["kubeconfig"]]
    if kube_opts.get("kube_context"):
        flags += ["--context", kube_opts["kube_context"]]
    return flags


def _is_not_found(err: RunError) -> bool:
    return _NOT_FOUND_MARKER in err.stderr


class KubectlClient:
    """Cluster accessor backed by `kubectl get -o yaml`."""

    def __init__(
        self,
        kubeconfig: str | None = None,
        kube_context: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self.kubeconfig = kubeconfig
        self.kube_context = kube_context
        self.timeout = timeout

    def get(self, namespace: str, kind: str, name: str) -> dict[str, Any]:
        """kubectl get <kind> <name> -o yaml [-n <namespace>] -> object body.

        Raises ResourceNotFound if the object does not exist and ClusterError
        on every other failure.
        """
        cmd = ["kubectl", "get", kind, name, "-o", "yaml"]
        if namespace:
            cmd += ["-n", namespace]
        cmd += _kube_flags(kubeconfig=self.kubeconfig, kube_context=self.kube_context)

        try:
            output = run(cmd, timeout=self.timeout)
        except RunError as e:
            if _is_not_found(e):
                raise ResourceNotFound(namespace, kind, name) from e
            raise ClusterError(str(e)) from e

        try:
            body = yaml.safe_load(output)
        except yaml.YAMLError as e:
            raise ClusterError(f"parsing kubectl output for {kind}/{name}: {e}") from e

        if body is None:
            return {}
        if not isinstance(body, dict):
            raise ClusterError(
                f"unexpected kubectl output for {kind}/{name}: {type(body).__name__}"
            )
        log.debug("fetched live state", kind=kind, namespace=namespace, name=name)
        return body
