"""Click CLI entry point for kube-subset-diff."""

from __future__ import annotations

import functools
import sys
from typing import IO

import click
import yaml

from kube_subset_diff.config import (
    DEFAULT_CONTEXT_LINES,
    DEFAULT_NAMESPACE,
    DEFAULT_TIMEOUT,
    ENVVAR_PREFIX,
    EXIT_CHANGES,
)
from kube_subset_diff.core.kubectl import ClusterError, KubectlClient
from kube_subset_diff.diff.engine import DiffError, subset_diff
from kube_subset_diff.diff.render import diff_str
from kube_subset_diff.observability.logging import setup_logging
from kube_subset_diff.output.terminal import render_terminal
from kube_subset_diff.parser.manifest import Resource, parse_multi_doc


@click.group(context_settings={"auto_envvar_prefix": ENVVAR_PREFIX})
@click.version_option(package_name="kube-subset-diff")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    help="Log level for structured logs on stderr",
)
def main(log_level: str) -> None:
    """kube-subset-diff: diff manifests against the matching subset of live cluster state."""
    setup_logging(log_level)


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.File("r"))
@click.option("-n", "--namespace", default=DEFAULT_NAMESPACE, help="Namespace for manifests without one")
@click.option("--kubeconfig", default=None, help="Path to kubeconfig")
@click.option("--kube-context", default=None, help="Kubernetes context to use")
@click.option("--timeout", default=DEFAULT_TIMEOUT, type=click.IntRange(min=1), help="Seconds to wait for each kubectl call")
@click.option(
    "-p", "--parallel",
    default=None,
    type=click.IntRange(min=1),
    help="Maximum concurrent cluster lookups (default: one per manifest)",
)
@click.option("--context", default=DEFAULT_CONTEXT_LINES, type=click.IntRange(min=0), help="Lines of context around changes")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--exit-code", is_flag=True, help=f"Exit with {EXIT_CHANGES} when differences are found")
def diff(
    files: tuple[IO[str], ...],
    namespace: str,
    kubeconfig: str | None,
    kube_context: str | None,
    timeout: int,
    parallel: int | None,
    context: int,
    no_color: bool,
    exit_code: bool,
) -> None:
    """Diff the manifests in FILES (- for stdin) against the cluster."""
    client = KubectlClient(kubeconfig=kubeconfig, kube_context=kube_context, timeout=timeout)
    renderer = functools.partial(diff_str, context_lines=context)

    try:
        resources = _load_resources(files, namespace)
        result = subset_diff(client, resources, renderer=renderer, max_workers=parallel)
    except (DiffError, ClusterError, yaml.YAMLError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    render_terminal(result, no_color=no_color)

    if exit_code and result is not None:
        sys.exit(EXIT_CHANGES)


def _load_resources(files: tuple[IO[str], ...], namespace: str) -> list[Resource]:
    """Parse every input file into Resources, keeping file order."""
    resources: list[Resource] = []
    for f in files:
        resources.extend(parse_multi_doc(f.read(), default_namespace=namespace))
    return resources
