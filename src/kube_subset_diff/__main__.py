"""Allow running as `python -m kube_subset_diff`."""

from kube_subset_diff.cli import main

main()
