"""Subset diffing of Kubernetes manifests against live cluster state."""

__version__ = "0.1.0"
