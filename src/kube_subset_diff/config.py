"""Default settings for subset diffing."""

from __future__ import annotations

# Default subprocess timeout in seconds (per kubectl call)
DEFAULT_TIMEOUT = 60

# Default context lines for diff output
DEFAULT_CONTEXT_LINES = 3

# Namespace assumed for manifests that do not set metadata.namespace
DEFAULT_NAMESPACE = "default"

# Serialized form of an empty live object
EMPTY_OBJECT_TEXT = "{}\n"

# Exit status of `diff --exit-code` when differences were found
EXIT_CHANGES = 16

# Prefix for environment variables backing CLI options
ENVVAR_PREFIX = "KUBE_SUBSET_DIFF"
