"""Display and result models for Kubernetes resources."""

from ktoolhu.integrations.kubernetes.models.cluster import (
    BlockingObject,
    NamespaceSnapshot,
    RemediationSummary,
    TerminatingScan,
)
from ktoolhu.integrations.kubernetes.models.discovery import ResourceKind
from ktoolhu.integrations.kubernetes.models.workloads import (
    EvictedPodSummary,
    LoadSummary,
    RestartResult,
)

__all__ = [
    "BlockingObject",
    "EvictedPodSummary",
    "LoadSummary",
    "NamespaceSnapshot",
    "RemediationSummary",
    "ResourceKind",
    "RestartResult",
    "TerminatingScan",
]
