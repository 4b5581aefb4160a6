"""Kubernetes integration - API client, configuration and object models."""

from ktoolhu.integrations.kubernetes.client import KubernetesClient
from ktoolhu.integrations.kubernetes.config import KubernetesConfig
from ktoolhu.integrations.kubernetes.exceptions import (
    DiscoveryError,
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesValidationError,
    ListError,
    PatchGenerationError,
    RemoteWriteError,
)
from ktoolhu.integrations.kubernetes.unstructured import MISSING, Unstructured

__all__ = [
    "MISSING",
    "DiscoveryError",
    "KubernetesAuthError",
    "KubernetesClient",
    "KubernetesConfig",
    "KubernetesConflictError",
    "KubernetesConnectionError",
    "KubernetesError",
    "KubernetesNotFoundError",
    "KubernetesValidationError",
    "ListError",
    "PatchGenerationError",
    "RemoteWriteError",
    "Unstructured",
]
