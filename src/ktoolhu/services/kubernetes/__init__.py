"""Kubernetes workflow managers."""

from ktoolhu.services.kubernetes.base import K8sBaseManager
from ktoolhu.services.kubernetes.catalog import ResourceCatalog
from ktoolhu.services.kubernetes.eviction_manager import EvictionManager
from ktoolhu.services.kubernetes.finalizer_manager import FinalizerManager
from ktoolhu.services.kubernetes.load_manager import ConfigMapLoadManager
from ktoolhu.services.kubernetes.namespace_manager import NamespaceManager
from ktoolhu.services.kubernetes.restart_manager import (
    DAEMONSET,
    DEPLOYMENT,
    RESTART_ANNOTATION,
    STATEFULSET,
    HasPodTemplate,
    RestartManager,
    RestartTarget,
    generate_restart_patch,
)
from ktoolhu.services.kubernetes.walker import ObjectWalker

__all__ = [
    "DAEMONSET",
    "DEPLOYMENT",
    "RESTART_ANNOTATION",
    "STATEFULSET",
    "ConfigMapLoadManager",
    "EvictionManager",
    "FinalizerManager",
    "HasPodTemplate",
    "K8sBaseManager",
    "NamespaceManager",
    "ObjectWalker",
    "ResourceCatalog",
    "RestartManager",
    "RestartTarget",
    "generate_restart_patch",
]
