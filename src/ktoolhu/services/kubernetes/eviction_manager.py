"""Finder for pods evicted by the kubelet."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ktoolhu.integrations.kubernetes.exceptions import RemoteWriteError
from ktoolhu.integrations.kubernetes.models.workloads import EvictedPodSummary
from ktoolhu.services.kubernetes.base import K8sBaseManager
from ktoolhu.services.kubernetes.namespace_manager import NamespaceManager

if TYPE_CHECKING:
    from ktoolhu.core.config.models import EvictedPodsConfig
    from ktoolhu.integrations.kubernetes.client import KubernetesClient

EVICTED_REASON = "Evicted"


class EvictionManager(K8sBaseManager):
    """Lists evicted pods across all namespaces and deletes them on request."""

    _entity_name = "eviction"

    def __init__(self, client: KubernetesClient, config: EvictedPodsConfig) -> None:
        super().__init__(client)
        self._config = config

    @property
    def config(self) -> EvictedPodsConfig:
        return self._config

    def list_evicted_pods(self) -> list[EvictedPodSummary]:
        """Collect every pod whose status reason is ``Evicted``.

        Raises:
            KubernetesError: If namespaces or pods cannot be listed.
        """
        evicted: list[EvictedPodSummary] = []
        for namespace in NamespaceManager(self._client).list_namespaces():
            try:
                result = self._client.core_v1.list_namespaced_pod(namespace=namespace.name)
            except Exception as e:
                self._handle_api_error(e, "Pod", None, namespace.name)
            for pod in result.items or []:
                summary = EvictedPodSummary.from_k8s_object(pod)
                if summary.reason == EVICTED_REASON:
                    evicted.append(summary)

        self._log.info("listed_evicted_pods", count=len(evicted))
        return evicted

    def delete_pod(self, pod: EvictedPodSummary) -> None:
        """Delete one evicted pod.

        Raises:
            RemoteWriteError: If the delete is rejected or fails.
        """
        namespace = pod.namespace or ""
        try:
            self._client.core_v1.delete_namespaced_pod(name=pod.name, namespace=namespace)
        except Exception as e:
            cause = self._translate(e, "Pod", pod.name, namespace)
            raise RemoteWriteError(
                operation="delete",
                cause=cause,
                resource_type="Pod",
                resource_name=pod.name,
                namespace=namespace,
            ) from e
        self._log.info("deleted_evicted_pod", name=pod.name, namespace=namespace)
