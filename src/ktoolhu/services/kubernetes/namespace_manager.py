"""Kubernetes namespace manager.

Takes point-in-time namespace snapshots and creates namespaces on demand.
"""

from __future__ import annotations

from ktoolhu.integrations.kubernetes.exceptions import KubernetesConflictError
from ktoolhu.integrations.kubernetes.models.cluster import NamespaceSnapshot
from ktoolhu.services.kubernetes.base import K8sBaseManager


class NamespaceManager(K8sBaseManager):
    """Manager for Kubernetes namespaces."""

    _entity_name = "namespace"

    def list_namespaces(self) -> list[NamespaceSnapshot]:
        """List all namespaces once.

        Returns:
            Namespace snapshots in the order returned by the API.
        """
        self._log.debug("listing_namespaces")
        try:
            result = self._client.core_v1.list_namespace()
        except Exception as e:
            self._handle_api_error(e, "Namespace", None, None)
        items = [NamespaceSnapshot.from_k8s_object(ns) for ns in result.items or []]
        self._log.debug("listed_namespaces", count=len(items))
        return items

    def get_namespace(self, name: str) -> NamespaceSnapshot:
        """Get a single namespace by name.

        Raises:
            KubernetesNotFoundError: If the namespace does not exist.
        """
        self._log.debug("getting_namespace", name=name)
        try:
            result = self._client.core_v1.read_namespace(name=name)
        except Exception as e:
            self._handle_api_error(e, "Namespace", name, None)
        return NamespaceSnapshot.from_k8s_object(result)

    def ensure_namespace(self, name: str) -> bool:
        """Create a namespace unless it already exists.

        Returns:
            True if the namespace was created, False if it already existed.
        """
        from kubernetes.client import V1Namespace, V1ObjectMeta

        body = V1Namespace(metadata=V1ObjectMeta(name=name))

        self._log.info("creating_namespace", name=name)
        try:
            self._client.core_v1.create_namespace(body=body)
        except Exception as e:
            error = self._translate(e, "Namespace", name, None)
            if isinstance(error, KubernetesConflictError) and error.already_exists:
                self._log.debug("namespace_already_exists", name=name)
                return False
            raise error from e
        self._log.info("created_namespace", name=name)
        return True
