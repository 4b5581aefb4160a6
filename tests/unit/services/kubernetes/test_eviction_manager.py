"""Unit tests for EvictionManager."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
from kubernetes.client import ApiException

from ktoolhu.core.config import EvictedPodsConfig
from ktoolhu.integrations.kubernetes.exceptions import KubernetesError, RemoteWriteError
from ktoolhu.integrations.kubernetes.models import EvictedPodSummary
from ktoolhu.services.kubernetes.eviction_manager import EvictionManager


def _pod(name: str, namespace: str, reason: str | None, message: str = "") -> MagicMock:
    pod = MagicMock()
    pod.metadata.name = name
    pod.metadata.namespace = namespace
    pod.metadata.uid = None
    pod.metadata.labels = None
    pod.metadata.creation_timestamp = None
    pod.status.phase = "Failed" if reason else "Running"
    pod.status.reason = reason
    pod.status.message = message
    pod.spec.node_name = "node-a"
    return pod


@pytest.fixture
def eviction_manager(mock_k8s_client: MagicMock) -> EvictionManager:
    return EvictionManager(mock_k8s_client, EvictedPodsConfig())


@pytest.mark.unit
@pytest.mark.kubernetes
class TestEvictionManager:
    """Tests for EvictionManager."""

    def test_lists_only_evicted_pods(
        self,
        eviction_manager: EvictionManager,
        mock_k8s_client: MagicMock,
        set_namespaces: Callable[..., None],
    ) -> None:
        """Should keep pods whose status reason is Evicted, across namespaces."""
        set_namespaces("a", "b")
        pods = {
            "a": [_pod("web-1", "a", "Evicted", "low on memory"), _pod("web-2", "a", None)],
            "b": [_pod("job-1", "b", "Evicted", "low on ephemeral-storage")],
        }
        mock_k8s_client.core_v1.list_namespaced_pod.side_effect = lambda namespace: MagicMock(
            items=pods[namespace]
        )

        result = eviction_manager.list_evicted_pods()

        assert [(p.namespace, p.name, p.message) for p in result] == [
            ("a", "web-1", "low on memory"),
            ("b", "job-1", "low on ephemeral-storage"),
        ]

    def test_list_failure_is_fatal(
        self,
        eviction_manager: EvictionManager,
        mock_k8s_client: MagicMock,
        set_namespaces: Callable[..., None],
    ) -> None:
        """Pod list errors propagate."""
        set_namespaces("a")
        mock_k8s_client.core_v1.list_namespaced_pod.side_effect = ApiException(status=500)

        with pytest.raises(KubernetesError):
            eviction_manager.list_evicted_pods()

    def test_delete_pod(
        self, eviction_manager: EvictionManager, mock_k8s_client: MagicMock
    ) -> None:
        """Should delete the pod in its namespace."""
        eviction_manager.delete_pod(EvictedPodSummary(name="web-1", namespace="a"))

        mock_k8s_client.core_v1.delete_namespaced_pod.assert_called_once_with(
            name="web-1", namespace="a"
        )

    def test_delete_failure(
        self, eviction_manager: EvictionManager, mock_k8s_client: MagicMock
    ) -> None:
        """A failed delete raises RemoteWriteError."""
        mock_k8s_client.core_v1.delete_namespaced_pod.side_effect = ApiException(status=403)

        with pytest.raises(RemoteWriteError) as exc_info:
            eviction_manager.delete_pod(EvictedPodSummary(name="web-1", namespace="a"))

        assert exc_info.value.operation == "delete"
