"""Shared fixtures for Kubernetes service tests."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from ktoolhu.integrations.kubernetes.client import KubernetesClient


@pytest.fixture
def mock_k8s_client() -> MagicMock:
    """Create a mock Kubernetes client with API sub-mocks.

    Error translation is the real implementation and the retry decorator is
    a pass-through, so managers see the same exceptions as in production.
    """
    mock_client = MagicMock()
    mock_client.default_namespace = "default"
    mock_client.translate_api_exception.side_effect = KubernetesClient.translate_api_exception
    mock_client.make_retry_decorator.return_value = lambda func: func
    return mock_client


@pytest.fixture
def make_namespace() -> Callable[..., MagicMock]:
    """Factory for V1Namespace-like mocks."""

    def _make(name: str, deletion_timestamp: str | None = None) -> MagicMock:
        ns = MagicMock()
        ns.metadata.name = name
        ns.metadata.uid = None
        ns.metadata.labels = None
        ns.metadata.creation_timestamp = None
        ns.metadata.deletion_timestamp = deletion_timestamp
        ns.status.phase = "Terminating" if deletion_timestamp else "Active"
        return ns

    return _make


@pytest.fixture
def set_namespaces(
    mock_k8s_client: MagicMock,
    make_namespace: Callable[..., MagicMock],
) -> Callable[..., None]:
    """Make ``core_v1.list_namespace`` return the given namespaces.

    Accepts names, or ``(name, deletion_timestamp)`` pairs for terminating ones.
    """

    def _set(*entries: str | tuple[str, str]) -> None:
        items = []
        for entry in entries:
            if isinstance(entry, tuple):
                items.append(make_namespace(*entry))
            else:
                items.append(make_namespace(entry))
        mock_k8s_client.core_v1.list_namespace.return_value = MagicMock(items=items)

    return _set
