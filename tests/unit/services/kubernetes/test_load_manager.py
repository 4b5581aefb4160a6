"""Unit tests for ConfigMapLoadManager."""

from __future__ import annotations

import json
import threading
from collections import Counter
from typing import Any
from unittest.mock import MagicMock

import pytest
from kubernetes.client import ApiException

from ktoolhu.core.config import ConfigMapLoadConfig
from ktoolhu.integrations.kubernetes.exceptions import KubernetesAuthError
from ktoolhu.services.kubernetes.load_manager import ConfigMapLoadManager


def _conflict(reason: str = "AlreadyExists") -> ApiException:
    error = ApiException(status=409, reason="Conflict")
    error.body = json.dumps({"reason": reason})
    return error


class _Recorder:
    """Thread-safe record of create and replace calls."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.created: list[str] = []
        self.updated: list[str] = []
        self.stored: dict[str, dict[str, str]] = {}
        self.unchanged_updates = 0
        self.existing: set[str] = set()
        self.fail_updates_for: set[str] = set()

    def create(self, namespace: str, body: Any) -> None:
        name = body.metadata.name
        with self.lock:
            self.created.append(name)
            self.stored[name] = dict(body.data)
        if name in self.existing:
            raise _conflict()

    def replace(self, name: str, namespace: str, body: Any) -> None:
        with self.lock:
            self.updated.append(name)
            if self.stored.get(name) == body.data:
                self.unchanged_updates += 1
            self.stored[name] = dict(body.data)
        if name in self.fail_updates_for:
            raise ApiException(status=500, reason="Internal Error")


@pytest.fixture
def recorder(mock_k8s_client: MagicMock) -> _Recorder:
    recorder = _Recorder()
    mock_k8s_client.core_v1.create_namespaced_config_map.side_effect = recorder.create
    mock_k8s_client.core_v1.replace_namespaced_config_map.side_effect = recorder.replace
    return recorder


@pytest.mark.unit
@pytest.mark.kubernetes
class TestBuildConfigMap:
    """Tests for the ConfigMap body."""

    def test_body(self, mock_k8s_client: MagicMock) -> None:
        """Should name, label and pad the ConfigMap."""
        config = ConfigMapLoadConfig(namespace="perf", size=5)
        manager = ConfigMapLoadManager(mock_k8s_client, config)

        body = manager.build_config_map(7)

        assert body.metadata.name == "ktoolhu-7"
        assert body.metadata.namespace == "perf"
        assert body.metadata.labels == {"app": "ktoolhu"}
        assert body.data == {"data": "7====="}


@pytest.mark.unit
@pytest.mark.kubernetes
class TestRun:
    """Tests for ConfigMapLoadManager.run."""

    def test_create_then_update_cycle(
        self, mock_k8s_client: MagicMock, recorder: _Recorder
    ) -> None:
        """10 creates and 1000 updates at parallel 4, tolerating existing objects."""
        recorder.existing = {"ktoolhu-3", "ktoolhu-8"}
        config = ConfigMapLoadConfig(create=10, update=1000, parallel=4, size=10)

        summary = ConfigMapLoadManager(mock_k8s_client, config).run()

        assert sorted(set(recorder.created)) == sorted(f"ktoolhu-{i}" for i in range(10))
        assert len(recorder.created) == 10
        assert len(recorder.updated) == 1000
        assert Counter(recorder.updated) == {f"ktoolhu-{i}": 100 for i in range(10)}
        assert summary.created == 8
        assert summary.already_existed == 2
        assert summary.create_failures == 0
        assert summary.updated == 1000
        assert summary.update_failures == 0

    def test_namespace_is_created_first(
        self, mock_k8s_client: MagicMock, recorder: _Recorder
    ) -> None:
        """The target namespace is ensured before any ConfigMap write."""
        mock_k8s_client.core_v1.create_namespace.side_effect = _conflict()

        ConfigMapLoadManager(mock_k8s_client, ConfigMapLoadConfig(create=1, update=0)).run()

        body = mock_k8s_client.core_v1.create_namespace.call_args.kwargs["body"]
        assert body.metadata.name == "ktoolhu"
        assert recorder.created == ["ktoolhu-0"]

    def test_namespace_failure_is_fatal(self, mock_k8s_client: MagicMock) -> None:
        """Only the namespace step aborts the run."""
        mock_k8s_client.core_v1.create_namespace.side_effect = ApiException(status=403)

        with pytest.raises(KubernetesAuthError):
            ConfigMapLoadManager(mock_k8s_client, ConfigMapLoadConfig()).run()

        mock_k8s_client.core_v1.create_namespaced_config_map.assert_not_called()

    def test_write_failures_are_counted(
        self, mock_k8s_client: MagicMock, recorder: _Recorder
    ) -> None:
        """Rejected updates are counted, not raised."""
        recorder.fail_updates_for = {"ktoolhu-1"}
        config = ConfigMapLoadConfig(create=2, update=10, parallel=3)

        summary = ConfigMapLoadManager(mock_k8s_client, config).run()

        assert summary.updated == 5
        assert summary.update_failures == 5

    def test_create_failure_other_than_exists(
        self, mock_k8s_client: MagicMock, recorder: _Recorder
    ) -> None:
        """A stale-write conflict on create counts as a failure."""
        mock_k8s_client.core_v1.create_namespaced_config_map.side_effect = _conflict("Conflict")

        summary = ConfigMapLoadManager(
            mock_k8s_client, ConfigMapLoadConfig(create=3, update=0)
        ).run()

        assert summary.create_failures == 3
        assert summary.already_existed == 0

    def test_updates_change_content(
        self, mock_k8s_client: MagicMock, recorder: _Recorder
    ) -> None:
        """Each update writes data derived from its own index, not the created body."""
        config = ConfigMapLoadConfig(create=10, update=1000, parallel=1, size=3)

        ConfigMapLoadManager(mock_k8s_client, config).run()

        assert len(recorder.updated) == 1000
        # Only indexes 0-9 coincide with the create index of their target.
        assert recorder.unchanged_updates == 10
        assert recorder.stored["ktoolhu-4"] == {"data": "994==="}

    def test_update_body_targets_created_name(
        self, mock_k8s_client: MagicMock, recorder: _Recorder
    ) -> None:
        """The update for index 23 of 10 ConfigMaps goes to ktoolhu-3 with data 23."""
        config = ConfigMapLoadConfig(create=10, update=24, parallel=1, size=0)

        ConfigMapLoadManager(mock_k8s_client, config).run()

        replace = mock_k8s_client.core_v1.replace_namespaced_config_map
        last = replace.call_args_list[-1].kwargs
        assert last["name"] == "ktoolhu-3"
        assert last["body"].metadata.name == "ktoolhu-3"
        assert last["body"].data == {"data": "23"}
