"""Unit tests for restart patch generation and RestartManager."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any
from unittest.mock import MagicMock

import pytest
from kubernetes.client import ApiException

from ktoolhu.core.config import RestartConfig
from ktoolhu.integrations.kubernetes.exceptions import (
    KubernetesNotFoundError,
    PatchGenerationError,
)
from ktoolhu.integrations.kubernetes.unstructured import Unstructured
from ktoolhu.services.kubernetes.restart_manager import (
    DAEMONSET,
    DEPLOYMENT,
    RESTART_ANNOTATION,
    STATEFULSET,
    RestartManager,
    generate_restart_patch,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def _workload(kind: str, name: str, namespace: str = "shop", **template: Any) -> dict[str, Any]:
    return {
        "apiVersion": "apps/v1",
        "kind": kind,
        "metadata": {"name": name, "namespace": namespace, "resourceVersion": "41"},
        "spec": {
            "selector": {"matchLabels": {"app": name}},
            "template": template
            or {
                "metadata": {"labels": {"app": name}},
                "spec": {"containers": [{"name": "main", "image": "nginx"}]},
            },
        },
        "status": {"replicas": 1},
    }


@pytest.mark.unit
@pytest.mark.kubernetes
class TestGenerateRestartPatch:
    """Tests for generate_restart_patch."""

    def test_statefulset_patch(self, apply_merge_patch: Callable[..., dict[str, Any]]) -> None:
        """Should produce a patch touching only the template annotation."""
        obj = Unstructured(_workload("StatefulSet", "db"))

        patch = generate_restart_patch(obj, now=NOW)

        assert json.loads(patch) == {
            "spec": {
                "template": {
                    "metadata": {
                        "annotations": {RESTART_ANNOTATION: "2024-05-01T12:00:00+00:00"}
                    }
                }
            }
        }
        patched = apply_merge_patch(obj.to_dict(), json.loads(patch))
        assert patched["spec"]["template"]["metadata"]["annotations"] == {
            RESTART_ANNOTATION: "2024-05-01T12:00:00+00:00"
        }
        assert patched["spec"]["template"]["spec"] == obj.lookup("spec", "template", "spec")

    def test_live_object_is_not_mutated(self) -> None:
        """The input object must stay untouched."""
        document = _workload("Deployment", "web")
        original = json.dumps(document, sort_keys=True)

        generate_restart_patch(Unstructured(document), now=NOW)

        assert json.dumps(document, sort_keys=True) == original

    def test_applying_patch_changes_one_annotation(
        self, apply_merge_patch: Callable[..., dict[str, Any]]
    ) -> None:
        """Original plus patch differs from the original by the annotation only."""
        document = _workload("DaemonSet", "agent")
        document["spec"]["template"]["metadata"]["annotations"] = {"keep": "me"}

        patch = json.loads(generate_restart_patch(Unstructured(document), now=NOW))
        patched = apply_merge_patch(document, patch)

        annotations = patched["spec"]["template"]["metadata"]["annotations"]
        assert annotations == {"keep": "me", RESTART_ANNOTATION: "2024-05-01T12:00:00+00:00"}
        del annotations[RESTART_ANNOTATION]
        assert patched == document

    def test_deterministic_except_timestamp(self) -> None:
        """Same object and time give identical bytes; a new time changes only the value."""
        obj = Unstructured(_workload("Deployment", "web"))

        first = generate_restart_patch(obj, now=NOW)
        again = generate_restart_patch(obj, now=NOW)
        later = generate_restart_patch(obj, now=NOW.replace(hour=13))

        assert first == again
        assert first.replace(b"12:00:00", b"13:00:00") == later

    def test_creates_missing_template_metadata(self) -> None:
        """A template without metadata still gets the annotation."""
        obj = Unstructured(_workload("Deployment", "bare", spec={"containers": []}))

        patch = json.loads(generate_restart_patch(obj, now=NOW))

        assert patch["spec"]["template"]["metadata"]["annotations"] == {
            RESTART_ANNOTATION: "2024-05-01T12:00:00+00:00"
        }

    def test_replaces_existing_restart_annotation(self) -> None:
        """A previous restart stamp is overwritten."""
        document = _workload("Deployment", "web")
        document["spec"]["template"]["metadata"]["annotations"] = {
            RESTART_ANNOTATION: "2023-01-01T00:00:00+00:00"
        }

        patch = json.loads(generate_restart_patch(Unstructured(document), now=NOW))

        assert patch["spec"]["template"]["metadata"]["annotations"] == {
            RESTART_ANNOTATION: "2024-05-01T12:00:00+00:00"
        }

    def test_default_time_is_timezone_aware(self) -> None:
        """Without an explicit time the annotation carries a UTC offset."""
        patch = json.loads(generate_restart_patch(Unstructured(_workload("Deployment", "web"))))
        value = patch["spec"]["template"]["metadata"]["annotations"][RESTART_ANNOTATION]

        assert datetime.fromisoformat(value).tzinfo is not None

    def test_unsupported_kind(self) -> None:
        """Kinds without a pod template are rejected."""
        with pytest.raises(PatchGenerationError, match="ConfigMap"):
            generate_restart_patch(Unstructured({"kind": "ConfigMap", "metadata": {"name": "c"}}))

    @pytest.mark.parametrize("template", [None, "broken", ["x"]])
    def test_missing_or_invalid_template(self, template: Any) -> None:
        """spec.template must be a map."""
        document = _workload("Deployment", "web")
        document["spec"]["template"] = template

        with pytest.raises(PatchGenerationError, match="spec.template"):
            generate_restart_patch(Unstructured(document), now=NOW)

    def test_targets(self) -> None:
        """The three pod-template controllers live in apps/v1."""
        assert [t.resource_kind.group_version for t in (DEPLOYMENT, DAEMONSET, STATEFULSET)] == [
            "apps/v1"
        ] * 3


@pytest.fixture
def workload_apis(mock_k8s_client: MagicMock, make_namespace: Any) -> dict[str, MagicMock]:
    """One dynamic resource mock per restartable kind."""
    mock_k8s_client.core_v1.read_namespace.return_value = make_namespace("shop")
    apis = {kind: MagicMock() for kind in ("Deployment", "DaemonSet", "StatefulSet")}
    for api in apis.values():
        api.get.return_value = {"items": []}
    mock_k8s_client.dynamic.resources.get.side_effect = lambda **kw: apis[kw["kind"]]
    return apis


@pytest.mark.unit
@pytest.mark.kubernetes
class TestRestartManager:
    """Tests for RestartManager.restart."""

    def test_restarts_every_workload(
        self, mock_k8s_client: MagicMock, workload_apis: dict[str, MagicMock]
    ) -> None:
        """Should patch each workload with the strategic-merge content type."""
        workload_apis["Deployment"].get.return_value = {"items": [_workload("Deployment", "web")]}
        workload_apis["StatefulSet"].get.return_value = {"items": [_workload("StatefulSet", "db")]}
        manager = RestartManager(mock_k8s_client, RestartConfig(namespace="shop"))

        results = list(manager.restart())

        assert [(r.kind, r.name, r.success) for r in results] == [
            ("Deployment", "web", True),
            ("StatefulSet", "db", True),
        ]
        call = workload_apis["StatefulSet"].patch.call_args
        assert call.kwargs["name"] == "db"
        assert call.kwargs["namespace"] == "shop"
        assert call.kwargs["content_type"] == "application/strategic-merge-patch+json"
        annotations = call.kwargs["body"]["spec"]["template"]["metadata"]["annotations"]
        assert annotations[RESTART_ANNOTATION] == results[1].restarted_at

    def test_missing_namespace_is_fatal(
        self, mock_k8s_client: MagicMock, workload_apis: dict[str, MagicMock]
    ) -> None:
        """A named namespace that does not exist stops the command."""
        mock_k8s_client.core_v1.read_namespace.side_effect = ApiException(status=404)
        manager = RestartManager(mock_k8s_client, RestartConfig(namespace="ghost"))

        with pytest.raises(KubernetesNotFoundError):
            list(manager.restart())

    def test_all_namespaces(
        self,
        mock_k8s_client: MagicMock,
        workload_apis: dict[str, MagicMock],
        set_namespaces: Any,
    ) -> None:
        """Without a namespace every namespace is walked."""
        set_namespaces("a", "b")
        manager = RestartManager(mock_k8s_client, RestartConfig())

        assert list(manager.restart()) == []

        namespaces = [c.kwargs["namespace"] for c in workload_apis["DaemonSet"].get.call_args_list]
        assert namespaces == ["a", "b"]
        mock_k8s_client.core_v1.read_namespace.assert_not_called()

    def test_failures_do_not_stop_the_batch(
        self, mock_k8s_client: MagicMock, workload_apis: dict[str, MagicMock]
    ) -> None:
        """Broken templates and rejected patches are reported per workload."""
        broken = _workload("Deployment", "broken")
        broken["spec"]["template"] = "oops"
        workload_apis["Deployment"].get.return_value = {
            "items": [broken, _workload("Deployment", "rejected"), _workload("Deployment", "ok")]
        }
        workload_apis["Deployment"].patch.side_effect = [
            ApiException(status=422, reason="Unprocessable Entity"),
            None,
        ]
        manager = RestartManager(mock_k8s_client, RestartConfig(namespace="shop"))

        results = list(manager.restart())

        assert [(r.name, r.success) for r in results] == [
            ("broken", False),
            ("rejected", False),
            ("ok", True),
        ]
        assert "spec.template" in (results[0].error or "")
        assert workload_apis["Deployment"].patch.call_count == 2
