"""Rolling restarts of pod-template controllers.

A restart is requested the same way ``kubectl rollout restart`` does it: a
timestamp annotation is set on the pod template, which changes the template
hash and makes the controller roll its pods.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol

from ktoolhu.integrations.kubernetes.exceptions import PatchGenerationError
from ktoolhu.integrations.kubernetes.models.discovery import ResourceKind
from ktoolhu.integrations.kubernetes.models.workloads import RestartResult
from ktoolhu.integrations.kubernetes.unstructured import Unstructured
from ktoolhu.services.kubernetes.base import K8sBaseManager
from ktoolhu.services.kubernetes.namespace_manager import NamespaceManager
from ktoolhu.services.kubernetes.walker import ObjectWalker
from ktoolhu.utils.merge import create_two_way_merge_patch

if TYPE_CHECKING:
    from ktoolhu.core.config.models import RestartConfig
    from ktoolhu.integrations.kubernetes.client import KubernetesClient

RESTART_ANNOTATION = "ktoolhu/restartedAt"
PATCH_CONTENT_TYPE = "application/strategic-merge-patch+json"


class HasPodTemplate(Protocol):
    """A controller kind whose objects embed a pod template."""

    kind: str

    def template_metadata(self, obj: Unstructured) -> dict[str, Any] | None: ...


@dataclass(frozen=True)
class RestartTarget:
    """A workload kind that can be restarted through its pod template."""

    kind: str
    plural: str
    group: str = "apps"
    version: str = "v1"
    template_path: tuple[str, ...] = ("spec", "template")

    @property
    def resource_kind(self) -> ResourceKind:
        return ResourceKind(
            group=self.group,
            version=self.version,
            plural=self.plural,
            kind=self.kind,
            namespaced=True,
            verbs=frozenset({"get", "list", "patch"}),
        )

    def template_metadata(self, obj: Unstructured) -> dict[str, Any] | None:
        """Locate the pod template's metadata map, creating it when absent.

        Returns None if the template itself is missing or is not a map.
        """
        if obj.nested_map(*self.template_path) is None:
            return None
        return obj.ensure_map(*self.template_path, "metadata")


DEPLOYMENT = RestartTarget(kind="Deployment", plural="deployments")
DAEMONSET = RestartTarget(kind="DaemonSet", plural="daemonsets")
STATEFULSET = RestartTarget(kind="StatefulSet", plural="statefulsets")

RESTART_TARGETS: tuple[RestartTarget, ...] = (DEPLOYMENT, DAEMONSET, STATEFULSET)
_TARGETS_BY_KIND = {target.kind: target for target in RESTART_TARGETS}


def restart_timestamp(now: datetime | None = None) -> str:
    """RFC 3339 timestamp used as the annotation value."""
    moment = now or datetime.now(UTC)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.isoformat(timespec="seconds")


def generate_restart_patch(
    obj: Unstructured,
    *,
    now: datetime | None = None,
    target: HasPodTemplate | None = None,
) -> bytes:
    """Build the patch that stamps the restart annotation on ``obj``.

    The live object is left untouched; the patch is the two-way merge diff
    between it and an annotated copy, so it only carries the annotation.

    Args:
        obj: Deployment, DaemonSet or StatefulSet as read from the cluster.
        now: Restart time. Defaults to the current UTC time.
        target: Template accessor. Looked up from ``obj.kind`` when omitted.

    Returns:
        JSON-encoded merge patch.

    Raises:
        PatchGenerationError: If ``obj`` is not a restartable kind or has no
            usable pod template.
    """
    target = target or _TARGETS_BY_KIND.get(obj.kind)
    if target is None:
        raise PatchGenerationError(
            message=f"Kind {obj.kind or '<unknown>'} has no pod template to restart",
            resource_type=obj.kind or None,
            resource_name=obj.name,
            namespace=obj.namespace,
        )

    modified = obj.deep_copy()
    metadata = target.template_metadata(modified)
    if metadata is None:
        raise PatchGenerationError(
            message="spec.template is missing or is not a map",
            resource_type=obj.kind,
            resource_name=obj.name,
            namespace=obj.namespace,
        )

    annotations = metadata.get("annotations")
    if annotations is None:
        annotations = metadata["annotations"] = {}
    if not isinstance(annotations, dict):
        raise PatchGenerationError(
            message="spec.template.metadata.annotations is not a map",
            resource_type=obj.kind,
            resource_name=obj.name,
            namespace=obj.namespace,
        )
    annotations[RESTART_ANNOTATION] = restart_timestamp(now)

    patch = create_two_way_merge_patch(obj.to_dict(), modified.to_dict())
    return json.dumps(patch, separators=(",", ":"), sort_keys=True).encode("utf-8")


class RestartManager(K8sBaseManager):
    """Restarts every Deployment, DaemonSet and StatefulSet in scope."""

    _entity_name = "restart"

    def __init__(self, client: KubernetesClient, config: RestartConfig) -> None:
        super().__init__(client)
        self._config = config

    @property
    def namespace(self) -> str | None:
        return self._config.namespace

    def restart(self) -> Iterator[RestartResult]:
        """Patch each workload in turn, yielding one result per workload.

        A workload whose patch cannot be built or is rejected is reported as
        failed and the batch moves on.

        Raises:
            KubernetesNotFoundError: If the configured namespace does not exist.
            KubernetesError: If the namespace list cannot be read.
        """
        if self.namespace:
            NamespaceManager(self._client).get_namespace(self.namespace)

        walker = ObjectWalker(self._client)
        objects = walker.walk(self.namespace, [t.resource_kind for t in RESTART_TARGETS])
        for obj in objects:
            yield self._restart_one(obj)

    def _restart_one(self, obj: Unstructured) -> RestartResult:
        namespace = obj.namespace or self.namespace or ""
        restarted_at = restart_timestamp()
        result = RestartResult(kind=obj.kind, name=obj.name, namespace=namespace)

        try:
            patch = generate_restart_patch(obj, now=datetime.fromisoformat(restarted_at))
        except PatchGenerationError as e:
            self._log.warning("restart_patch_failed", kind=obj.kind, name=obj.name, error=str(e))
            return result.model_copy(update={"error": str(e)})

        target = _TARGETS_BY_KIND[obj.kind]
        try:
            self._resource_api(target.resource_kind).patch(
                body=json.loads(patch),
                name=obj.name,
                namespace=namespace,
                content_type=PATCH_CONTENT_TYPE,
            )
        except Exception as e:
            error = self._translate(e, obj.kind, obj.name, namespace)
            self._log.warning(
                "restart_patch_rejected", kind=obj.kind, name=obj.name, error=str(error)
            )
            return result.model_copy(update={"error": str(error)})

        self._log.info("patched_workload", kind=obj.kind, name=obj.name, namespace=namespace)
        return result.model_copy(update={"restarted_at": restarted_at})
