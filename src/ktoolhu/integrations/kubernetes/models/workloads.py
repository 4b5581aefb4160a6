"""Kubernetes workload display and result models."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, Field

from ktoolhu.integrations.kubernetes.models.base import (
    K8sEntityBase,
    _get_labels,
    _get_timestamp,
    _safe_get,
)


class EvictedPodSummary(K8sEntityBase):
    """Pod evicted by the kubelet."""

    _entity_name: ClassVar[str] = "pod"

    phase: str = Field(default="Failed", description="Pod phase")
    reason: str = Field(default="Evicted", description="Status reason")
    message: str = Field(default="", description="Eviction message")
    node_name: str | None = Field(default=None, description="Node the pod ran on")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> EvictedPodSummary:
        """Create from a kubernetes V1Pod object."""
        return cls(
            name=_safe_get(obj, "metadata", "name", default=""),
            namespace=_safe_get(obj, "metadata", "namespace"),
            uid=_safe_get(obj, "metadata", "uid"),
            creation_timestamp=_get_timestamp(_safe_get(obj, "metadata", "creation_timestamp")),
            labels=_get_labels(obj),
            phase=_safe_get(obj, "status", "phase", default="Failed"),
            reason=_safe_get(obj, "status", "reason", default=""),
            message=_safe_get(obj, "status", "message", default=""),
            node_name=_safe_get(obj, "spec", "node_name"),
        )


class RestartResult(BaseModel):
    """Outcome of restarting one workload controller."""

    kind: str = Field(description="Workload kind")
    name: str = Field(description="Workload name")
    namespace: str = Field(description="Workload namespace")
    restarted_at: str | None = Field(default=None, description="Restart annotation value")
    error: str | None = Field(default=None, description="Failure message, if any")

    @property
    def success(self) -> bool:
        return self.error is None


class LoadSummary(BaseModel):
    """Counters collected by a perf-configmaps run."""

    namespace: str = Field(description="Target namespace")
    created: int = Field(default=0, description="ConfigMaps created")
    already_existed: int = Field(default=0, description="Creates rejected as already existing")
    create_failures: int = Field(default=0, description="Creates rejected for other reasons")
    updated: int = Field(default=0, description="Successful updates")
    update_failures: int = Field(default=0, description="Rejected updates")
    create_seconds: float = Field(default=0.0, description="Wall time of the create phase")
    update_seconds: float = Field(default=0.0, description="Wall time of the update phase")
