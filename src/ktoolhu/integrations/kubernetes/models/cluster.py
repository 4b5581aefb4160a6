"""Kubernetes namespace and finalizer display models."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, Field

from ktoolhu.integrations.kubernetes.models.base import (
    K8sEntityBase,
    _get_labels,
    _get_timestamp,
    _safe_get,
)
from ktoolhu.integrations.kubernetes.unstructured import Unstructured


class NamespaceSnapshot(K8sEntityBase):
    """Point-in-time view of a namespace."""

    _entity_name: ClassVar[str] = "namespace"

    status: str = Field(default="Active", description="Namespace phase")
    deletion_timestamp: str | None = Field(default=None, description="Deletion request time")

    @property
    def is_terminating(self) -> bool:
        """Whether deletion was requested but the namespace still exists."""
        return self.deletion_timestamp is not None

    @classmethod
    def from_k8s_object(cls, obj: Any) -> NamespaceSnapshot:
        """Create from a kubernetes V1Namespace object."""
        return cls(
            name=_safe_get(obj, "metadata", "name", default=""),
            uid=_safe_get(obj, "metadata", "uid"),
            creation_timestamp=_get_timestamp(_safe_get(obj, "metadata", "creation_timestamp")),
            labels=_get_labels(obj),
            status=_safe_get(obj, "status", "phase", default="Active"),
            deletion_timestamp=_get_timestamp(_safe_get(obj, "metadata", "deletion_timestamp")),
        )


class BlockingObject(BaseModel):
    """An object under a terminating namespace that still carries finalizers."""

    kind: str = Field(description="Object kind")
    api_version: str = Field(description="Object apiVersion")
    name: str = Field(description="Object name")
    namespace: str = Field(description="Object namespace")
    deletion_timestamp: str = Field(description="Deletion request time")
    finalizers: list[str] = Field(description="Finalizers blocking deletion")

    @classmethod
    def from_unstructured(cls, obj: Unstructured, namespace: str) -> BlockingObject:
        """Create from a live object that has a deletion timestamp."""
        return cls(
            kind=obj.kind,
            api_version=obj.api_version,
            name=obj.name,
            namespace=obj.namespace or namespace,
            deletion_timestamp=obj.deletion_timestamp or "",
            finalizers=obj.finalizers,
        )


class TerminatingScan(BaseModel):
    """Namespaces listed once at the start of a terminating-ns run."""

    total: int = Field(description="Number of namespaces in the cluster")
    terminating: list[NamespaceSnapshot] = Field(
        default_factory=list, description="Namespaces with a deletion timestamp"
    )


class RemediationSummary(BaseModel):
    """Outcome of a finalizer remediation run."""

    namespaces: int = Field(default=0, description="Terminating namespaces visited")
    resource_kinds: int = Field(default=0, description="Namespaced kinds walked")
    reported: list[BlockingObject] = Field(
        default_factory=list, description="Objects blocking namespace deletion"
    )
    cleared: list[BlockingObject] = Field(
        default_factory=list, description="Objects whose finalizers were removed"
    )
    skipped: list[BlockingObject] = Field(
        default_factory=list, description="Objects left untouched after confirmation"
    )
