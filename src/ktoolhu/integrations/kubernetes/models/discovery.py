"""Resource kind model produced by API discovery."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResourceKind(BaseModel):
    """One resource type served by the control plane.

    Sourced once per command from the discovery endpoints. Only kinds whose
    ``verbs`` contain ``list`` can be walked.
    """

    model_config = ConfigDict(frozen=True)

    group: str = Field(default="", description="API group, empty for the core group")
    version: str = Field(description="API version within the group")
    plural: str = Field(description="Plural resource name used in URLs")
    kind: str = Field(description="Object kind")
    namespaced: bool = Field(default=True, description="Whether objects live in namespaces")
    verbs: frozenset[str] = Field(default_factory=frozenset, description="Supported verbs")

    @property
    def group_version(self) -> str:
        """The ``apiVersion`` string of objects of this kind."""
        return f"{self.group}/{self.version}" if self.group else self.version

    @property
    def qualified_name(self) -> str:
        """``plural.group`` name as used by kubectl (``deployments.apps``)."""
        return f"{self.plural}.{self.group}" if self.group else self.plural

    def supports(self, verb: str) -> bool:
        """Return True if the control plane allows ``verb`` on this kind."""
        return verb in self.verbs

    @classmethod
    def from_api_resource(cls, group: str, version: str, resource: Any) -> ResourceKind:
        """Create from a kubernetes ``V1APIResource``."""
        return cls(
            group=group,
            version=version,
            plural=resource.name,
            kind=resource.kind,
            namespaced=bool(resource.namespaced),
            verbs=frozenset(resource.verbs or []),
        )

    def __str__(self) -> str:
        return f"{self.group_version}/{self.plural}"
