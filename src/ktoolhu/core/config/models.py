"""Per-command workflow configuration models.

Each command builds one of these from its parsed options and passes it to
the workflow manager's constructor.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ktoolhu.integrations.kubernetes.config import DEFAULT_NAMESPACE


class ConfigMapLoadConfig(BaseModel):
    """Settings for the perf-configmaps load generator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    namespace: str = DEFAULT_NAMESPACE
    create: int = Field(default=10, ge=0, description="ConfigMaps to create")
    update: int = Field(default=1000, ge=0, description="Update calls to issue")
    parallel: int = Field(default=1, ge=1, description="Maximum concurrent API calls")
    size: int = Field(default=1000, ge=0, description="Padding bytes per ConfigMap")

    @model_validator(mode="after")
    def validate_update_targets(self) -> ConfigMapLoadConfig:
        """Updates cycle over created names, so at least one must be created."""
        if self.update > 0 and self.create == 0:
            raise ValueError("update requires create to be at least 1")
        return self

    @property
    def padding(self) -> str:
        return "=" * self.size


class RestartConfig(BaseModel):
    """Settings for restart-all. ``namespace=None`` means every namespace."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    namespace: str | None = None

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str | None) -> str | None:
        """Treat an empty namespace as all namespaces."""
        return v or None


class TerminatingNamespaceConfig(BaseModel):
    """Settings for the terminating-ns finalizer workflow."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    delete: bool = False
    assume_yes: bool = False


class EvictedPodsConfig(BaseModel):
    """Settings for evicted-pods."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    delete: bool = False
    assume_yes: bool = False
