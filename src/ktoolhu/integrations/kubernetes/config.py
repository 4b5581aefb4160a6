"""Kubernetes connection configuration model."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_NAMESPACE = "ktoolhu"


class KubernetesConfig(BaseModel):
    """Connection settings for the target cluster."""

    model_config = ConfigDict(extra="forbid")

    kubeconfig: str | None = None
    context: str | None = None
    namespace: str = DEFAULT_NAMESPACE
    retry_attempts: int = 3

    @field_validator("kubeconfig")
    @classmethod
    def validate_kubeconfig(cls, v: str | None) -> str | None:
        """Expand ~ in kubeconfig path."""
        if not v:
            return None
        return str(Path(v).expanduser())

    @field_validator("retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        """Validate retry_attempts is at least one attempt."""
        if v < 1:
            raise ValueError("retry_attempts must be at least 1")
        return v

    @classmethod
    def from_env(cls, overrides: dict[str, Any] | None = None) -> KubernetesConfig:
        """Create configuration from environment variables and explicit overrides.

        Explicit overrides (typically CLI options) take precedence over
        environment variables. ``None`` override values are ignored.

        Supported environment variables:
            KTOOLHU_KUBECONFIG: Path to the kubeconfig file
            KTOOLHU_CONTEXT: Kubeconfig context to use
            KTOOLHU_NAMESPACE: Default namespace
            KTOOLHU_RETRY_ATTEMPTS: Attempts for transient connection failures
        """
        config_dict: dict[str, Any] = {}

        if kubeconfig := os.environ.get("KTOOLHU_KUBECONFIG"):
            config_dict["kubeconfig"] = kubeconfig
        if context := os.environ.get("KTOOLHU_CONTEXT"):
            config_dict["context"] = context
        if namespace := os.environ.get("KTOOLHU_NAMESPACE"):
            config_dict["namespace"] = namespace
        if retry_attempts := os.environ.get("KTOOLHU_RETRY_ATTEMPTS"):
            config_dict["retry_attempts"] = int(retry_attempts)

        for key, value in (overrides or {}).items():
            if value is not None:
                config_dict[key] = value

        return cls.model_validate(config_dict)
