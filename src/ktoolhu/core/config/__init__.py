"""Configuration management with Pydantic validation."""

from ktoolhu.core.config.models import (
    ConfigMapLoadConfig,
    EvictedPodsConfig,
    RestartConfig,
    TerminatingNamespaceConfig,
)

__all__ = [
    "ConfigMapLoadConfig",
    "EvictedPodsConfig",
    "RestartConfig",
    "TerminatingNamespaceConfig",
]
