"""Base manager for Kubernetes service managers.

Provides shared infrastructure for all Kubernetes workflow managers,
including client access, dynamic resource lookup, and error translation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NoReturn

import structlog

if TYPE_CHECKING:
    from ktoolhu.integrations.kubernetes.client import KubernetesClient
    from ktoolhu.integrations.kubernetes.models.discovery import ResourceKind

logger = structlog.get_logger()


class K8sBaseManager:
    """Base class for Kubernetes service managers.

    Provides shared concerns for all managers:
    - Client reference and API group access
    - Structured logging with entity binding
    - Dynamic resource lookup for schema-less kinds
    - Consistent API error translation

    Subclasses set ``_entity_name`` for structured log context.
    """

    _entity_name: str = ""

    def __init__(self, client: KubernetesClient) -> None:
        """Initialize the manager.

        Args:
            client: Kubernetes API client instance.
        """
        self._client = client
        self._log = logger.bind(entity=self._entity_name)

    def _resource_api(self, kind: ResourceKind) -> Any:
        """Get the dynamic client resource for ``kind``."""
        return self._client.dynamic.resources.get(
            api_version=kind.group_version,
            kind=kind.kind,
            name=kind.plural,
        )

    def _translate(
        self,
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> Any:
        """Translate a Kubernetes API exception without raising it."""
        return self._client.translate_api_exception(
            e,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )

    def _handle_api_error(
        self,
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> NoReturn:
        """Translate a Kubernetes API exception and re-raise.

        Args:
            e: The original exception (typically ApiException).
            resource_type: Type of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Raises:
            KubernetesError: Always raises an appropriate subclass.
        """
        raise self._translate(e, resource_type, resource_name, namespace)
