"""Kubernetes API client wrapper.

Wraps the official kubernetes Python client with kubeconfig/in-cluster
loading, lazy API group initialization, retry logic for transient connection
failures, and consistent error translation.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from urllib3.exceptions import HTTPError

from ktoolhu.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesValidationError,
)

if TYPE_CHECKING:
    from kubernetes.client import (
        ApisApi,
        CoreV1Api,
        CustomObjectsApi,
    )
    from kubernetes.dynamic import DynamicClient

    from ktoolhu.integrations.kubernetes.config import KubernetesConfig

logger = structlog.get_logger()


class KubernetesClient:
    """Kubernetes API client.

    Wraps the official kubernetes Python client with:
    - Kubeconfig loading with in-cluster fallback
    - Lazy API group initialization
    - Automatic retry with tenacity for transient connection errors
    - Consistent error translation to custom exceptions
    - Context manager support

    Example:
        ```python
        from ktoolhu.integrations.kubernetes import KubernetesClient, KubernetesConfig

        with KubernetesClient(KubernetesConfig.from_env()) as client:
            namespaces = client.core_v1.list_namespace()
            print(f"Cluster has {len(namespaces.items)} namespaces")
        ```
    """

    def __init__(self, config: KubernetesConfig) -> None:
        """Initialize Kubernetes client from config.

        Args:
            config: Connection configuration.
        """
        self._config = config
        self._retries = config.retry_attempts
        self._current_context: str | None = None

        # Lazy-loaded API group instances
        self._core_v1: CoreV1Api | None = None
        self._apis: ApisApi | None = None
        self._custom_objects: CustomObjectsApi | None = None
        self._dynamic: DynamicClient | None = None

        self._load_config()

        logger.info(
            "kubernetes_client_initialized",
            context=self._current_context,
            default_namespace=config.namespace,
        )

    def _load_config(self) -> None:
        """Load Kubernetes configuration from kubeconfig or in-cluster."""
        from kubernetes import config
        from kubernetes.config import ConfigException

        try:
            config.load_kube_config(
                config_file=self._config.kubeconfig,
                context=self._config.context,
            )
            self._current_context = self._config.context or "current-context"
            logger.debug(
                "loaded_kubeconfig",
                context=self._config.context,
                kubeconfig=self._config.kubeconfig,
            )
        except ConfigException:
            try:
                config.load_incluster_config()
                self._current_context = "in-cluster"
                logger.debug("loaded_incluster_config")
            except ConfigException as e:
                raise KubernetesConnectionError(
                    message="Cannot load Kubernetes configuration. "
                    "Ensure kubeconfig exists or running inside a cluster.",
                    original_error=e,
                ) from e

        self._invalidate_api_cache()

    def _invalidate_api_cache(self) -> None:
        """Clear cached API group instances."""
        self._core_v1 = None
        self._apis = None
        self._custom_objects = None
        self._dynamic = None

    # =========================================================================
    # Lazy API Group Accessors
    # =========================================================================

    @property
    def core_v1(self) -> CoreV1Api:
        """Get CoreV1Api instance (namespaces, pods, configmaps, core discovery)."""
        if self._core_v1 is None:
            from kubernetes.client import CoreV1Api

            self._core_v1 = CoreV1Api()
        return self._core_v1

    @property
    def apis(self) -> ApisApi:
        """Get ApisApi instance (API group discovery)."""
        if self._apis is None:
            from kubernetes.client import ApisApi

            self._apis = ApisApi()
        return self._apis

    @property
    def custom_objects(self) -> CustomObjectsApi:
        """Get CustomObjectsApi instance (per group/version resource discovery)."""
        if self._custom_objects is None:
            from kubernetes.client import CustomObjectsApi

            self._custom_objects = CustomObjectsApi()
        return self._custom_objects

    @property
    def dynamic(self) -> DynamicClient:
        """Get a DynamicClient for schema-less access to any resource kind."""
        if self._dynamic is None:
            from kubernetes.client import ApiClient
            from kubernetes.dynamic import DynamicClient

            self._dynamic = DynamicClient(ApiClient())
        return self._dynamic

    def get_current_context(self) -> str:
        """Get the current active context name."""
        return self._current_context or "unknown"

    # =========================================================================
    # Error Translation
    # =========================================================================

    @staticmethod
    def translate_api_exception(
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Translate a kubernetes API exception to a custom exception.

        Handles ``ApiException`` from the typed clients, ``DynamicApiError``
        from the dynamic client, and urllib3 transport failures.

        Args:
            e: The original exception.
            resource_type: Type of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Returns:
            An appropriate KubernetesError subclass.
        """
        from kubernetes.client import ApiException
        from kubernetes.dynamic.exceptions import DynamicApiError, ResourceNotFoundError

        if isinstance(e, KubernetesError):
            return e

        if isinstance(e, ResourceNotFoundError):
            return KubernetesNotFoundError(
                message=f"Resource type not served by the cluster: {e}",
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if isinstance(e, (HTTPError, ConnectionError)):
            return KubernetesConnectionError(
                message=f"Kubernetes API unreachable: {e}",
                original_error=e,
            )

        if not isinstance(e, (ApiException, DynamicApiError)):
            return KubernetesError(
                message=str(e),
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        status = getattr(e, "status", None)
        reason = getattr(e, "reason", None)

        if status in (401, 403):
            return KubernetesAuthError(
                message=reason or "Authentication/authorization failed",
                status_code=status,
                reason=reason,
            )

        if status == 404:
            return KubernetesNotFoundError(
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status == 409:
            return KubernetesConflictError(
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
                reason=_status_reason(e),
            )

        if status in (400, 422):
            return KubernetesValidationError(
                message=_status_message(e) or reason or "Validation failed",
                status_code=status,
            )

        return KubernetesError(
            message=reason or f"Kubernetes API error: {status}",
            status_code=status,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )

    # =========================================================================
    # Retry Decorator
    # =========================================================================

    def make_retry_decorator(self) -> Any:
        """Create a retry decorator for transient connection errors.

        Only read-only discovery calls are wrapped; writes are never retried.

        Returns:
            A tenacity retry decorator configured with exponential backoff.
        """
        return retry(
            retry=retry_if_exception_type((HTTPError, ConnectionError)),
            stop=stop_after_attempt(self._retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def default_namespace(self) -> str:
        """Get the default namespace from config."""
        return self._config.namespace

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the client and release resources."""
        self._invalidate_api_cache()
        logger.debug("kubernetes_client_closed")

    def __enter__(self) -> KubernetesClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def _status_body(e: Exception) -> dict[str, Any]:
    """Decode the ``Status`` document returned with an API error."""
    body = getattr(e, "body", None)
    if not body:
        return {}
    try:
        decoded = json.loads(body)
    except (TypeError, ValueError):
        return {}
    return decoded if isinstance(decoded, dict) else {}


def _status_reason(e: Exception) -> str | None:
    """Machine-readable reason (``AlreadyExists``, ``Conflict``, ...) of an API error."""
    return _status_body(e).get("reason")


def _status_message(e: Exception) -> str | None:
    return _status_body(e).get("message")
