"""Kubernetes integration custom exceptions."""

from __future__ import annotations

from typing import Any


class KubernetesError(Exception):
    """Base exception for Kubernetes operations.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from Kubernetes API (if applicable).
        resource_type: Type of resource involved (e.g., "Pod", "Deployment").
        resource_name: Name of the resource involved.
        namespace: Namespace of the resource (if applicable).
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize KubernetesError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from Kubernetes API.
            resource_type: Type of resource involved.
            resource_name: Name of the resource involved.
            namespace: Namespace of the resource.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.namespace = namespace

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.resource_type and self.resource_name:
            loc = f"[{self.resource_type}/{self.resource_name}"
            if self.namespace:
                loc += f" in {self.namespace}"
            loc += "]"
            parts.append(loc)
        elif self.resource_type and self.namespace:
            parts.append(f"[{self.resource_type} in {self.namespace}]")
        return " ".join(parts)


class KubernetesConnectionError(KubernetesError):
    """Exception raised when connection to a Kubernetes cluster fails.

    This includes network errors, kubeconfig issues, and unreachable API servers.
    """

    def __init__(
        self,
        message: str = "Failed to connect to Kubernetes cluster",
        original_error: Exception | None = None,
    ) -> None:
        """Initialize KubernetesConnectionError.

        Args:
            message: Human-readable error message.
            original_error: The original exception that caused this error.
        """
        super().__init__(message=message)
        self.original_error = original_error


class KubernetesAuthError(KubernetesError):
    """Exception raised when authentication or authorization fails (401/403)."""

    def __init__(
        self,
        message: str = "Kubernetes authentication/authorization failed",
        status_code: int | None = 401,
        reason: str | None = None,
    ) -> None:
        super().__init__(message=message, status_code=status_code)
        self.reason = reason


class KubernetesNotFoundError(KubernetesError):
    """Exception raised when a requested Kubernetes resource is not found."""

    def __init__(
        self,
        message: str = "Kubernetes resource not found",
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        if resource_type and resource_name:
            message = f"{resource_type} '{resource_name}' not found"
            if namespace:
                message += f" in namespace '{namespace}'"
        super().__init__(
            message=message,
            status_code=404,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )


class KubernetesValidationError(KubernetesError):
    """Exception raised when Kubernetes API rejects invalid resource specs.

    This is typically a 400/422 response indicating schema validation failure.
    """

    def __init__(
        self,
        message: str = "Invalid resource specification",
        validation_errors: dict[str, Any] | None = None,
        status_code: int | None = 422,
    ) -> None:
        super().__init__(message=message, status_code=status_code)
        self.validation_errors = validation_errors or {}


class KubernetesConflictError(KubernetesError):
    """Exception raised when a resource conflict occurs.

    A 409 means either the resource already exists (on create) or it was
    modified by another client since it was read (stale resourceVersion).
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
        reason: str | None = None,
    ) -> None:
        self.reason = reason
        if resource_type and resource_name:
            if self.already_exists:
                message = f"{resource_type} '{resource_name}' already exists"
            elif reason is None:
                message = f"Conflict on {resource_type} '{resource_name}'"
            else:
                message = f"{resource_type} '{resource_name}' was modified concurrently"
            if namespace:
                message += f" in namespace '{namespace}'"
        super().__init__(
            message=message,
            status_code=409,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )

    @property
    def already_exists(self) -> bool:
        """Whether the conflict is an AlreadyExists rejection."""
        return self.reason == "AlreadyExists"


# =============================================================================
# Discovery and mutation engine errors
# =============================================================================


class DiscoveryError(KubernetesError):
    """Exception raised when namespaced resource kinds cannot be enumerated.

    Raised only when discovery fails as a whole; individual API groups that
    fail are skipped by the resolver.
    """

    def __init__(
        self,
        message: str = "Failed to discover namespaced resources",
        failed_groups: list[str] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message=message)
        self.failed_groups = failed_groups or []
        self.original_error = original_error


class ListError(KubernetesError):
    """Exception describing a failed list call for one kind in one namespace."""

    def __init__(
        self,
        resource_type: str,
        namespace: str,
        original_error: Exception | None = None,
    ) -> None:
        message = f"Failed to list {resource_type} in namespace '{namespace}'"
        if original_error is not None:
            message += f": {original_error}"
        super().__init__(message=message, resource_type=resource_type, namespace=namespace)
        self.original_error = original_error


class PatchGenerationError(KubernetesError):
    """Exception raised when an object does not have the expected controller layout."""

    def __init__(
        self,
        message: str,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )


class RemoteWriteError(KubernetesError):
    """Exception raised when the control plane rejects a create, update or patch.

    Attributes:
        operation: The write verb that failed ("create", "update", "patch", "delete").
        cause: The translated error returned by the API.
    """

    def __init__(
        self,
        operation: str,
        cause: KubernetesError,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        super().__init__(
            message=f"Failed to {operation}: {cause.message}",
            status_code=cause.status_code,
            resource_type=resource_type or cause.resource_type,
            resource_name=resource_name or cause.resource_name,
            namespace=namespace or cause.namespace,
        )
        self.operation = operation
        self.cause = cause
