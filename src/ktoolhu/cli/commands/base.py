"""Base utilities for CLI commands.

Provides common Typer options, error handling utilities,
and shared functionality for all ktoolhu commands.
"""

from __future__ import annotations

from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ktoolhu.cli.output import OutputFormat
from ktoolhu.integrations.kubernetes.exceptions import (
    DiscoveryError,
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesValidationError,
    RemoteWriteError,
)

# Command output goes to stdout, diagnostics to stderr
console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Common Typer Option Annotations
# =============================================================================

OutputOption = Annotated[
    OutputFormat,
    typer.Option(
        "--output",
        "-o",
        help="Output format: table, json, or yaml",
        case_sensitive=False,
    ),
]

NamespaceOption = Annotated[
    str | None,
    typer.Option(
        "--namespace",
        "-n",
        help="Kubernetes namespace",
    ),
]

AllNamespacesOption = Annotated[
    bool,
    typer.Option(
        "--all-namespaces",
        "-A",
        help="Operate across all namespaces",
    ),
]

AssumeYesOption = Annotated[
    bool,
    typer.Option(
        "--yes",
        "-y",
        help="Skip confirmation prompts",
    ),
]

DeleteOption = Annotated[
    bool,
    typer.Option(
        "--delete",
        help="Remove what was found instead of only reporting it",
    ),
]


# =============================================================================
# Error Handling
# =============================================================================


def handle_k8s_error(error: KubernetesError) -> NoReturn:
    """Print a categorised error to stderr and exit.

    Args:
        error: The Kubernetes error to handle.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    message = escape(str(error.message))

    if isinstance(error, KubernetesConnectionError):
        err_console.print("[red]Error:[/red] Cannot connect to Kubernetes cluster")
        err_console.print(f"  {message}")
        if error.original_error:
            err_console.print(f"  Cause: {escape(str(error.original_error))}")
        err_console.print(
            "\n[dim]Hint: Check that your kubeconfig is valid and the cluster is reachable.[/dim]"
        )

    elif isinstance(error, KubernetesAuthError):
        err_console.print("[red]Error:[/red] Authentication/authorization failed")
        err_console.print(f"  {message}")
        err_console.print("\n[dim]Hint: Check your credentials, token, or RBAC permissions.[/dim]")

    elif isinstance(error, KubernetesNotFoundError):
        err_console.print("[red]Error:[/red] Resource not found")
        err_console.print(f"  {escape(str(error))}")

    elif isinstance(error, KubernetesValidationError):
        err_console.print("[red]Error:[/red] Validation failed")
        err_console.print(f"  {message}")

    elif isinstance(error, KubernetesConflictError):
        err_console.print("[red]Error:[/red] Resource conflict")
        err_console.print(f"  {escape(str(error))}")

    elif isinstance(error, DiscoveryError):
        err_console.print("[red]Error:[/red] Resource discovery failed")
        err_console.print(f"  {message}")
        if error.failed_groups:
            err_console.print(f"  Failed groups: {escape(', '.join(error.failed_groups))}")

    elif isinstance(error, RemoteWriteError):
        err_console.print(f"[red]Error:[/red] Failed to {error.operation} resource")
        err_console.print(f"  {escape(str(error))}")

    else:
        err_console.print(f"[red]Error:[/red] {escape(str(error))}")

    raise typer.Exit(1)


def handle_config_error(error: ValidationError) -> NoReturn:
    """Report invalid option combinations and exit."""
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        prefix = f"{location}: " if location else ""
        err_console.print(f"[red]Error:[/red] {escape(prefix + detail['msg'])}")
    raise typer.Exit(1)


# =============================================================================
# Confirmation Utilities
# =============================================================================


def confirm_delete(resource_type: str, name: str, namespace: str | None = None) -> bool:
    """Prompt user to confirm deletion."""
    msg = f"Are you sure you want to delete {resource_type} '{name}'"
    if namespace:
        msg += f" in namespace '{namespace}'"
    msg += "?"
    return typer.confirm(msg, default=False)


def confirm_action(message: str, default: bool = False) -> bool:
    """Prompt user to confirm an action."""
    return typer.confirm(message, default=default)
