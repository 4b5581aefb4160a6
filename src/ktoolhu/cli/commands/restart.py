"""CLI command for rolling restarts of workload controllers."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import typer
from rich.markup import escape

from ktoolhu.cli.commands.base import (
    AllNamespacesOption,
    NamespaceOption,
    console,
    err_console,
    handle_k8s_error,
)
from ktoolhu.core.config import RestartConfig
from ktoolhu.integrations.kubernetes.exceptions import KubernetesError

if TYPE_CHECKING:
    from ktoolhu.services.kubernetes import RestartManager


def register_restart_commands(
    app: typer.Typer,
    get_manager: Callable[[RestartConfig], RestartManager],
) -> None:
    """Register the restart-all command."""

    @app.command("restart-all")
    def restart_all(
        namespace: NamespaceOption = None,
        all_namespaces: AllNamespacesOption = False,
    ) -> None:
        """Restart every Deployment, DaemonSet and StatefulSet.

        Each workload's pod template is stamped with a restart annotation,
        which makes its controller roll the pods.

        Examples:
            ktoolhu restart-all -n my-app
            ktoolhu restart-all -A
        """
        if bool(namespace) == all_namespaces:
            err_console.print(
                "[red]Error:[/red] Specify exactly one of --namespace or --all-namespaces"
            )
            raise typer.Exit(1)

        config = RestartConfig(namespace=None if all_namespaces else namespace)
        failed = 0
        try:
            manager = get_manager(config)
            for result in manager.restart():
                if result.success:
                    console.print(
                        f"Namespace {escape(result.namespace)}, "
                        f"restarting {result.kind.lower()} {escape(result.name)}"
                    )
                    continue
                failed += 1
                err_console.print(
                    f"[red]Failed to restart {result.kind.lower()} "
                    f"{escape(result.namespace)}/{escape(result.name)}:[/red] "
                    f"{escape(result.error or '')}"
                )
        except KubernetesError as e:
            handle_k8s_error(e)

        if failed:
            err_console.print(f"[red]{failed} workload(s) could not be restarted[/red]")
            raise typer.Exit(1)
