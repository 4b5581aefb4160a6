"""CLI command for namespaces stuck in Terminating."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import typer
from rich.markup import escape

from ktoolhu.cli.commands.base import (
    AssumeYesOption,
    DeleteOption,
    confirm_action,
    console,
    handle_k8s_error,
)
from ktoolhu.core.config import TerminatingNamespaceConfig
from ktoolhu.integrations.kubernetes.exceptions import KubernetesError

if TYPE_CHECKING:
    from ktoolhu.integrations.kubernetes.models import (
        BlockingObject,
        NamespaceSnapshot,
        ResourceKind,
    )
    from ktoolhu.services.kubernetes import FinalizerManager


def register_terminating_commands(
    app: typer.Typer,
    get_manager: Callable[[TerminatingNamespaceConfig], FinalizerManager],
) -> None:
    """Register the terminating-ns command."""

    @app.command("terminating-ns")
    def terminating_ns(
        assume_yes: AssumeYesOption = False,
        delete: DeleteOption = False,
    ) -> None:
        """Find objects whose finalizers keep namespaces in Terminating.

        Without --delete the blocking objects are only reported. With
        --delete their finalizers are removed, after a confirmation per
        object unless --yes is given.

        Examples:
            ktoolhu terminating-ns
            ktoolhu terminating-ns --delete
            ktoolhu terminating-ns --delete --yes
        """
        config = TerminatingNamespaceConfig(delete=delete, assume_yes=assume_yes)

        def on_catalog(kinds: list[ResourceKind]) -> None:
            console.print(f"Found {len(kinds)} namespaced resources")

        def on_namespace(namespace: NamespaceSnapshot) -> None:
            console.print(
                f"Namespace [bold]{escape(namespace.name)}[/bold] is terminating "
                f"since {namespace.deletion_timestamp}"
            )

        def on_report(obj: BlockingObject) -> None:
            console.print(
                f"  Namespaced resource {escape(obj.kind)}/{escape(obj.name)} is terminating "
                f"since {obj.deletion_timestamp} and has finalizers "
                f"{escape(', '.join(obj.finalizers))}"
            )

        def confirm(obj: BlockingObject) -> bool:
            return confirm_action(f"Remove finalizers from {obj.kind}/{obj.name}?")

        try:
            manager = get_manager(config)
            scan = manager.scan()
            console.print(
                f"Found {len(scan.terminating)} terminating out of {scan.total} namespaces"
            )
            if not scan.terminating:
                return
            summary = manager.remediate(
                scan,
                on_catalog=on_catalog,
                on_namespace=on_namespace,
                on_report=on_report,
                confirm=confirm,
            )
        except KubernetesError as e:
            handle_k8s_error(e)

        if delete:
            console.print(
                f"[green]Removed finalizers from {len(summary.cleared)} object(s)[/green]"
                + (f", skipped {len(summary.skipped)}" if summary.skipped else "")
            )
