"""CLI command for pods evicted by the kubelet."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import typer
from rich.markup import escape

from ktoolhu.cli.commands.base import (
    AssumeYesOption,
    DeleteOption,
    OutputOption,
    confirm_delete,
    console,
    handle_k8s_error,
)
from ktoolhu.cli.output import OutputFormat, get_formatter
from ktoolhu.core.config import EvictedPodsConfig
from ktoolhu.integrations.kubernetes.exceptions import KubernetesError

if TYPE_CHECKING:
    from ktoolhu.services.kubernetes import EvictionManager

EVICTED_POD_COLUMNS = [
    ("namespace", "Namespace"),
    ("name", "Name"),
    ("node_name", "Node"),
    ("message", "Message"),
]


def register_evicted_commands(
    app: typer.Typer,
    get_manager: Callable[[EvictedPodsConfig], EvictionManager],
) -> None:
    """Register the evicted-pods command."""

    @app.command("evicted-pods")
    def evicted_pods(
        delete: DeleteOption = False,
        assume_yes: AssumeYesOption = False,
        output: OutputOption = OutputFormat.TABLE,
    ) -> None:
        """List pods evicted by the kubelet across all namespaces.

        Examples:
            ktoolhu evicted-pods
            ktoolhu evicted-pods -o json
            ktoolhu evicted-pods --delete --yes
        """
        config = EvictedPodsConfig(delete=delete, assume_yes=assume_yes)
        try:
            manager = get_manager(config)
            pods = manager.list_evicted_pods()
            formatter = get_formatter(output, console)
            formatter.format_list(pods, EVICTED_POD_COLUMNS, title="Evicted pods")

            if not config.delete:
                return
            deleted = 0
            for pod in pods:
                if not config.assume_yes and not confirm_delete("pod", pod.name, pod.namespace):
                    continue
                manager.delete_pod(pod)
                deleted += 1
                console.print(f"Deleted pod {escape(pod.namespace or '')}/{escape(pod.name)}")
        except KubernetesError as e:
            handle_k8s_error(e)

        console.print(f"[green]Deleted {deleted} evicted pod(s)[/green]")
