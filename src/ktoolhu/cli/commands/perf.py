"""CLI command for the ConfigMap load generator."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import typer
from pydantic import ValidationError

from ktoolhu.cli.commands.base import (
    NamespaceOption,
    OutputOption,
    console,
    handle_config_error,
    handle_k8s_error,
)
from ktoolhu.cli.output import OutputFormat, get_formatter
from ktoolhu.core.config import ConfigMapLoadConfig
from ktoolhu.integrations.kubernetes.config import DEFAULT_NAMESPACE
from ktoolhu.integrations.kubernetes.exceptions import KubernetesError

if TYPE_CHECKING:
    from ktoolhu.services.kubernetes import ConfigMapLoadManager


def register_perf_commands(
    app: typer.Typer,
    get_manager: Callable[[ConfigMapLoadConfig], ConfigMapLoadManager],
) -> None:
    """Register the perf-configmaps command."""

    @app.command("perf-configmaps")
    def perf_configmaps(
        namespace: NamespaceOption = DEFAULT_NAMESPACE,
        create: int = typer.Option(10, "--create", help="Number of ConfigMaps to create"),
        update: int = typer.Option(1000, "--update", help="Number of updates to issue"),
        parallel: int = typer.Option(
            1, "--parallel", "-p", help="Maximum number of concurrent API calls"
        ),
        size: int = typer.Option(1000, "--size", "-s", help="Padding bytes per ConfigMap"),
        output: OutputOption = OutputFormat.TABLE,
    ) -> None:
        """Load-test the API server by creating and updating ConfigMaps.

        Creates ConfigMaps ktoolhu-0 .. ktoolhu-<create-1>, then replaces
        them round-robin until <update> updates have been sent.

        Examples:
            ktoolhu perf-configmaps
            ktoolhu perf-configmaps -n load --create 100 --update 10000 -p 16
        """
        try:
            config = ConfigMapLoadConfig(
                namespace=namespace or DEFAULT_NAMESPACE,
                create=create,
                update=update,
                parallel=parallel,
                size=size,
            )
        except ValidationError as e:
            handle_config_error(e)

        try:
            manager = get_manager(config)
            summary = manager.run()
        except KubernetesError as e:
            handle_k8s_error(e)

        formatter = get_formatter(output, console)
        formatter.format_dict(summary.model_dump(), title="ConfigMap load")
