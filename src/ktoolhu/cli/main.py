"""Main CLI entry point using Typer."""

from __future__ import annotations

import click
import typer
from rich.console import Console
from rich.markup import escape

from ktoolhu import APP_NAME, __version__
from ktoolhu.cli.commands import (
    register_evicted_commands,
    register_perf_commands,
    register_restart_commands,
    register_secret_commands,
    register_terminating_commands,
)
from ktoolhu.core.config import (
    ConfigMapLoadConfig,
    EvictedPodsConfig,
    RestartConfig,
    TerminatingNamespaceConfig,
)
from ktoolhu.integrations.kubernetes import KubernetesClient, KubernetesConfig
from ktoolhu.logging.config import configure_logging
from ktoolhu.services.kubernetes import (
    ConfigMapLoadManager,
    EvictionManager,
    FinalizerManager,
    RestartManager,
)

app = typer.Typer(
    name=APP_NAME,
    help="Bulk maintenance operations for Kubernetes clusters.",
    add_completion=True,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

_CLIENT_KEY = "ktoolhu.client"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"{APP_NAME} version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
    kubeconfig: str | None = typer.Option(
        None,
        "--kubeconfig",
        help="Path to the kubeconfig file (env: KTOOLHU_KUBECONFIG).",
    ),
    context: str | None = typer.Option(
        None,
        "--context",
        help="Kubeconfig context to use (env: KTOOLHU_CONTEXT).",
    ),
) -> None:
    """ktoolhu - cluster-wide Kubernetes maintenance from the command line."""
    configure_logging(verbose=verbose, debug=debug)
    try:
        ctx.obj = KubernetesConfig.from_env({"kubeconfig": kubeconfig, "context": context})
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] Invalid configuration: {escape(str(e))}")
        raise typer.Exit(1) from e


def get_client() -> KubernetesClient:
    """Return the client for this invocation, connecting on first use."""
    root = click.get_current_context().find_root()
    client: KubernetesClient | None = root.meta.get(_CLIENT_KEY)
    if client is None:
        config = root.obj if isinstance(root.obj, KubernetesConfig) else KubernetesConfig.from_env()
        client = KubernetesClient(config)
        root.meta[_CLIENT_KEY] = client
        root.call_on_close(client.close)
    return client


def get_load_manager(config: ConfigMapLoadConfig) -> ConfigMapLoadManager:
    return ConfigMapLoadManager(get_client(), config)


def get_restart_manager(config: RestartConfig) -> RestartManager:
    return RestartManager(get_client(), config)


def get_finalizer_manager(config: TerminatingNamespaceConfig) -> FinalizerManager:
    return FinalizerManager(get_client(), config)


def get_eviction_manager(config: EvictedPodsConfig) -> EvictionManager:
    return EvictionManager(get_client(), config)


# Register commands
register_perf_commands(app, get_load_manager)
register_restart_commands(app, get_restart_manager)
register_terminating_commands(app, get_finalizer_manager)
register_evicted_commands(app, get_eviction_manager)
register_secret_commands(app)


if __name__ == "__main__":
    app()
