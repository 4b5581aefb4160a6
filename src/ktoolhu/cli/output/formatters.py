"""Output formatters for CLI commands.

Commands that print result lists accept ``--output`` and hand their pydantic
models to the formatter returned by :func:`get_formatter`.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import StrEnum
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape

from ktoolhu.cli.output.table import Table


class OutputFormat(StrEnum):
    """Supported output formats for CLI commands."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


def _dump(resource: Any) -> Any:
    return resource.model_dump(exclude_none=True) if hasattr(resource, "model_dump") else resource


class Formatter(ABC):
    """Abstract base class for output formatters."""

    def __init__(self, console: Console) -> None:
        self.console = console

    @abstractmethod
    def format_list(
        self,
        resources: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        """Format and display a list of resources."""

    @abstractmethod
    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        """Format and display a dictionary."""


class TableFormatter(Formatter):
    """Rich table output formatter."""

    def format_list(
        self,
        resources: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        """Format resources as a multi-column table."""
        table = Table(title=title, show_header=True)

        for _field_name, header in columns:
            style = "cyan" if header.lower() in ("name", "namespace") else None
            table.add_column(header, style=style)

        for resource in resources:
            data = resource.model_dump() if hasattr(resource, "model_dump") else resource
            table.add_row(*(self._format_cell_value(data.get(field)) for field, _ in columns))

        self.console.print(table)
        self.console.print(f"\n[dim]Total: {len(resources)} resources[/dim]")

    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        """Format dictionary as a two-column table."""
        table = Table(title=title, show_header=True)
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        for key, value in data.items():
            table.add_row(key, self._format_cell_value(value))

        self.console.print(table)

    def _format_cell_value(self, value: Any) -> str:
        if isinstance(value, list):
            if len(value) == 0:
                return "-"
            return escape(", ".join(str(v) for v in value))
        elif isinstance(value, bool):
            return "Yes" if value else "No"
        elif isinstance(value, float):
            return f"{value:.2f}"
        elif value is None or value == "":
            return "-"
        else:
            return escape(str(value))


class JsonFormatter(Formatter):
    """JSON output formatter."""

    def format_list(
        self,
        resources: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        data = [_dump(r) for r in resources]
        output = {"data": data, "total": len(data)}
        self.console.print_json(json.dumps(output, default=str))

    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        self.console.print_json(json.dumps(data, default=str))


class YamlFormatter(Formatter):
    """YAML output formatter."""

    def format_list(
        self,
        resources: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        data = [_dump(r) for r in resources]
        output = {"data": data, "total": len(data)}
        self.console.print(
            yaml.safe_dump(output, default_flow_style=False, sort_keys=False),
            markup=False,
        )

    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        self.console.print(
            yaml.safe_dump(data, default_flow_style=False, sort_keys=False),
            markup=False,
        )


def get_formatter(output_format: OutputFormat, console: Console) -> Formatter:
    """Get the appropriate formatter for the output format.

    Args:
        output_format: Desired output format.
        console: Rich console for output.

    Returns:
        Formatter instance for the specified format.
    """
    formatters: dict[OutputFormat, type[Formatter]] = {
        OutputFormat.TABLE: TableFormatter,
        OutputFormat.JSON: JsonFormatter,
        OutputFormat.YAML: YamlFormatter,
    }
    return formatters[output_format](console)
