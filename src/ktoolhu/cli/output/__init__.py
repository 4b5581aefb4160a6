"""Centralized CLI output utilities.

Usage:
    from ktoolhu.cli.output import OutputFormat, Table, get_formatter

    formatter = get_formatter(OutputFormat.TABLE, console)
    formatter.format_list(pods, [("name", "Name"), ("namespace", "Namespace")])
"""

from ktoolhu.cli.output.formatters import (
    Formatter,
    JsonFormatter,
    OutputFormat,
    TableFormatter,
    YamlFormatter,
    get_formatter,
)
from ktoolhu.cli.output.table import Table

__all__ = [
    "Formatter",
    "JsonFormatter",
    "OutputFormat",
    "Table",
    "TableFormatter",
    "YamlFormatter",
    "get_formatter",
]
