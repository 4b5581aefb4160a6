"""ktoolhu CLI commands."""

from ktoolhu.cli.commands.evicted import register_evicted_commands
from ktoolhu.cli.commands.perf import register_perf_commands
from ktoolhu.cli.commands.restart import register_restart_commands
from ktoolhu.cli.commands.secret import register_secret_commands
from ktoolhu.cli.commands.terminating import register_terminating_commands

__all__ = [
    "register_evicted_commands",
    "register_perf_commands",
    "register_restart_commands",
    "register_secret_commands",
    "register_terminating_commands",
]
