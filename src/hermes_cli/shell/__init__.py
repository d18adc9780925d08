"""Shell command execution.

Runs a command through the user's shell, merges stdout and stderr into
one ANSI-stripped buffer and kills the whole process group when the
command outlives the configured wait ceiling.

Example:
    from hermes_cli.shell import HermesCLI

    output = await HermesCLI.run_simple_command("slack --version")

    # Start now, wait later
    shell = await HermesCLI.run_command("slack deploy")
    await HermesCLI.check_if_finished(shell)
    print(shell.output, shell.exit_code)
"""

from .ansi import strip_ansi
from .errors import CommandTimeoutError, ShellError, SpawnError
from .process import ShellProcess, kill_tree, preferred_shell
from .runner import HermesCLI

__all__ = [
    "CommandTimeoutError",
    "HermesCLI",
    "ShellError",
    "ShellProcess",
    "SpawnError",
    "kill_tree",
    "preferred_shell",
    "strip_ansi",
]
