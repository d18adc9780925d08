"""Run command-line tool invocations and collect their output."""

import asyncio
import os
import sys
from typing import Dict, Optional

from ..core.config import ConfigManager, HermesLibConfig
from ..util.log import Log
from .ansi import strip_ansi
from .errors import CommandTimeoutError, SpawnError
from .process import ShellProcess, kill_tree, preferred_shell

log = Log.create({"service": "shell.runner"})


class HermesCLI:
    """Helpers for running CLI commands that need no interaction."""

    @staticmethod
    async def run_simple_command(
        command: str,
        *,
        skip_update: bool = True,
        trace: Optional[bool] = None,
        config: Optional[HermesLibConfig] = None,
        cwd: Optional[str] = None,
    ) -> str:
        """Run a command and return its merged, color-stripped output.

        Args:
            command: Shell command line, e.g. ``<cli> --version``
            skip_update: Append the update-suppression flag
            trace: Enable the tool's trace output (defaults to config)
            config: Settings to use instead of ``ConfigManager.get()``
            cwd: Working directory for the command

        Raises:
            SpawnError: If the process could not be started.
            CommandTimeoutError: If the command outlived the wait ceiling.
        """
        config = config or ConfigManager.get()
        shell = await HermesCLI.run_command(
            command, skip_update, trace=trace, config=config, cwd=cwd
        )
        await HermesCLI.check_if_finished(shell, config=config)
        return shell.output

    @staticmethod
    async def run_command(
        command: str,
        skip_update: bool = True,
        *,
        trace: Optional[bool] = None,
        config: Optional[HermesLibConfig] = None,
        cwd: Optional[str] = None,
    ) -> ShellProcess:
        """Start ``command`` in a shell and begin collecting its output.

        The child runs in its own session so the whole tree can be
        killed by process group. Output from stdout and stderr is merged
        into ``ShellProcess.output`` as it arrives.
        """
        if not command or not command.strip():
            raise ValueError("command must not be empty")

        config = config or ConfigManager.get()
        if skip_update:
            command = f"{command} {config.skip_update_flag}"

        env = HermesCLI._child_env(config, trace)
        shell_path = preferred_shell()

        try:
            if sys.platform == "win32":
                process = await asyncio.create_subprocess_shell(
                    command,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    cwd=cwd,
                    env=env,
                )
            else:
                process = await asyncio.create_subprocess_exec(
                    shell_path, "-c", command,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    cwd=cwd,
                    env=env,
                    start_new_session=True,
                )
        except OSError as e:
            log.error("failed to spawn command", {"command": command, "error": e})
            raise SpawnError(command) from e

        log.info("executing command", {"command": command, "shell": shell_path, "pid": process.pid})
        shell = ShellProcess(process=process, command=command)
        shell.start()
        return shell

    @staticmethod
    async def check_if_finished(
        shell: ShellProcess,
        *,
        config: Optional[HermesLibConfig] = None,
    ) -> None:
        """Wait for ``shell`` to finish, killing it after the wait ceiling.

        If the waiting task is cancelled the process group is killed
        before the cancellation propagates.

        Raises:
            CommandTimeoutError: With the output captured before the kill.
        """
        config = config or ConfigManager.get()
        grace_s = config.waiting_timeout_action / 1000
        timer = log.time("command", {"command": shell.command, "pid": shell.pid})

        try:
            finished = await shell.wait_finished(config.waiting_timeout_global / 1000)
        except asyncio.CancelledError:
            timer.stop(status="cancelled")
            await kill_tree(shell.pid, grace_s=grace_s)
            await shell.close()
            raise

        if finished:
            timer.stop(exit_code=shell.exit_code)
            await shell.close()
            return

        # Report at least the ceiling; timers can fire early by clock resolution
        waited_ms = max(timer.elapsed_ms(), config.waiting_timeout_global)
        timer.stop(status="timed_out")
        log.error("command timed out", {"command": shell.command, "pid": shell.pid, "waited": waited_ms})
        await kill_tree(shell.pid, grace_s=grace_s)
        await shell.close()
        raise CommandTimeoutError(shell.command, waited_ms, shell.output)

    @staticmethod
    def remove_ansi_colors(text: str) -> str:
        """Remove all the ANSI color and style encoding."""
        return strip_ansi(text)

    @staticmethod
    async def sleep(timeout: int = 1000) -> None:
        """Sleep for ``timeout`` milliseconds."""
        await asyncio.sleep(timeout / 1000)

    @staticmethod
    def _child_env(config: HermesLibConfig, trace: Optional[bool]) -> Dict[str, str]:
        env = dict(os.environ)
        enabled = config.trace if trace is None else trace
        if enabled:
            env[config.trace_env] = "true"
        return env
