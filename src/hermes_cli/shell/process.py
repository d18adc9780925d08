"""Shell process record and process-tree helpers."""

import asyncio
import codecs
import os
import shutil
import signal
import sys
from dataclasses import dataclass, field
from typing import List, Optional

from ..util.log import Log
from .ansi import strip_ansi

log = Log.create({"service": "shell.process"})

CHUNK_SIZE = 64 * 1024
KILL_CHECK_INTERVAL = 0.05


def preferred_shell() -> str:
    """Get the shell used to interpret command strings."""
    if sys.platform == "win32":
        for shell in ["pwsh", "powershell", "cmd"]:
            path = shutil.which(shell)
            if path:
                return path
        return "cmd.exe"

    # Commands are POSIX sh syntax regardless of the login shell
    if os.path.exists("/bin/sh"):
        return "/bin/sh"
    return shutil.which("sh") or os.environ.get("SHELL", "sh")


def _group_alive(pgid: int) -> bool:
    try:
        os.killpg(pgid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


async def kill_tree(pid: int, grace_s: float = 1.0) -> None:
    """Terminate ``pid`` and every process in its group.

    Sends SIGTERM to the group, waits up to ``grace_s`` for it to go
    away, then SIGKILLs whatever is left. The child must have been
    started in its own session so that its pid is also its group id.
    """
    if sys.platform == "win32":
        proc = await asyncio.create_subprocess_exec(
            "taskkill", "/T", "/F", "/PID", str(pid),
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        await proc.wait()
        return

    try:
        os.killpg(pid, signal.SIGTERM)
    except ProcessLookupError:
        return

    loop = asyncio.get_running_loop()
    deadline = loop.time() + grace_s
    while loop.time() < deadline:
        await asyncio.sleep(KILL_CHECK_INTERVAL)
        if not _group_alive(pid):
            return

    log.warn("process group ignored SIGTERM", {"pid": pid})
    try:
        os.killpg(pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


@dataclass
class ShellProcess:
    """One spawned command: its handle, merged output and completion state.

    ``output`` only grows, in the order chunks are read from either
    stream. ``finished`` flips to True once, after both streams reach
    EOF and the process has exited.
    """

    process: asyncio.subprocess.Process
    command: str
    output: str = ""
    finished: bool = False
    exit_code: Optional[int] = None
    _done: asyncio.Event = field(default_factory=asyncio.Event, repr=False)
    _tasks: List["asyncio.Task[None]"] = field(default_factory=list, repr=False)

    @property
    def pid(self) -> int:
        return self.process.pid

    def append(self, chunk: str) -> None:
        """Strip ANSI sequences from ``chunk`` and add it to the output."""
        if chunk:
            self.output += strip_ansi(chunk)

    def mark_finished(self, exit_code: Optional[int]) -> None:
        if self.finished:
            return
        self.finished = True
        self.exit_code = exit_code
        self._done.set()

    def start(self) -> None:
        """Begin collecting both output streams and watching for exit."""
        pumps = [
            asyncio.create_task(self._pump(stream))
            for stream in (self.process.stdout, self.process.stderr)
            if stream is not None
        ]
        self._tasks = [*pumps, asyncio.create_task(self._watch(pumps))]

    async def _pump(self, stream: asyncio.StreamReader) -> None:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            data = await stream.read(CHUNK_SIZE)
            if not data:
                self.append(decoder.decode(b"", final=True))
                return
            self.append(decoder.decode(data))

    async def _watch(self, pumps: List["asyncio.Task[None]"]) -> None:
        await asyncio.gather(*pumps)
        code = await self.process.wait()
        self.mark_finished(code)

    async def wait_finished(self, timeout_s: float) -> bool:
        """Wait up to ``timeout_s`` seconds for completion."""
        try:
            await asyncio.wait_for(self._done.wait(), timeout=timeout_s)
        except asyncio.TimeoutError:
            return False
        return True

    async def close(self, timeout_s: float = 1.0) -> None:
        """Stop collecting output and reap the process if it has exited."""
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        try:
            await asyncio.wait_for(self.process.wait(), timeout=timeout_s)
        except asyncio.TimeoutError:
            log.warn("process did not exit after kill", {"pid": self.pid})
