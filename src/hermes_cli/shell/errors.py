"""Errors raised by the command runner."""


class ShellError(Exception):
    """Base class for command runner failures."""

    def __init__(self, command: str, message: str):
        self.command = command
        super().__init__(message)


class SpawnError(ShellError):
    """The OS could not create the child process."""

    def __init__(self, command: str):
        super().__init__(command, f"Failed to run command.\nCommand: {command}")


class CommandTimeoutError(ShellError):
    """The command did not finish within the wait ceiling.

    The process group has already been killed when this is raised;
    ``output`` holds everything captured up to that point.
    """

    def __init__(self, command: str, waited_ms: int, output: str):
        self.waited_ms = waited_ms
        self.output = output
        super().__init__(
            command,
            f"Failed to finish after {waited_ms} ms.\n"
            f"Command: {command}\n"
            f"Current output: \n{output}",
        )
