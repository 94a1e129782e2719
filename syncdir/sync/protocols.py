"""Protocols for the reporting surface used by the sync engine."""

from typing import Protocol


class OutputHandlerProtocol(Protocol):
    """Interface the sync engine reports its actions through.

    ``syncdir.output.OutputFormatter`` implements it for the CLI.
    """

    quiet: bool

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def print(self, message: str = "") -> None: ...


class NullOutputHandler:
    """Output handler that discards everything."""

    quiet = True

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def print(self, message: str = "") -> None:
        pass
