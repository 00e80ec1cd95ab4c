"""
Shell execution result model
"""

from dataclasses import dataclass
from enum import Enum


class CommandOutcome(Enum):
    """Typed view of how a helper invocation went"""
    OK = "ok"
    SPAWN_FAILED = "spawn-failed"
    NON_ZERO_EXIT = "non-zero-exit"


@dataclass
class ShellResult:
    """Result of one helper invocation"""

    status: int  # -1 when the process could not be run
    stdin: str  # original command line
    stdout: str = ""
    stderr: str = ""

    @classmethod
    def spawn_failed(cls, command: str, error) -> "ShellResult":
        return cls(status=-1, stdin=command, stdout="", stderr=str(error))

    @property
    def ok(self) -> bool:
        return self.status == 0

    @property
    def outcome(self) -> CommandOutcome:
        if self.status == 0:
            return CommandOutcome.OK
        if self.status == -1:
            return CommandOutcome.SPAWN_FAILED
        return CommandOutcome.NON_ZERO_EXIT
