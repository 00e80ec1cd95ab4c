"""
Shell command runner
Synchronous helpers go through subprocess, asynchronous ones through QProcess
so completion is delivered on the Qt event loop thread.
"""

import os
import shutil
import subprocess
from typing import Callable, List, Optional, Sequence, Tuple, Union

from PySide6.QtCore import QObject, QProcess, QTimer, Signal

import config
from models.shell_result import ShellResult
from utils.logger import logger


Command = Union[str, Sequence[str]]
ResultCallback = Callable[[ShellResult], None]

# In-flight async commands, kept referenced until they report back
_running = set()


def _to_argv(command: Command) -> Tuple[List[str], str]:
    """
    Normalize a command to (argv, command line)

    Strings are split on whitespace with no quoting support, so a path with
    a space in it must be passed as a list instead.
    """
    if isinstance(command, str):
        return command.split(), command
    argv = [str(arg) for arg in command]
    return argv, ' '.join(argv)


def shell_exec(command: Command, timeout: Optional[float] = None) -> ShellResult:
    """
    Run a command and wait for it

    Never raises: spawn errors and timeouts come back with status -1 and
    the error text in stderr.
    """
    argv, line = _to_argv(command)
    if not argv:
        return ShellResult.spawn_failed(line, "empty command")

    if timeout is None:
        timeout = config.COMMAND_TIMEOUT

    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout
        )
    except subprocess.TimeoutExpired as e:
        logger.debug(f"'{line}' timed out after {timeout}s")
        return ShellResult.spawn_failed(line, e)
    except (OSError, ValueError) as e:
        logger.debug(f"'{line}' failed to start: {e}")
        return ShellResult.spawn_failed(line, e)

    return ShellResult(
        status=result.returncode,
        stdin=line,
        stdout=result.stdout or "",
        stderr=result.stderr or ""
    )


class AsyncCommand(QObject):
    """A running helper process; reports its ShellResult exactly once"""

    finished = Signal(object)  # ShellResult

    def __init__(self, command: Command, callback: Optional[ResultCallback] = None, parent=None):
        super().__init__(parent)
        self.argv, self.command = _to_argv(command)
        self.result: Optional[ShellResult] = None
        self._callback = callback
        self._process: Optional[QProcess] = None

    @property
    def done(self) -> bool:
        return self.result is not None

    def start(self):
        """Launch the process; spawn failures are reported immediately"""
        if not self.argv:
            self._deliver(ShellResult.spawn_failed(self.command, "empty command"))
            return

        program, args = self.argv[0], self.argv[1:]
        if not (os.path.isfile(program) and os.access(program, os.X_OK)) and not shutil.which(program):
            self._deliver(ShellResult.spawn_failed(
                self.command, f"Failed to execute child process \"{program}\" (No such file or directory)"
            ))
            return

        _running.add(self)
        self._process = QProcess(self)
        self._process.finished.connect(self._on_finished)
        self._process.errorOccurred.connect(self._on_error)
        self._process.start(program, args)

    def _on_error(self, error):
        # Other errors are followed by finished()
        if error == QProcess.ProcessError.FailedToStart:
            self._deliver(ShellResult.spawn_failed(self.command, self._process.errorString()))

    def _on_finished(self, exit_code, exit_status):
        stdout = bytes(self._process.readAllStandardOutput()).decode('utf-8', errors='replace')
        stderr = bytes(self._process.readAllStandardError()).decode('utf-8', errors='replace')

        if exit_status == QProcess.ExitStatus.CrashExit:
            status = -1
            stderr = stderr or self._process.errorString()
        else:
            status = exit_code

        self._deliver(ShellResult(status=status, stdin=self.command, stdout=stdout, stderr=stderr))

    def _deliver(self, result: ShellResult):
        if self.result is not None:
            return
        self.result = result
        if self in _running:
            # Released from the event loop, not from inside a QProcess slot
            QTimer.singleShot(0, lambda: _running.discard(self))

        if callable(self._callback):
            try:
                self._callback(result)
            except Exception as e:
                logger.exception(f"Callback for '{self.command}' failed: {e}")
        self.finished.emit(result)


def shell_exec_async(command: Command, callback: Optional[ResultCallback] = None) -> AsyncCommand:
    """
    Run a command without blocking

    Args:
        command: command line (split on whitespace) or argument list
        callback: called once with the ShellResult, on the event loop thread

    Returns:
        AsyncCommand handle; its `finished` signal carries the same result
    """
    handle = AsyncCommand(command, callback)
    handle.start()
    return handle
