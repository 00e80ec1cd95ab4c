"""
Prime Switch - GPU profile queries and switching via prime-select
"""

import os
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QObject, QFileSystemWatcher, Signal

import config
from backend.helper_resolver import HelperResolver
from backend.shell_runner import AsyncCommand, shell_exec, shell_exec_async
from models.gpu_model import SwitchResult
from models.shell_result import ShellResult
from utils.logger import logger


SwitchCallback = Callable[[SwitchResult], None]


class PrimeSwitch(QObject):
    """
    Controls which GPU (intel or nvidia) prime-select activates

    Helpers are looked up once on construction. Every operation degrades to
    a no-op or to 'unknown' when its helper is missing.
    """

    # Emits the active GPU after the prime index file changed
    gpu_changed = Signal(str)
    # Emits a SwitchResult when a switch finishes
    switched = Signal(object)

    def __init__(self, resolver: Optional[HelperResolver] = None, index: Optional[str] = None, parent=None):
        super().__init__(parent)
        self._commands = resolver if resolver is not None else HelperResolver()
        self._index = index or config.PRIME_INDEX_FILE
        self._gpu: Optional[str] = None
        self._listener: Optional[QFileSystemWatcher] = None
        self._index_signature = None

    def destroy(self):
        """Release the file monitor"""
        self.unmonitor()

    @property
    def index(self) -> str:
        """File with prime status"""
        return self._index

    @property
    def resolver(self) -> HelperResolver:
        return self._commands

    def command(self, role: str) -> Optional[str]:
        """
        Get helper path

        Args:
            role: sudo|select|management|settings

        Returns:
            Executable path, None on fail
        """
        return self._commands.resolve(role)

    @property
    def gpu(self) -> str:
        """
        Active GPU: 'nvidia' when `nvidia-smi -L` exits zero, 'intel'
        otherwise, 'unknown' without nvidia-smi. Cached until
        invalidate_gpu() is called.
        """
        if self._gpu:
            return self._gpu

        cmd = self.command('management')
        if cmd:
            result = shell_exec([cmd, '-L'])
            self._gpu = config.GPU_INTEL if result.status else config.GPU_NVIDIA
        else:
            self._gpu = config.GPU_UNKNOWN

        return self._gpu

    def invalidate_gpu(self):
        """Forget the cached active GPU"""
        self._gpu = None

    @property
    def query(self) -> str:
        """Current `prime-select query` result"""
        cmd = self.command('select')
        if cmd:
            result = shell_exec([cmd, 'query'])
            return result.stdout.strip() or result.stderr.strip() or config.GPU_UNKNOWN

        return config.GPU_UNKNOWN

    def switch(self, gpu: str, callback: Optional[SwitchCallback] = None) -> bool:
        """
        Switch GPU with `prime-select <gpu>` run through pkexec/gksudo

        Nothing happens when a helper is missing or the target is already
        selected.

        Args:
            gpu: prime-select profile (intel, nvidia, on-demand, ...)
            callback: called once with a SwitchResult (optional)

        Returns:
            True if the switch was launched
        """
        sudo = self.command('sudo')
        if not sudo:
            return False

        select = self.command('select')
        if not select:
            return False

        if self.query == gpu:
            return False

        logger.info(f"Switching to {gpu}")

        def on_done(result: ShellResult):
            if result.ok:
                logger.info(f"Switched to {gpu}")
            else:
                logger.warning(f"Not switched to {gpu} ({result.stderr.strip()})")

            switch_result = SwitchResult(
                gpu=gpu,
                result=result.ok,
                outcome=result.outcome,
                stderr=result.stderr.strip()
            )
            self.switched.emit(switch_result)
            if callable(callback):
                callback(switch_result)

        shell_exec_async([sudo, select, gpu], on_done)
        return True

    def settings(self) -> Optional[AsyncCommand]:
        """Start nvidia-settings"""
        cmd = self.command('settings')
        if not cmd:
            return None

        return shell_exec_async([cmd])

    @property
    def monitoring(self) -> bool:
        return self._listener is not None

    def monitor(self):
        """Start watching the prime index file"""
        if self._listener is not None:
            return

        self._listener = QFileSystemWatcher(self)
        self._index_signature = self._signature()

        # prime-select may replace the file, so its directory is watched too
        self._watch_index()
        parent = str(Path(self._index).parent)
        if os.path.isdir(parent):
            self._listener.addPath(parent)

        self._listener.fileChanged.connect(self._handle_index_event)
        self._listener.directoryChanged.connect(self._handle_index_event)
        logger.debug(f"Monitoring {self._index}")

    def unmonitor(self):
        """Stop watching the prime index file"""
        if self._listener is None:
            return

        self._listener.fileChanged.disconnect(self._handle_index_event)
        self._listener.directoryChanged.disconnect(self._handle_index_event)
        paths = self._listener.files() + self._listener.directories()
        if paths:
            self._listener.removePaths(paths)
        self._listener.deleteLater()
        self._listener = None
        logger.debug(f"Stopped monitoring {self._index}")

    def _watch_index(self):
        if self._index not in self._listener.files() and os.path.exists(self._index):
            self._listener.addPath(self._index)

    def _signature(self):
        try:
            stat = os.stat(self._index)
        except OSError:
            return None
        return stat.st_mtime_ns, stat.st_size, stat.st_ino

    def _handle_index_event(self, path):
        # Directory events for unrelated entries leave the signature as is
        signature = self._signature()
        if signature == self._index_signature:
            return
        self._index_signature = signature
        self._watch_index()
        self._handle_listener()

    def _handle_listener(self):
        self.invalidate_gpu()
        self.gpu_changed.emit(self.gpu)
