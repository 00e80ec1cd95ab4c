"""Pytest configuration for the `tests/` suite.

Sources live under `src/` as top-level modules (`config`, `backend`, ...),
so `src/` is put on `sys.path`. Qt runs on the offscreen platform and the
log file goes to the temp directory.
"""

from __future__ import annotations

import os
import sys
import tempfile
import time
from pathlib import Path
from unittest.mock import patch

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC = str(_REPO_ROOT / "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("PRIMESWITCH_LOG_FILE", str(Path(tempfile.gettempdir()) / "primeswitch-tests.log"))

from PySide6.QtCore import QCoreApplication, QEventLoop  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from backend.helper_resolver import HelperResolver  # noqa: E402

ALL_HELPERS = {
    "pkexec": "/usr/bin/pkexec",
    "prime-select": "/usr/bin/prime-select",
    "nvidia-smi": "/usr/bin/nvidia-smi",
    "nvidia-settings": "/usr/bin/nvidia-settings",
}


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def wait_for(qapp):
    """Spin the Qt event loop until predicate() is true or timeout runs out"""

    def _wait(predicate, timeout=5.0):
        deadline = time.monotonic() + timeout
        while not predicate() and time.monotonic() < deadline:
            QCoreApplication.processEvents(QEventLoop.ProcessEventsFlag.AllEvents, 50)
        return predicate()

    return _wait


@pytest.fixture
def make_resolver():
    """Build a HelperResolver that only sees the given binaries"""

    def _make(binaries=None):
        binaries = ALL_HELPERS if binaries is None else binaries
        with patch("backend.helper_resolver.shutil.which", side_effect=binaries.get):
            return HelperResolver()

    return _make
