from unittest.mock import MagicMock

import pytest

import backend.prime_switch as prime_switch_module
from backend.prime_switch import PrimeSwitch
from models.gpu_model import SwitchResult
from models.shell_result import ShellResult
from ui.tray_indicator import TrayIndicator


def _runner(query="intel", gpu_status=1):
    def fake(argv, timeout=None):
        if argv[-1] == "query":
            return ShellResult(status=0, stdin=" ".join(argv), stdout=f"{query}\n")
        return ShellResult(status=gpu_status, stdin=" ".join(argv))
    return fake


@pytest.fixture
def launched(monkeypatch):
    calls = []
    monkeypatch.setattr(prime_switch_module, "shell_exec", _runner())
    monkeypatch.setattr(
        prime_switch_module, "shell_exec_async",
        lambda command, callback=None: calls.append((command, callback)) or MagicMock(done=False)
    )
    return calls


def test_menu_reflects_state(qapp, make_resolver, launched):
    indicator = TrayIndicator(PrimeSwitch(make_resolver()))

    assert indicator.header_action.text() == "Active GPU: Intel (integrated)"
    assert indicator.target_actions["intel"].isChecked()
    assert not indicator.target_actions["nvidia"].isChecked()
    assert indicator.settings_action.isEnabled()


def test_actions_disabled_without_helpers(qapp, make_resolver, launched):
    indicator = TrayIndicator(PrimeSwitch(make_resolver({"nvidia-smi": "/usr/bin/nvidia-smi"})))

    assert not any(action.isEnabled() for action in indicator.target_actions.values())
    assert not indicator.settings_action.isEnabled()


def test_switch_from_menu(qapp, make_resolver, launched):
    indicator = TrayIndicator(PrimeSwitch(make_resolver()))

    indicator.target_actions["nvidia"].trigger()

    assert launched[0][0] == ["/usr/bin/pkexec", "/usr/bin/prime-select", "nvidia"]
    assert indicator.busy
    assert not indicator.target_actions["intel"].isEnabled()

    _, done = launched[0]
    done(ShellResult(status=0, stdin=""))

    assert not indicator.busy
    assert indicator.target_actions["intel"].isEnabled()


def test_gpu_change_updates_header(qapp, make_resolver, launched):
    switch = PrimeSwitch(make_resolver())
    indicator = TrayIndicator(switch)

    switch.gpu_changed.emit("nvidia")

    assert indicator.header_action.text() == "Active GPU: NVIDIA (discrete)"


def test_failed_switch_status_text():
    result = SwitchResult(gpu="nvidia", result=False, stderr="Request dismissed")

    assert result.status_text == "Could not switch to NVIDIA (discrete): Request dismissed"
