import sys

from backend.shell_runner import shell_exec, shell_exec_async
from models.shell_result import CommandOutcome, ShellResult


def _python(code):
    return [sys.executable, "-c", code]


class TestShellExec:
    def test_captures_output_and_status(self):
        result = shell_exec(_python("import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"))

        assert result.status == 3
        assert result.stdout == "out\n"
        assert result.stderr == "err\n"
        assert result.outcome is CommandOutcome.NON_ZERO_EXIT

    def test_undecodable_output_keeps_exit_status(self):
        result = shell_exec(_python("import sys; sys.stdout.buffer.write(b'nvidia\\xff\\n'); sys.exit(0)"))

        assert result.status == 0
        assert result.outcome is CommandOutcome.OK
        assert result.stdout == "nvidia\ufffd\n"

    def test_string_command_is_split_on_whitespace(self):
        result = shell_exec("echo  hello world")

        assert result.status == 0
        assert result.stdout == "hello world\n"
        assert result.stdin == "echo  hello world"

    def test_missing_binary_is_captured(self):
        result = shell_exec("/nonexistent/prime-select query")

        assert result.status == -1
        assert result.stdout == ""
        assert result.stderr
        assert result.outcome is CommandOutcome.SPAWN_FAILED

    def test_empty_command(self):
        result = shell_exec("   ")

        assert result.status == -1
        assert "empty" in result.stderr

    def test_timeout_is_reported_as_failure(self):
        result = shell_exec(_python("import time; time.sleep(10)"), timeout=0.3)

        assert result.status == -1
        assert "timed out" in result.stderr


class TestShellExecAsync:
    def test_success_delivered_once(self, wait_for):
        results = []
        handle = shell_exec_async(_python("print('nvidia')"), results.append)

        assert wait_for(lambda: handle.done)
        wait_for(lambda: False, timeout=0.2)

        assert len(results) == 1
        assert results[0].status == 0
        assert results[0].stdout.strip() == "nvidia"
        assert handle.result is results[0]

    def test_non_zero_exit(self, wait_for):
        results = []
        handle = shell_exec_async(
            _python("import sys; sys.stderr.write('denied'); sys.exit(126)"), results.append
        )

        assert wait_for(lambda: handle.done)
        assert results[0].status == 126
        assert results[0].stderr == "denied"
        assert not results[0].ok

    def test_finished_signal_carries_result(self, wait_for):
        emitted = []
        handle = shell_exec_async(_python("pass"))
        handle.finished.connect(emitted.append)

        assert wait_for(lambda: bool(emitted))
        assert isinstance(emitted[0], ShellResult)
        assert emitted[0].status == 0

    def test_spawn_failure_calls_back_immediately(self, qapp):
        results = []
        handle = shell_exec_async("/nonexistent/pkexec prime-select nvidia", results.append)

        assert handle.done
        assert len(results) == 1
        assert results[0].status == -1
        assert results[0].stdin == "/nonexistent/pkexec prime-select nvidia"
        assert "/nonexistent/pkexec" in results[0].stderr

    def test_callback_is_optional(self, wait_for):
        handle = shell_exec_async(_python("pass"))

        assert wait_for(lambda: handle.done)
        assert handle.result.ok


def test_outcomes_cover_only_executed_commands():
    assert {outcome.name for outcome in CommandOutcome} == {"OK", "SPAWN_FAILED", "NON_ZERO_EXIT"}
