import sys

import pytest

from dns_watch.core.errors import LaunchError
from dns_watch.core.models import NotifyCommand
from dns_watch.notify.command import RecordingNotifier, SubprocessNotifier


def _python(code):
    return NotifyCommand(argv=(sys.executable, "-c", code))


def test_successful_command_returns_zero(tmp_path):
    marker = tmp_path / "ran"
    command = _python(f"open({str(marker)!r}, 'w').write('ok')")

    assert SubprocessNotifier().notify(command) == 0
    assert marker.read_text() == "ok"


def test_non_zero_exit_raises_launch_error():
    with pytest.raises(LaunchError) as excinfo:
        SubprocessNotifier(quiet=True).notify(_python("import sys; sys.exit(3)"))

    assert excinfo.value.exit_status == 3
    assert excinfo.value.cause is None
    assert "status 3" in str(excinfo.value)


def test_missing_program_raises_launch_error(tmp_path):
    command = NotifyCommand(argv=(str(tmp_path / "no-such-program"),))

    with pytest.raises(LaunchError) as excinfo:
        SubprocessNotifier().notify(command)

    assert excinfo.value.exit_status is None
    assert isinstance(excinfo.value.cause, OSError)


def test_quiet_discards_output(capfd):
    SubprocessNotifier(quiet=True).notify(_python("print('noise')"))

    assert "noise" not in capfd.readouterr().out


def test_recording_notifier():
    notifier = RecordingNotifier(exit_status=1)
    command = NotifyCommand(argv=("reload",))

    with pytest.raises(LaunchError):
        notifier.notify(command)

    assert notifier.calls == [command]
