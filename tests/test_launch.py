import sys

import pytest

from nixlens.launch import (
    EXECUTABLE_ENV,
    EXECUTABLE_NAME,
    NULL_DEVICE,
    attrset_eval_executable,
    option_worker_stderr,
    start_attrset_eval,
)


def test_executable_from_environment():
    assert attrset_eval_executable({EXECUTABLE_ENV: "/opt/eval"}) == "/opt/eval"


def test_empty_environment_value_is_used():
    assert attrset_eval_executable({EXECUTABLE_ENV: ""}) == ""


def test_default_executable_without_environment():
    path = attrset_eval_executable({})
    assert path.endswith("/" + EXECUTABLE_NAME)


def test_option_worker_stderr_without_directory():
    assert option_worker_stderr("nixos") == NULL_DEVICE


def test_option_worker_stderr_in_directory():
    assert option_worker_stderr("nixos", "/tmp/logs") == "/tmp/logs/nixos"


def test_started_worker_has_pipes_and_stderr_file(tmp_path):
    log = tmp_path / "worker.log"
    proc = start_attrset_eval(str(log), sys.executable)
    script = b"import sys\nsys.stdout.write('ready')\nsys.stderr.write('oops')\n"
    out, _ = proc.communicate(script, timeout=60)
    assert proc.returncode == 0
    assert out == b"ready"
    assert log.read_text() == "oops"


def test_missing_executable_raises(tmp_path):
    with pytest.raises(OSError):
        start_attrset_eval(str(tmp_path / "log"), str(tmp_path / "missing-eval"))