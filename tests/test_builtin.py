import os
import subprocess

from Core.builtin import builtin_cd, builtin_exit, builtin_jobs, builtin_status
from Core.state import ExitStatus


class TestCd:

    def test_change_to_argument(self, state, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        sub = tmp_path / "sub"
        sub.mkdir()
        assert builtin_cd(state, [str(sub)]) is True
        assert os.getcwd() == os.path.realpath(sub)

    def test_defaults_to_home(self, state, tmp_path, monkeypatch):
        monkeypatch.chdir("/")
        monkeypatch.setenv("HOME", str(tmp_path))
        builtin_cd(state, [])
        assert os.getcwd() == os.path.realpath(tmp_path)

    def test_failure_is_reported(self, state, tmp_path, monkeypatch, capfd):
        monkeypatch.chdir(tmp_path)
        assert builtin_cd(state, ["missing-dir"]) is True
        assert "cd: missing-dir" in capfd.readouterr().out
        assert os.getcwd() == os.path.realpath(tmp_path)
        assert state.last_exit_status is None


class TestStatus:

    def test_before_any_command(self, state, capfd):
        assert builtin_status(state, []) is True
        assert capfd.readouterr().out == "exit value 0\n"

    def test_exit_value(self, state, capfd):
        state.last_exit_status = ExitStatus.exited(7)
        builtin_status(state, ["ignored"])
        assert capfd.readouterr().out == "exit value 7\n"

    def test_signal(self, state, capfd):
        state.last_exit_status = ExitStatus.signaled(15)
        builtin_status(state, [])
        assert capfd.readouterr().out == "terminated by signal 15\n"


class TestJobs:

    def test_no_children(self, state, capfd):
        builtin_jobs(state, [])
        assert capfd.readouterr().out == "No background jobs.\n"

    def test_lists_children(self, state, capfd):
        proc = subprocess.Popen(["sleep", "30"])
        state.registry.add(proc)
        builtin_jobs(state, [])
        assert capfd.readouterr().out.startswith(f"child {proc.pid} [")
        assert proc.pid in state.registry


def test_exit_kills_children(state):
    proc = subprocess.Popen(["sleep", "30"])
    state.registry.add(proc)
    assert builtin_exit(state, []) is False
    assert len(state.registry) == 0
    assert proc.returncode is not None
