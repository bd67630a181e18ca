import readline

import pytest

from Core.history import remember, save_history, load_history


@pytest.fixture(autouse=True)
def empty_history():
    readline.clear_history()
    yield
    readline.clear_history()


def entries():
    return [readline.get_history_item(i)
            for i in range(1, readline.get_current_history_length() + 1)]


class TestRemember:

    def test_piped_lines_recorded(self):
        remember("ls -l\n", interactive=False)
        remember("status", interactive=False)
        assert entries() == ["ls -l", "status"]

    def test_skips_blank_comment_and_repeat(self):
        remember("", interactive=False)
        remember("# note", interactive=False)
        remember("echo $$", interactive=False)
        remember("echo $$", interactive=False)
        assert entries() == ["echo $$"]

    def test_terminal_lines_left_to_input(self):
        remember("ls", interactive=True)
        assert entries() == []


def test_save_and_load(tmp_path):
    path = str(tmp_path / "history")
    remember("cd /tmp", interactive=False)
    remember("wc < in.txt > out.txt", interactive=False)
    save_history(path)

    readline.clear_history()
    load_history(path)
    assert entries() == ["cd /tmp", "wc < in.txt > out.txt"]


def test_load_missing_file(tmp_path):
    load_history(str(tmp_path / "nope"))
    assert entries() == []


def test_save_to_unwritable_path(tmp_path, caplog):
    save_history(str(tmp_path / "missing-dir" / "history"))
    assert "could not save history" in caplog.text
