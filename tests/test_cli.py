"""Tests for the command-line entry point (direct and interactive modes)."""

import json
from unittest.mock import MagicMock, patch

import pytest

from switcher.cli import main


@pytest.fixture
def popen():
    with patch("switcher.tools.launch_browser.subprocess.Popen") as mock_popen, \
            patch("switcher.tools.launch_browser.psutil.Process"):
        mock_popen.return_value = MagicMock(pid=77)
        yield mock_popen


@pytest.fixture
def seeded_file(data_file):
    data_file.write_text(json.dumps({
        "browsers": [
            {"name": "chrome", "path": "/bin/chrome", "startArguments": ""},
            {"name": "firefox", "path": "/bin/firefox", "startArguments": "--new-tab"},
        ],
        "rules": [
            {"id": 1, "hostname": "*", "browserName": "chrome", "priority": 100},
            {"id": 2, "hostname": "news.com", "browserName": "firefox", "priority": 1},
            {"id": 3, "hostname": "old.com", "browserName": "opera", "priority": 1},
        ],
    }), encoding="utf-8")
    return data_file


def scripted_input(monkeypatch, lines):
    """Answer input() from lines, then raise EOFError like a closed stdin."""
    remaining = list(lines)

    def fake_input(prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)


class TestDirectMode:

    def test_launches_matching_browser(self, seeded_file, popen):
        assert main(["--data-file", str(seeded_file), "http://news.com/story"]) == 0
        popen.assert_called_once_with(["/bin/firefox", "--new-tab", "http://news.com/story"], shell=False)

    def test_no_match_exits_normally(self, data_file, popen, capsys):
        assert main(["--data-file", str(data_file), "https://example.com"]) == 0
        assert "No matching rule found." in capsys.readouterr().out
        popen.assert_not_called()

    def test_dangling_browser_exits_normally(self, seeded_file, popen, capsys):
        assert main(["--data-file", str(seeded_file), "http://old.com"]) == 0
        assert "Browser 'opera' not found." in capsys.readouterr().out
        popen.assert_not_called()

    def test_spawn_failure_exits_normally(self, seeded_file, popen, capsys):
        popen.side_effect = FileNotFoundError()
        assert main(["--data-file", str(seeded_file), "http://a.org"]) == 0
        assert "Failed to launch 'chrome'" in capsys.readouterr().out

    def test_strict_wildcards_flag(self, data_file, popen):
        data_file.write_text(json.dumps({
            "browsers": [{"name": "a", "path": "/bin/a"}, {"name": "b", "path": "/bin/b"}],
            "rules": [
                {"id": 1, "hostname": "*.example.com", "browserName": "a", "priority": 1},
                {"id": 2, "hostname": "*", "browserName": "b", "priority": 2},
            ],
        }), encoding="utf-8")
        main(["--data-file", str(data_file), "--strict-wildcards", "http://evilexample.com"])
        assert popen.call_args[0][0][0] == "/bin/b"

    def test_non_url_argument_rejected(self, data_file):
        with pytest.raises(SystemExit) as exc:
            main(["--data-file", str(data_file), "rule"])
        assert exc.value.code == 2

    def test_malformed_data_file(self, data_file, capsys):
        data_file.write_text("{broken", encoding="utf-8")
        assert main(["--data-file", str(data_file), "http://a.com"]) == 1
        assert "not valid JSON" in capsys.readouterr().err


class TestInteractiveMode:

    def test_banner_and_eof(self, data_file, monkeypatch, capsys):
        scripted_input(monkeypatch, [])
        assert main(["--data-file", str(data_file)]) == 0
        out = capsys.readouterr().out
        assert "Welcome to BrowserSwitcher app!" in out
        assert "Available commands:" in out

    def test_session_persists_changes(self, data_file, monkeypatch, capsys):
        scripted_input(monkeypatch, [
            "browser add",
            "chrome",
            "/bin/chrome",
            "",
            "rule add *.example.com chrome 10",
            "rule add foo.com ghost 5",
            "bogus",
            "exit",
            "rule list",  # never read
        ])
        assert main(["--data-file", str(data_file)]) == 0

        out = capsys.readouterr().out
        assert "Browser added." in out
        assert "Rule added." in out
        assert "Browser 'ghost' not found." in out
        assert "Unknown command." in out

        document = json.loads(data_file.read_text(encoding="utf-8"))
        assert document["browsers"] == [{"name": "chrome", "path": "/bin/chrome", "startArguments": ""}]
        assert document["rules"] == [
            {"id": 1, "hostname": "*.example.com", "browserName": "chrome", "priority": 10}
        ]

    def test_bad_number_does_not_end_session(self, seeded_file, monkeypatch, capsys):
        scripted_input(monkeypatch, ["rule remove one", "rule list"])
        assert main(["--data-file", str(seeded_file)]) == 0
        assert "ID: 3, Hostname: old.com" in capsys.readouterr().out

    def test_eof_inside_prompt_ends_session(self, data_file, monkeypatch):
        scripted_input(monkeypatch, ["browser add", "edge"])
        assert main(["--data-file", str(data_file)]) == 0
        assert not data_file.exists()


class TestConfigFile:

    def test_data_file_from_config(self, tmp_path, popen):
        rules = tmp_path / "from_config.json"
        rules.write_text(json.dumps({
            "browsers": [{"name": "c", "path": "/bin/c"}],
            "rules": [{"id": 1, "hostname": "*", "browserName": "c", "priority": 1}],
        }), encoding="utf-8")
        config = tmp_path / "switcher.yaml"
        config.write_text(f"storage:\n  data_file: '{rules}'\n", encoding="utf-8")

        assert main(["--config", str(config), "http://a.com"]) == 0
        popen.assert_called_once()
