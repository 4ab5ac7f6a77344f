import importlib
from unittest.mock import MagicMock

from webshop_e2e_kit.browser_manager import AUTOMATION_FLAG, PROFILE_PREFIX
from webshop_e2e_kit.utils.kill_stale_browsers import (
    find_stale_processes,
    is_automation_process,
    kill_browser_instance,
)

# utils re-exports kill_browser_instance under the module name
kill_stale_browsers = importlib.import_module("webshop_e2e_kit.utils.kill_stale_browsers")


def test_is_automation_process():
    assert is_automation_process(["chrome", AUTOMATION_FLAG])
    assert is_automation_process(f"firefox -profile /tmp/{PROFILE_PREFIX}abc")
    assert not is_automation_process(["chrome", "--user-data-dir=/home/me/.config"])
    assert not is_automation_process(None)


def make_process(pid, name, cmdline, ppid=0):
    process = MagicMock()
    process.info = {"pid": pid, "name": name, "cmdline": cmdline, "ppid": ppid}
    return process


def test_find_stale_processes(monkeypatch):
    processes = [
        make_process(10, "chrome.exe", ["chrome", AUTOMATION_FLAG], ppid=5),
        make_process(11, "chrome", ["chrome"]),
        make_process(12, "notepad", [AUTOMATION_FLAG]),
    ]
    driver_process = MagicMock(pid=5)
    driver_process.name.return_value = "chromedriver"

    monkeypatch.setattr(kill_stale_browsers.psutil, "process_iter", lambda attrs: processes)
    monkeypatch.setattr(kill_stale_browsers.psutil, "Process", lambda pid: driver_process)

    found = find_stale_processes()

    assert found["chrome"] == ([10], {5})
    assert found["firefox"] == ([], set())


def test_kill_browser_instance_reports_nothing_found(monkeypatch, capsys):
    monkeypatch.setattr(kill_stale_browsers, "find_stale_processes", lambda: {"chrome": ([], set())})

    assert kill_browser_instance() == 0
    assert "No stale browser processes found" in capsys.readouterr().out


def test_kill_browser_instance_terminates(monkeypatch, capsys):
    monkeypatch.setattr(kill_stale_browsers, "find_stale_processes", lambda: {"firefox": ([20, 21], {19})})
    monkeypatch.setattr(kill_stale_browsers, "terminate_group", lambda pids: len(list(pids)))

    assert kill_browser_instance() == 0
    out = capsys.readouterr().out
    assert "terminated 3 process(es)" in out
    assert "geckodriver: 1" in out
