#!/usr/bin/env python3
"""
Library utility to kill stale browser and driver processes created by
webshop_e2e_kit automation (identified by a CLI flag or profile prefix).
"""
from __future__ import annotations

import sys
from typing import Iterable

import psutil

from ..browser_manager import AUTOMATION_FLAG, PROFILE_PREFIX

# browser process name -> driver process name
BROWSER_DRIVERS = {
    "chrome": "chromedriver",
    "firefox": "geckodriver",
    "safari": "safaridriver",
}


def _print_header() -> None:
    print("\n=========================================")
    print("  Stale Browser Process Killer")
    print("=========================================\n")


def _normalize_name(name: str) -> str:
    n = name.lower()
    if n.endswith(".exe"):
        n = n[:-4]
    return n


def is_automation_process(cmdline) -> bool:
    cmdline_text = " ".join(cmdline) if isinstance(cmdline, list) else str(cmdline or "")
    return AUTOMATION_FLAG in cmdline_text or PROFILE_PREFIX in cmdline_text


def find_stale_processes() -> dict[str, tuple[list[int], set[int]]]:
    """
    Map browser name -> (browser pids, driver pids) for automation processes.

    Drivers are found by walking up to five parents of each browser process.
    """
    found: dict[str, tuple[list[int], set[int]]] = {
        name: ([], set()) for name in BROWSER_DRIVERS
    }

    for p in psutil.process_iter(attrs=["pid", "name", "cmdline", "ppid"]):
        try:
            n = _normalize_name(p.info.get("name") or "")
            if n not in BROWSER_DRIVERS:
                continue
            if not is_automation_process(p.info.get("cmdline") or []):
                continue
            browser_pids, driver_pids = found[n]
            browser_pids.append(int(p.info["pid"]))
            try:
                parent = psutil.Process(int(p.info.get("ppid") or 0))
                for _ in range(5):
                    if _normalize_name(parent.name()) == BROWSER_DRIVERS[n]:
                        driver_pids.add(parent.pid)
                        break
                    parent = parent.parent()  # type: ignore[assignment]
                    if parent is None:
                        break
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                pass
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            continue
    return found


def terminate_group(pids: Iterable[int]) -> int:
    """Terminate then kill remaining processes; returns how many went away."""
    count = 0
    processes = []
    for pid in pids:
        try:
            processes.append(psutil.Process(pid))
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass
    for proc in processes:
        try:
            proc.terminate()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass
    gone, alive = psutil.wait_procs(processes, timeout=2)
    count += len(gone)
    for proc in alive:
        try:
            proc.kill()
            count += 1
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass
    return count


def kill_browser_instance() -> int:
    _print_header()

    killed: dict[str, int] = {}
    for browser, (browser_pids, driver_pids) in find_stale_processes().items():
        driver = BROWSER_DRIVERS[browser]
        print(f"Searching for automation {browser} processes...", flush=True)
        killed[browser] = terminate_group(browser_pids) if browser_pids else 0
        killed[driver] = terminate_group(sorted(driver_pids)) if driver_pids else 0

    total = sum(killed.values())

    print("\n=========================================")
    if total > 0:
        print(f"OK: Successfully terminated {total} process(es)")
        for name, count in killed.items():
            if count:
                print(f"   - {name}: {count}")
    else:
        print("OK: No stale browser processes found")
    print("=========================================\n")

    return 0


def main() -> int:
    try:
        return kill_browser_instance()
    except KeyboardInterrupt:
        print("\nAborted by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
