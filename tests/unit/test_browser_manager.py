from pathlib import Path
from unittest.mock import MagicMock

import pytest

from webshop_e2e_kit import browser_manager
from webshop_e2e_kit.browser_manager import AUTOMATION_FLAG, BrowserManager


@pytest.fixture
def fake_webdriver(monkeypatch):
    fake = MagicMock()
    monkeypatch.setattr(browser_manager, "webdriver", fake)
    return fake


def added_arguments(options):
    return [c.args[0] for c in options.add_argument.call_args_list]


def test_chromium_headless_launch(fake_webdriver):
    manager = BrowserManager("chromium", headless=True)

    driver = manager.launch()

    assert driver is fake_webdriver.Chrome.return_value
    args = added_arguments(fake_webdriver.ChromeOptions.return_value)
    assert AUTOMATION_FLAG in args
    assert "--headless=new" in args
    assert f"--user-data-dir={manager.profile_dir}" in args
    manager.close()


def test_firefox_headed_launch(fake_webdriver):
    manager = BrowserManager("Firefox")

    manager.launch()

    fake_webdriver.Firefox.assert_called_once()
    assert "-headless" not in added_arguments(fake_webdriver.FirefoxOptions.return_value)
    manager.close()


def test_webkit_maps_to_safari(fake_webdriver, caplog):
    manager = BrowserManager("webkit", headless=True)
    assert manager.launch() is fake_webdriver.Safari.return_value
    assert "does not support headless" in caplog.text


def test_unknown_browser_falls_back_to_chromium(fake_webdriver):
    manager = BrowserManager("opera")
    assert manager.browser == "chromium"


def test_get_driver_before_launch():
    with pytest.raises(RuntimeError, match="Call launch"):
        BrowserManager("chromium").get_driver()


def test_close_quits_driver_and_removes_profile(fake_webdriver):
    manager = BrowserManager("chromium")
    manager.launch()
    profile_dir = manager.profile_dir

    manager.close()

    fake_webdriver.Chrome.return_value.quit.assert_called_once()
    assert manager.profile_dir is None
    with pytest.raises(RuntimeError):
        manager.get_driver()
    assert not Path(profile_dir).exists()


def test_close_tolerates_quit_errors(fake_webdriver, caplog):
    fake_webdriver.Chrome.return_value.quit.side_effect = RuntimeError("gone")
    manager = BrowserManager("chromium")
    manager.launch()

    manager.close()

    assert "Could not quit chromium driver cleanly" in caplog.text
