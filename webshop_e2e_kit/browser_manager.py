import logging
import shutil
import tempfile

from selenium import webdriver

from .browsers import CHROMIUM, FIREFOX, SUPPORTED_BROWSERS, WEBKIT

logger = logging.getLogger(__name__)

AUTOMATION_FLAG = "--webshop-automation"
PROFILE_PREFIX = "webshop_profile_"


class BrowserManager:
    """
    Launches and closes one selenium driver for a browser identifier.

    chromium maps to Chrome, firefox to Firefox and webkit to Safari.
    """

    def __init__(self, browser=CHROMIUM, headless=False):
        browser = (browser or CHROMIUM).lower()
        if browser not in SUPPORTED_BROWSERS:
            logger.warning(f"Unknown browser '{browser}', falling back to {CHROMIUM}")
            browser = CHROMIUM
        self.browser = browser
        self.headless = headless
        self.profile_dir = None
        self._driver = None

    def launch(self):
        mode = "headless" if self.headless else "headed"
        logger.info(f"Launching {self.browser} browser in {mode} mode...")

        if self.browser == FIREFOX:
            self._driver = self._launch_firefox()
        elif self.browser == WEBKIT:
            self._driver = self._launch_webkit()
        else:
            self._driver = self._launch_chromium()
        return self._driver

    def _launch_chromium(self):
        self.profile_dir = tempfile.mkdtemp(prefix=PROFILE_PREFIX)
        options = webdriver.ChromeOptions()
        options.add_argument(f"--user-data-dir={self.profile_dir}")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument(AUTOMATION_FLAG)
        if self.headless:
            options.add_argument("--headless=new")
        return webdriver.Chrome(options=options)

    def _launch_firefox(self):
        self.profile_dir = tempfile.mkdtemp(prefix=PROFILE_PREFIX)
        options = webdriver.FirefoxOptions()
        options.add_argument("-profile")
        options.add_argument(self.profile_dir)
        if self.headless:
            options.add_argument("-headless")
        return webdriver.Firefox(options=options)

    def _launch_webkit(self):
        if self.headless:
            logger.warning("Safari does not support headless mode, running headed")
        return webdriver.Safari()

    def get_driver(self):
        if self._driver is None:
            raise RuntimeError("Browser not initialized. Call launch() first.")
        return self._driver

    def close(self):
        if self._driver is not None:
            logger.info(f"Closing {self.browser} browser...")
            try:
                self._driver.quit()
            except Exception as e:
                logger.warning(f"Could not quit {self.browser} driver cleanly: {e}")
            self._driver = None
        if self.profile_dir:
            shutil.rmtree(self.profile_dir, ignore_errors=True)
            self.profile_dir = None
