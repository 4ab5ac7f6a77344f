import logging

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from ..utils.ReportHelper import get_env

logger = logging.getLogger(__name__)


class BasePage:
    """Shared selenium helpers for the demo web shop page objects."""

    def __init__(self, driver, timeout=None):
        self.driver = driver
        self.timeout = timeout if timeout is not None else int(get_env("WAIT_TIME", "15"))
        self.wait = WebDriverWait(driver, self.timeout)

    def open(self, url):
        logger.info(f"Navigating to {url}")
        self.driver.get(url)

    @property
    def title(self):
        return self.driver.title

    @property
    def url(self):
        return self.driver.current_url

    def find(self, locator):
        return self.wait.until(EC.presence_of_element_located(locator))

    def click(self, locator):
        self.wait.until(EC.element_to_be_clickable(locator)).click()

    def fill(self, locator, value):
        element = self.wait.until(EC.visibility_of_element_located(locator))
        element.clear()
        element.send_keys(value)

    def text_of(self, locator):
        return self.wait.until(EC.visibility_of_element_located(locator)).text.strip()

    def is_visible(self, locator):
        try:
            self.wait.until(EC.visibility_of_element_located(locator))
            return True
        except TimeoutException:
            return False

    def title_contains(self, text):
        try:
            return self.wait.until(EC.title_contains(text))
        except TimeoutException:
            return False

    def verify_title_contains(self, text):
        assert self.title_contains(text), f"Expected '{text}' in page title, got '{self.title}'"
