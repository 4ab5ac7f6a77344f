from selenium.webdriver.common.by import By

from .BasePage import BasePage


class LoginPage(BasePage):
    LOGIN_LINK = (By.LINK_TEXT, "Log in")
    EMAIL_INPUT = (By.ID, "Email")
    PASSWORD_INPUT = (By.ID, "Password")
    LOGIN_BUTTON = (By.CSS_SELECTOR, "input.login-button")
    ACCOUNT_LINK = (By.CSS_SELECTOR, ".header-links .account")
    LOGOUT_LINK = (By.LINK_TEXT, "Log out")
    ERROR_SUMMARY = (By.CSS_SELECTOR, ".message-error .validation-summary-errors")

    INVALID_CREDENTIALS_TEXT = "The credentials provided are incorrect"

    def click_login_link(self):
        self.click(self.LOGIN_LINK)

    def verify_login_page_url(self):
        assert "login" in self.url.lower(), f"Expected login page URL, got {self.url}"

    def verify_login_page_title(self):
        self.verify_title_contains("Login")

    def enter_email(self, email):
        self.fill(self.EMAIL_INPUT, email)

    def enter_password(self, password):
        self.fill(self.PASSWORD_INPUT, password)

    def click_login_button(self):
        self.click(self.LOGIN_BUTTON)

    def login(self, email, password):
        self.enter_email(email)
        self.enter_password(password)
        self.click_login_button()

    def verify_username_displayed(self, email):
        displayed = self.text_of(self.ACCOUNT_LINK)
        assert displayed == email, f"Expected account '{email}', got '{displayed}'"

    def verify_logout_option_visible(self):
        assert self.is_visible(self.LOGOUT_LINK), "Log out link is not visible"

    def verify_invalid_credentials_error(self):
        message = self.text_of(self.ERROR_SUMMARY)
        assert self.INVALID_CREDENTIALS_TEXT in message, f"Unexpected error message: {message}"
