from selenium.webdriver.common.by import By

from .BasePage import BasePage


class RegistrationPage(BasePage):
    REGISTER_LINK = (By.LINK_TEXT, "Register")
    FIRST_NAME_INPUT = (By.ID, "FirstName")
    LAST_NAME_INPUT = (By.ID, "LastName")
    EMAIL_INPUT = (By.ID, "Email")
    PASSWORD_INPUT = (By.ID, "Password")
    CONFIRM_PASSWORD_INPUT = (By.ID, "ConfirmPassword")
    REGISTER_BUTTON = (By.ID, "register-button")
    RESULT_MESSAGE = (By.CSS_SELECTOR, ".result")
    LOGOUT_LINK = (By.LINK_TEXT, "Log out")
    ERROR_SUMMARY = (By.CSS_SELECTOR, ".message-error .validation-summary-errors")

    SUCCESS_TEXT = "Your registration completed"
    DUPLICATE_EMAIL_TEXT = "The specified email already exists"

    GENDER_IDS = {"male": "gender-male", "female": "gender-female"}

    def click_registration_link(self):
        self.click(self.REGISTER_LINK)

    def verify_registration_page_title(self):
        self.verify_title_contains("Register")

    def select_gender(self, gender):
        gender_id = self.GENDER_IDS.get(gender.lower())
        if gender_id is None:
            raise ValueError(f"Unsupported gender option: {gender}")
        self.click((By.ID, gender_id))

    def enter_first_name(self, first_name):
        self.fill(self.FIRST_NAME_INPUT, first_name)

    def enter_last_name(self, last_name):
        self.fill(self.LAST_NAME_INPUT, last_name)

    def enter_email(self, email):
        self.fill(self.EMAIL_INPUT, email)

    def enter_password(self, password):
        self.fill(self.PASSWORD_INPUT, password)

    def enter_confirm_password(self, password):
        self.fill(self.CONFIRM_PASSWORD_INPUT, password)

    def click_register_button(self):
        self.click(self.REGISTER_BUTTON)

    def verify_success_message(self):
        message = self.text_of(self.RESULT_MESSAGE)
        assert message == self.SUCCESS_TEXT, f"Unexpected registration result: {message}"

    def verify_logged_in_with_email(self, email):
        assert self.is_visible((By.LINK_TEXT, email)), f"Account link for {email} is not visible"

    def verify_logout_option_visible(self):
        assert self.is_visible(self.LOGOUT_LINK), "Log out link is not visible"

    def verify_duplicate_email_error(self):
        message = self.text_of(self.ERROR_SUMMARY)
        assert self.DUPLICATE_EMAIL_TEXT in message, f"Unexpected error message: {message}"

    def fill_registration_form(self, first_name, last_name, email, password, gender="Male"):
        self.select_gender(gender)
        self.enter_first_name(first_name)
        self.enter_last_name(last_name)
        self.enter_email(email)
        self.enter_password(password)
        self.enter_confirm_password(password)
