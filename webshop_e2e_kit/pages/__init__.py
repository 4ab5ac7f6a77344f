from .BasePage import BasePage
from .LoginPage import LoginPage
from .RegistrationPage import RegistrationPage

__all__ = ["BasePage", "LoginPage", "RegistrationPage"]
