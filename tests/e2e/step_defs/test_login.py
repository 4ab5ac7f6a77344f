import logging

import pytest
from pytest_bdd import given, scenarios, then, when

from webshop_e2e_kit.utils import get_env

logger = logging.getLogger(__name__)

pytestmark = pytest.mark.e2e

scenarios("../features/login.feature")


@given("I am on the login page")
def open_login_page(login_page):
    logger.info("Navigating to login page")
    login_page.click_login_link()
    login_page.verify_login_page_url()
    login_page.verify_login_page_title()


@when("I enter valid credentials")
def enter_valid_credentials(login_page, scenario_context):
    email = get_env("LOGIN_EMAIL")
    password = get_env("LOGIN_PASSWORD")
    if not email or not password:
        pytest.skip("LOGIN_EMAIL and LOGIN_PASSWORD are not set")
    scenario_context["email"] = email
    logger.info(f"Entering credentials for {email}")
    login_page.enter_email(email)
    login_page.enter_password(password)


@when("I enter an unregistered email and password")
def enter_unknown_credentials(login_page, scenario_context):
    scenario_context["email"] = "unknown.customer@example.com"
    login_page.enter_email(scenario_context["email"])
    login_page.enter_password("Wrong@1234")


@when("I click the login button")
def click_login(login_page):
    logger.info("Clicking login button")
    login_page.click_login_button()


@then("I should see my account email in the header")
def account_email_in_header(login_page, scenario_context):
    login_page.verify_username_displayed(scenario_context["email"])


@then("I should see the logout option")
def logout_visible(login_page):
    login_page.verify_logout_option_visible()


@then("I should see an invalid credentials error")
def invalid_credentials_error(login_page):
    login_page.verify_invalid_credentials_error()
