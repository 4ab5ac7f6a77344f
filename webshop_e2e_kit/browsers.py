"""Browser identifiers and their display labels."""

CHROMIUM = "chromium"
FIREFOX = "firefox"
WEBKIT = "webkit"

SUPPORTED_BROWSERS = (CHROMIUM, FIREFOX, WEBKIT)

BROWSER_DISPLAY_NAMES = {
    CHROMIUM: "Chromium",
    FIREFOX: "Firefox",
    WEBKIT: "WebKit",
}

BROWSER_ICONS = {
    CHROMIUM: "\U0001F310",
    FIREFOX: "\U0001F98A",
    WEBKIT: "\U0001F9ED",
}


def display_name(browser: str) -> str:
    """Friendly label for a browser identifier."""
    return BROWSER_DISPLAY_NAMES.get(browser, browser.capitalize())


def browser_icon(browser: str) -> str:
    return BROWSER_ICONS.get(browser, "\U0001F5A5")
