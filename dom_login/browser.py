#!/usr/bin/env python3
"""
Browser Host

Creates the Chrome WebDriver that hosts the login page for command-line use.
Library callers that already own a driver pass it to the controller directly.
"""

import logging
from typing import Optional, Dict, Any

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from webdriver_manager.chrome import ChromeDriverManager

from . import scripts
from .exceptions import BrowserSetupError

logger = logging.getLogger(__name__)

DEFAULT_BROWSER_OPTIONS = {
    'headless': True,
    'timeout': 30,
    'window_size': (1366, 768),
    'user_agent': None,
    'chrome_binary_path': None,
}


def build_chrome_options(options: Dict[str, Any]) -> ChromeOptions:
    """Translate browser settings into ChromeOptions"""
    chrome_options = ChromeOptions()

    if options.get('chrome_binary_path'):
        chrome_options.binary_location = options['chrome_binary_path']

    if options.get('headless'):
        chrome_options.add_argument('--headless=new')

    chrome_options.add_argument('--no-sandbox')
    chrome_options.add_argument('--disable-dev-shm-usage')
    chrome_options.add_argument('--disable-blink-features=AutomationControlled')
    chrome_options.add_experimental_option("excludeSwitches", ["enable-automation"])
    chrome_options.add_experimental_option('useAutomationExtension', False)

    width, height = options['window_size']
    chrome_options.add_argument(f'--window-size={width},{height}')

    if options.get('user_agent'):
        chrome_options.add_argument(f'--user-agent={options["user_agent"]}')

    return chrome_options


def create_driver(browser_config: Optional[Dict[str, Any]] = None) -> webdriver.Chrome:
    """
    Create a Chrome WebDriver using webdriver-manager

    Args:
        browser_config: Overrides for DEFAULT_BROWSER_OPTIONS

    Returns:
        Configured Chrome WebDriver

    Raises:
        BrowserSetupError: If the driver cannot be installed or started
    """
    options = dict(DEFAULT_BROWSER_OPTIONS)
    options.update(browser_config or {})

    driver = None
    try:
        chromedriver_path = ChromeDriverManager().install()
        driver = webdriver.Chrome(service=ChromeService(chromedriver_path),
                                  options=build_chrome_options(options))
        driver.set_page_load_timeout(options['timeout'])
        driver.execute_script(scripts.HIDE_WEBDRIVER_FLAG)
    except (WebDriverException, ValueError, OSError) as e:
        logger.error(f"ChromeDriver creation failed: {e}")
        if driver is not None:
            _quit_quietly(driver)
        raise BrowserSetupError(f"Could not start Chrome: {e}") from e

    logger.info(f"Created Chrome WebDriver (headless={options['headless']})")
    return driver


def _quit_quietly(driver):
    try:
        driver.quit()
    except WebDriverException as e:
        logger.warning(f"Error during WebDriver cleanup: {e}")


class BrowserSession:
    """Context manager owning a WebDriver for the duration of a flow"""

    def __init__(self, browser_config: Optional[Dict[str, Any]] = None, driver_factory=create_driver):
        self.browser_config = browser_config or {}
        self.driver_factory = driver_factory
        self.driver = None

    def __enter__(self):
        self.driver = self.driver_factory(self.browser_config)
        return self.driver

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.driver:
            try:
                self.driver.quit()
                logger.info("WebDriver cleaned up")
            except WebDriverException as e:
                logger.warning(f"Error during WebDriver cleanup: {e}")
            finally:
                self.driver = None
        return False
