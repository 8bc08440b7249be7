#!/usr/bin/env python3
"""
Element Resolution

Locates interactive elements on pages whose markup is unknown or changes
over time. Resolution is a prioritized fallback chain: an ordered list of
CSS selectors first, then a case-insensitive visible-text match.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from selenium.common.exceptions import InvalidSelectorException, StaleElementReferenceException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement

from .exceptions import ElementNotFoundError
from .timing import HumanTiming, default_timing

logger = logging.getLogger(__name__)


class ElementResolver:
    """Finds target elements by selector chain, by text, or by polling"""

    def __init__(self, driver, timing: HumanTiming = None, wait_timeout: int = 10000,
                 wait_poll: Tuple[int, int] = (100, 200)):
        self.driver = driver
        self.timing = timing or default_timing
        self.wait_timeout = wait_timeout
        self.wait_poll = wait_poll

    def _query(self, selector: str) -> List[WebElement]:
        return self.driver.find_elements(By.CSS_SELECTOR, selector)

    def find_by_selectors(self, selectors: Iterable[str]) -> Optional[WebElement]:
        """
        Try each selector in order and return the first match

        Args:
            selectors: Candidate CSS selectors, most reliable first

        Returns:
            First matching WebElement, None if nothing matched
        """
        for selector in selectors:
            try:
                elements = self._query(selector)
            except InvalidSelectorException:
                logger.debug(f"Skipping malformed selector: {selector}")
                continue
            if elements:
                logger.debug(f"Found element with selector: {selector}")
                return elements[0]

        logger.debug(f"No element found with selectors: {selectors}")
        return None

    def find_by_text(self, text: str, scope: str = '*') -> Optional[WebElement]:
        """
        Find the first element under ``scope`` whose trimmed text contains ``text``

        Matching is case-insensitive. Elements are scanned in document order.
        """
        needle = text.lower()
        for element in self._query(scope):
            try:
                content = element.get_attribute('textContent') or ''
            except StaleElementReferenceException:
                logger.debug(f"Skipping detached {scope} element")
                continue
            if needle in content.strip().lower():
                logger.debug(f"Found {scope} element with text '{text}'")
                return element
        return None

    def find_by_any_text(self, texts: Iterable[str], scope: str = '*') -> Optional[WebElement]:
        for text in texts:
            element = self.find_by_text(text, scope)
            if element is not None:
                return element
        return None

    def resolve(self, selectors: Sequence[str], texts: Sequence[str] = (),
                scope: str = 'button') -> Optional[WebElement]:
        """Selector chain first, then the text fallbacks"""
        element = self.find_by_selectors(selectors)
        if element is None and texts:
            element = self.find_by_any_text(texts, scope)
        return element

    def wait_for(self, selector: str, timeout_ms: int = None,
                 poll: Tuple[int, int] = None) -> WebElement:
        """
        Poll until ``selector`` matches or ``timeout_ms`` elapses

        Raises:
            ElementNotFoundError: If nothing matched within the budget
        """
        if timeout_ms is None:
            timeout_ms = self.wait_timeout
        if poll is None:
            poll = self.wait_poll

        start = self.timing.now_ms()
        while self.timing.elapsed_since(start) < timeout_ms:
            try:
                elements = self._query(selector)
            except InvalidSelectorException:
                elements = []
            if elements:
                return elements[0]
            self.timing.delay(*poll)

        raise ElementNotFoundError(selector)
