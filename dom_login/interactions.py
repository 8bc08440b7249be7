#!/usr/bin/env python3
"""
Human-like Interaction Primitives

Typing and clicking are broken into the discrete DOM events a real user
produces, with randomized pauses in between. The synthetic events only
imitate the human sequence; the native activation step is what fires the
site's own handlers.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement

from . import scripts
from .exceptions import InteractionError
from .timing import HumanTiming, default_timing

logger = logging.getLogger(__name__)

SUBMIT_CONTROL_SELECTOR = 'button[type="submit"], input[type="submit"]'

POINTER = 'pointer'
KEYBOARD = 'keyboard'
PLAIN = 'plain'


@dataclass(frozen=True)
class InteractionEvent:
    """A synthetic DOM event dispatched against one element"""
    name: str
    family: str = PLAIN
    bubbles: bool = True
    cancelable: bool = False
    key: Optional[str] = None

    @classmethod
    def pointer(cls, name: str, cancelable: bool = False) -> 'InteractionEvent':
        return cls(name, POINTER, True, cancelable)

    @classmethod
    def keyboard(cls, name: str, key: str) -> 'InteractionEvent':
        return cls(name, KEYBOARD, True, False, key)

    @classmethod
    def plain(cls, name: str, cancelable: bool = False) -> 'InteractionEvent':
        return cls(name, PLAIN, True, cancelable)


class HumanInteractor:
    """Types into and clicks page elements with human pacing"""

    def __init__(self, driver, timing: HumanTiming = None,
                 typing_delay: Tuple[int, int] = (50, 150)):
        self.driver = driver
        self.timing = timing or default_timing
        self.typing_delay = typing_delay

    def _run(self, script: str, *args):
        try:
            return self.driver.execute_script(script, *args)
        except WebDriverException as e:
            raise InteractionError(f"Page script failed: {e.msg or e}") from e

    def dispatch(self, element: WebElement, event: InteractionEvent) -> bool:
        """Dispatch one synthetic event, returns False if it was cancelled"""
        result = self._run(scripts.DISPATCH_EVENT, element, event.name, event.family,
                           event.bubbles, event.cancelable, event.key)
        return result is not False

    def type_into(self, element: WebElement, text: str, min_delay: int = None,
                  max_delay: int = None, trigger_events: bool = True):
        """
        Type ``text`` into ``element`` one character at a time

        Args:
            element: Input element to fill
            text: Value to type; the field ends up holding exactly this
            min_delay: Lower bound of the per-keystroke pause (ms)
            max_delay: Upper bound of the per-keystroke pause (ms)
            trigger_events: Dispatch input/keydown per character and
                change/blur at the end
        """
        if min_delay is None:
            min_delay = self.typing_delay[0]
        if max_delay is None:
            max_delay = self.typing_delay[1]

        self._run(scripts.FOCUS, element)
        self.timing.delay(100, 200)

        self._run(scripts.SET_VALUE, element, '')

        for char in text:
            self._run(scripts.APPEND_VALUE, element, char)
            if trigger_events:
                self.dispatch(element, InteractionEvent.plain('input'))
                self.dispatch(element, InteractionEvent.keyboard('keydown', char))
            self.timing.delay(min_delay, max_delay)

        if trigger_events:
            self.dispatch(element, InteractionEvent.plain('change'))
            self.dispatch(element, InteractionEvent.plain('blur'))

        self._run(scripts.BLUR, element)
        self.timing.delay(200, 400)
        logger.debug(f"Typed {len(text)} characters")

    def click(self, element: WebElement):
        """Hover, press, release, then activate the element natively"""
        self.dispatch(element, InteractionEvent.pointer('mouseover'))
        self.timing.delay(100, 300)

        self.dispatch(element, InteractionEvent.pointer('mousedown', cancelable=True))
        self.timing.delay(50, 100)

        self.dispatch(element, InteractionEvent.pointer('mouseup', cancelable=True))

        try:
            element.click()
        except WebDriverException as e:
            raise InteractionError(f"Click failed: {e.msg or e}") from e
        self.timing.delay(200, 500)

    def submit_form(self, form: WebElement):
        """Signal submit, then click the form's submit control or submit natively"""
        self.dispatch(form, InteractionEvent.plain('submit', cancelable=True))

        try:
            buttons = form.find_elements(By.CSS_SELECTOR, SUBMIT_CONTROL_SELECTOR)
        except WebDriverException as e:
            raise InteractionError(f"Could not inspect form: {e.msg or e}") from e

        if buttons:
            self.click(buttons[0])
        else:
            self._run(scripts.NATIVE_SUBMIT, form)
