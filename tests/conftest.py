"""
Test configuration and shared fixtures for dom_login tests
"""
import random

import pytest
from selenium.common.exceptions import InvalidSelectorException, WebDriverException

from dom_login import scripts
from dom_login.telemetry import TelemetryLog
from dom_login.timing import HumanTiming
from dom_login.flows import LoginFlowController


class FakeClock:
    """Monotonic clock that only moves when something sleeps"""

    def __init__(self):
        self.now = 0.0

    def monotonic(self):
        return self.now

    def sleep(self, seconds):
        self.now += seconds


class FakeElement:
    """Minimal WebElement stand-in"""

    def __init__(self, page, tag='input', attrs=None, text='', value=''):
        self.page = page
        self.tag = tag
        self.attrs = dict(attrs or {})
        self.text = text
        self.value = value
        self.scoped = {}
        self.on_click = None
        self.clicked = 0
        self.focused = False
        self.submitted = False

    def get_attribute(self, name):
        if name == 'value':
            return self.value
        if name == 'textContent':
            return self.text
        return self.attrs.get(name)

    def click(self):
        self.clicked += 1
        self.page.actions.append((self, 'click'))
        if self.on_click:
            self.on_click()

    def find_elements(self, by, selector):
        return list(self.scoped.get(selector, []))

    def __repr__(self):
        return f"<FakeElement {self.tag} {self.attrs}>"


class FakePage:
    """
    Stands in for a WebDriver showing one page

    Elements are registered against the exact selectors that should match
    them; bare tag names and '*' match by tag in insertion order. The engine's
    page scripts are interpreted against the fake elements.
    """

    def __init__(self, clock):
        self.clock = clock
        self.elements = []
        self.selectors = {}
        self.pending = []
        self.invalid = set()
        self.storage = {}
        self.dispatched = []
        self.actions = []
        self.visited = []
        self.fail_scripts = False
        self.quit_called = False

    def add(self, tag='input', selectors=(), text='', value='', attrs=None):
        element = FakeElement(self, tag, attrs, text, value)
        self.elements.append(element)
        for selector in selectors:
            self.selectors.setdefault(selector, []).append(element)
        return element

    def appear_later(self, selector, element, delay_ms):
        self.pending.append((self.clock.now + delay_ms / 1000.0, selector, element))

    def set_storage_later(self, key, value, delay_ms=0):
        self.storage[key] = (value, self.clock.now + delay_ms / 1000.0)

    def find_elements(self, by, selector):
        if selector in self.invalid:
            raise InvalidSelectorException(f"invalid selector: {selector}")
        for ready_at, pending_selector, element in list(self.pending):
            if pending_selector == selector and ready_at <= self.clock.now:
                return [element]
        if selector in self.selectors:
            return list(self.selectors[selector])
        if selector == '*':
            return list(self.elements)
        return [e for e in self.elements if e.tag == selector]

    def execute_script(self, script, *args):
        if self.fail_scripts:
            raise WebDriverException("element is detached")
        if script == scripts.GET_STORAGE_ITEM:
            entry = self.storage.get(args[0])
            if entry and entry[1] <= self.clock.now:
                return entry[0]
            return None
        if script == scripts.HIDE_WEBDRIVER_FLAG:
            return None

        element = args[0]
        if script == scripts.FOCUS:
            element.focused = True
        elif script == scripts.BLUR:
            element.focused = False
        elif script == scripts.SET_VALUE:
            element.value = args[1]
        elif script == scripts.APPEND_VALUE:
            element.value += args[1]
        elif script == scripts.NATIVE_SUBMIT:
            element.submitted = True
        elif script == scripts.DISPATCH_EVENT:
            name, family, bubbles, cancelable, key = args[1:]
            self.dispatched.append((element, name, family, bubbles, cancelable, key))
            self.actions.append((element, name))
            return True
        else:
            raise AssertionError(f"Unexpected script: {script}")
        return None

    def get(self, url):
        self.visited.append(url)

    def quit(self):
        self.quit_called = True

    def events_for(self, element, name=None):
        return [d for d in self.dispatched if d[0] is element and (name is None or d[1] == name)]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timing(clock):
    """Deterministic timing that advances the fake clock instead of sleeping"""
    return HumanTiming(sleep=clock.sleep, clock=clock.monotonic, rng=random.Random(1234))


@pytest.fixture
def page(clock):
    return FakePage(clock)


@pytest.fixture
def telemetry():
    return TelemetryLog()


@pytest.fixture
def controller(page, timing, telemetry):
    return LoginFlowController(page, telemetry=telemetry, timing=timing)


@pytest.fixture
def login_page(page):
    """Page with a mobile field, a password field and a submit button"""
    page.mobile = page.add('input', ['input[name="mobile_no"]'], attrs={'name': 'mobile_no'})
    page.password = page.add('input', ['input[type="password"]'], attrs={'type': 'password'})
    page.button = page.add('button', ['button[type="submit"]'], text='Login', attrs={'type': 'submit'})
    return page
