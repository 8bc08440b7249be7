#!/usr/bin/env python3
"""
Login Flow Controller

Sequences element resolution and human-like interactions into the three
login flows of a mobile-number portal:

1. Password login: mobile number + password, then wait for the access token
2. OTP request: mobile number, then ask the site to send a one-time code
3. OTP login: one-time code (+ mobile/password when the form cleared them),
   then wait for the access token

The site's own scripts perform the network requests. The only success
signal visible here is the access token the site stores after a login it
accepted. Every public flow returns a FlowResult and never raises.
"""

import logging
from typing import Callable, NamedTuple, Optional, Dict, Any

from .config import AutomationConfig
from .exceptions import DomAutomationError, FlowTimeoutError
from .interactions import HumanInteractor
from .resolver import ElementResolver
from .telemetry import TelemetryLog, default_telemetry
from .timing import HumanTiming, default_timing
from .token_store import LocalStorageTokenStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


class FlowResult(NamedTuple):
    """Uniform outcome of a login flow"""
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, message: str) -> 'FlowResult':
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, error: str) -> 'FlowResult':
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {'success': True, 'message': self.message}
        return {'success': False, 'error': self.error}


class LoginFlowController:
    """Drives the login forms of the current page like a human operator"""

    def __init__(self, driver, config: AutomationConfig = None,
                 telemetry: TelemetryLog = None, timing: HumanTiming = None,
                 resolver: ElementResolver = None, interactor: HumanInteractor = None,
                 token_store=None):
        self.driver = driver
        self.config = config or AutomationConfig()
        self.telemetry = telemetry if telemetry is not None else default_telemetry
        self.timing = timing or default_timing
        self.resolver = resolver or ElementResolver(
            driver, self.timing,
            wait_timeout=self.config.timing.element_timeout,
            wait_poll=self.config.timing.element_poll
        )
        self.interactor = interactor or HumanInteractor(
            driver, self.timing, typing_delay=self.config.timing.typing_delay
        )
        self.token_store = token_store or LocalStorageTokenStore(driver, self.config.token_key)

    @property
    def selectors(self):
        return self.config.selectors

    def _notify(self, on_progress: Optional[ProgressCallback], status: str):
        logger.debug(f"Progress: {status}")
        if on_progress is None:
            return
        try:
            on_progress(status)
        except Exception as e:
            self.telemetry.warning('Progress callback failed', {'status': status, 'error': str(e)})

    def _require(self, element, error: str):
        if element is None:
            raise DomAutomationError(error)
        return element

    def login_with_password(self, mobile: str, password: str,
                            on_progress: Optional[ProgressCallback] = None) -> FlowResult:
        """
        Log in with mobile number and password

        Args:
            mobile: Mobile number to type into the number field
            password: Account password
            on_progress: Optional status callback

        Returns:
            FlowResult with message "Login successful" or the failure reason
        """
        self.telemetry.attempt('Starting DOM-based login')

        try:
            self._notify(on_progress, 'Finding login form...')

            mobile_field = self.resolver.find_by_selectors(self.selectors.mobile_fields)
            if mobile_field is None:
                self.telemetry.failure('Mobile field not found', DomAutomationError('No matching selectors'))
                raise DomAutomationError('Mobile number field not found on page')
            self.telemetry.success('Mobile field found')

            self._notify(on_progress, 'Typing mobile number...')
            self.interactor.type_into(mobile_field, mobile)

            password_field = self._require(
                self.resolver.find_by_selectors(self.selectors.password_fields),
                'Password field not found on page'
            )

            self._notify(on_progress, 'Typing password...')
            self.interactor.type_into(password_field, password)

            login_button = self._require(
                self.resolver.resolve(self.selectors.login_buttons,
                                      self.selectors.login_button_texts,
                                      self.selectors.text_scope),
                'Login button not found on page'
            )

            self._notify(on_progress, 'Clicking login button...')
            self.interactor.click(login_button)

            self._notify(on_progress, 'Login submitted - waiting for response...')
            self.wait_for_token(on_progress)

            self.telemetry.success('DOM-based login completed successfully')
            return FlowResult.ok('Login successful')

        except Exception as e:
            self.telemetry.failure('DOM-based login failed', e)
            return FlowResult.fail(str(e))

    def send_otp(self, mobile: str,
                 on_progress: Optional[ProgressCallback] = None) -> FlowResult:
        """
        Ask the site to send a one-time code to ``mobile``

        Success only means the request was submitted, not that a code arrived.
        """
        self.telemetry.attempt('Starting OTP request')

        try:
            self._notify(on_progress, 'Finding OTP request form...')

            mobile_field = self._require(
                self.resolver.find_by_selectors(self.selectors.mobile_fields),
                'Mobile field not found'
            )
            self.interactor.type_into(mobile_field, mobile)

            send_button = self._require(
                self.resolver.resolve(self.selectors.send_otp_buttons,
                                      self.selectors.send_otp_button_texts,
                                      self.selectors.text_scope),
                'Send OTP button not found'
            )

            self._notify(on_progress, 'Requesting OTP...')
            self.interactor.click(send_button)

            self.telemetry.success('OTP request submitted')
            return FlowResult.ok('OTP request sent')

        except Exception as e:
            self.telemetry.failure('OTP request failed', e)
            return FlowResult.fail(str(e))

    def login_with_otp(self, mobile: str, password: str, otp: str,
                       on_progress: Optional[ProgressCallback] = None) -> FlowResult:
        """
        Complete a login with the one-time code

        Mobile number and password are typed again only when their fields
        are present and empty; many forms keep the values from the first step.
        """
        self.telemetry.attempt('Starting OTP login')

        try:
            self._notify(on_progress, 'Finding OTP form...')

            otp_field = self._require(
                self.resolver.find_by_selectors(self.selectors.otp_fields),
                'OTP field not found on page'
            )

            self._notify(on_progress, 'Typing OTP...')
            self.interactor.type_into(otp_field, otp)

            self._refill_if_empty(self.selectors.refill_mobile_fields, mobile)
            self._refill_if_empty(self.selectors.refill_password_fields, password)

            submit_button = self._require(
                self.resolver.resolve(self.selectors.otp_submit_buttons,
                                      self.selectors.otp_submit_button_texts,
                                      self.selectors.text_scope),
                'OTP submit button not found'
            )

            self._notify(on_progress, 'Submitting OTP...')
            self.interactor.click(submit_button)

            self.wait_for_token(on_progress)

            self.telemetry.success('OTP login completed successfully')
            return FlowResult.ok('OTP login successful')

        except Exception as e:
            self.telemetry.failure('OTP login failed', e)
            return FlowResult.fail(str(e))

    def _refill_if_empty(self, selectors, value: str):
        field = self.resolver.find_by_selectors(selectors)
        if field is not None and not field.get_attribute('value'):
            self.interactor.type_into(field, value)

    def wait_for_token(self, on_progress: Optional[ProgressCallback] = None,
                       timeout_ms: int = None) -> str:
        """
        Poll the token store until the site deposits the access token

        Raises:
            FlowTimeoutError: If no token appeared within ``timeout_ms``
        """
        if timeout_ms is None:
            timeout_ms = self.config.timing.token_timeout

        start = self.timing.now_ms()
        while self.timing.elapsed_since(start) < timeout_ms:
            token = self.token_store.read()
            if token:
                self._notify(on_progress, 'Access token received!')
                return token
            self.timing.delay(*self.config.timing.token_poll)

        raise FlowTimeoutError('Login timeout - no access token received')
