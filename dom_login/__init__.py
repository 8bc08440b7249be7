#!/usr/bin/env python3
"""
DOM Login Automation
====================

Drives the login forms of a mobile-number portal through a live browser page
the way a person would, instead of calling the site's API directly.

Features:
- Human-paced typing and clicking built from discrete DOM events
- Prioritized selector chains with visible-text fallback for unstable markup
- Password login, OTP request and OTP login flows
- Access-token polling as the login success signal
- Silent bounded telemetry for post-hoc diagnosis

Usage:
    from dom_login import create_login_controller

    controller = create_login_controller(driver)
    result = controller.login_with_password("01700000000", "secret")
    if not result.success:
        print(result.error, controller.telemetry.get_events())
"""

from .config import AutomationConfig, SelectorConfig, TimingConfig
from .exceptions import (
    DomAutomationError, ElementNotFoundError, FlowTimeoutError, InteractionError,
    CredentialError, BrowserSetupError
)
from .flows import LoginFlowController, FlowResult
from .interactions import HumanInteractor, InteractionEvent
from .resolver import ElementResolver
from .telemetry import TelemetryLog, TelemetryEvent, default_telemetry
from .timing import HumanTiming, random_delay
from .token_store import LocalStorageTokenStore

__version__ = "1.0.0"

__all__ = [
    'AutomationConfig',
    'SelectorConfig',
    'TimingConfig',
    'DomAutomationError',
    'ElementNotFoundError',
    'FlowTimeoutError',
    'InteractionError',
    'CredentialError',
    'BrowserSetupError',
    'LoginFlowController',
    'FlowResult',
    'HumanInteractor',
    'InteractionEvent',
    'ElementResolver',
    'TelemetryLog',
    'TelemetryEvent',
    'default_telemetry',
    'HumanTiming',
    'random_delay',
    'LocalStorageTokenStore',
    'create_login_controller'
]


def create_login_controller(driver, config: AutomationConfig = None, **kwargs) -> LoginFlowController:
    """
    Factory function for easy controller setup

    Args:
        driver: Selenium WebDriver already showing the login page
        config: Automation configuration (defaults when omitted)
        **kwargs: Injected collaborators (telemetry, timing, token_store, ...)

    Returns:
        Configured LoginFlowController instance
    """
    return LoginFlowController(driver, config, **kwargs)
