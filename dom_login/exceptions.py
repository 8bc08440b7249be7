#!/usr/bin/env python3
"""
DOM Login Exception Classes
"""


class DomAutomationError(Exception):
    """Base exception for page automation errors"""
    pass


class FlowTimeoutError(DomAutomationError):
    """Raised when a wait exceeds its time budget"""
    pass


class ElementNotFoundError(FlowTimeoutError):
    """Raised when an element never appears within the wait budget"""

    def __init__(self, selector: str, message: str = None):
        self.selector = selector
        super().__init__(message or f"Element not found: {selector}")


class InteractionError(DomAutomationError):
    """Raised when dispatching events against an element fails"""
    pass


class CredentialError(DomAutomationError):
    """Raised when credentials are invalid or missing"""
    pass


class BrowserSetupError(DomAutomationError):
    """Raised when a WebDriver cannot be created"""
    pass
