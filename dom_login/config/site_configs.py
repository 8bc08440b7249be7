#!/usr/bin/env python3
"""
Predefined Selector Presets
"""

from typing import Dict, Optional
from .automation_config import SelectorConfig


def get_predefined_site_configs() -> Dict[str, SelectorConfig]:
    """Get predefined selector sets for known login pages"""

    configs = {}

    # Mobile number + password portal with OTP step (default markup)
    configs['ivac'] = SelectorConfig()

    # Single-page forms that label the number field "username" and
    # render the OTP as a numeric one-time-code input
    configs['generic_mobile'] = SelectorConfig(
        mobile_fields=[
            'input[name="mobile_no"]',
            'input[name="mobile"]',
            'input[name="phone"]',
            'input[name="username"]',
            'input[type="tel"]',
            'input[autocomplete="tel"]',
            'input[placeholder*="mobile" i]',
            'input[placeholder*="phone" i]'
        ],
        otp_fields=[
            'input[name="otp"]',
            'input[name="code"]',
            'input[autocomplete="one-time-code"]',
            'input[inputmode="numeric"]',
            'input[placeholder*="otp" i]',
            'input[placeholder*="code" i]'
        ],
        login_buttons=[
            'button[type="submit"]',
            'input[type="submit"]',
            '[role="button"][id*="login" i]',
            '.login-button',
            '#login-button'
        ],
        text_scope='button, [role="button"]'
    )

    return configs


def load_site_config(name: str) -> Optional[SelectorConfig]:
    """Look up a predefined selector set by name"""
    return get_predefined_site_configs().get(name.lower())
