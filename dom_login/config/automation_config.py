#!/usr/bin/env python3
"""
Automation Configuration Models
"""

import logging
from dataclasses import dataclass, field, fields, asdict
from typing import Dict, List, Any, Optional, Tuple
import yaml
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class SelectorConfig:
    """Candidate query lists per field type, most reliable selector first"""
    mobile_fields: List[str] = field(default_factory=lambda: [
        'input[name="mobile_no"]',
        'input[name="mobile"]',
        'input[name="phone"]',
        'input[type="tel"]',
        'input[placeholder*="mobile" i]',
        'input[placeholder*="phone" i]'
    ])
    password_fields: List[str] = field(default_factory=lambda: [
        'input[name="password"]',
        'input[type="password"]',
        'input[placeholder*="password" i]'
    ])
    otp_fields: List[str] = field(default_factory=lambda: [
        'input[name="otp"]',
        'input[name="code"]',
        'input[placeholder*="otp" i]',
        'input[placeholder*="code" i]'
    ])
    # Fields re-filled on the OTP step only when the form cleared them
    refill_mobile_fields: List[str] = field(default_factory=lambda: [
        'input[name="mobile_no"]',
        'input[type="tel"]'
    ])
    refill_password_fields: List[str] = field(default_factory=lambda: [
        'input[name="password"]'
    ])
    login_buttons: List[str] = field(default_factory=lambda: [
        'button[type="submit"]',
        'input[type="submit"]',
        '.login-button',
        '#login-button'
    ])
    login_button_texts: List[str] = field(default_factory=lambda: ['login', 'sign in'])
    send_otp_buttons: List[str] = field(default_factory=lambda: [
        'button[type="submit"]',
        '.send-otp',
        '#send-otp',
        '.btn-send'
    ])
    send_otp_button_texts: List[str] = field(default_factory=lambda: ['send', 'otp'])
    otp_submit_buttons: List[str] = field(default_factory=lambda: [
        'button[type="submit"]',
        '.otp-submit',
        '#otp-submit'
    ])
    otp_submit_button_texts: List[str] = field(default_factory=lambda: ['submit', 'verify'])
    text_scope: str = 'button'

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SelectorConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown selector settings: {sorted(unknown)}")
        return cls(**{key: value for key, value in data.items() if key in known})


@dataclass
class TimingConfig:
    """Delay ranges and time budgets, all in milliseconds"""
    typing_delay: Tuple[int, int] = (50, 150)
    token_timeout: int = 15000
    token_poll: Tuple[int, int] = (500, 1000)
    element_timeout: int = 10000
    element_poll: Tuple[int, int] = (100, 200)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TimingConfig':
        timing = cls()
        for key in ('typing_delay', 'token_poll', 'element_poll'):
            if key in data:
                low, high = data[key]
                setattr(timing, key, (int(low), int(high)))
        for key in ('token_timeout', 'element_timeout'):
            if key in data:
                setattr(timing, key, int(data[key]))
        return timing


@dataclass
class AutomationConfig:
    """Main automation configuration"""
    selectors: SelectorConfig = field(default_factory=SelectorConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    token_key: str = 'access_token'
    login_url: Optional[str] = None
    browser: Dict[str, Any] = field(default_factory=dict)
    logging_config: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'AutomationConfig':
        """Create AutomationConfig from dictionary"""
        config = cls()

        preset = config_dict.get('site')
        if preset:
            from .site_configs import load_site_config
            site_selectors = load_site_config(preset)
            if site_selectors is not None:
                config.selectors = site_selectors
            else:
                logger.warning(f"Unknown site preset '{preset}', using default selectors")

        if config_dict.get('selectors'):
            merged = asdict(config.selectors)
            merged.update(config_dict['selectors'])
            config.selectors = SelectorConfig.from_dict(merged)

        config.timing = TimingConfig.from_dict(config_dict.get('timing', {}))
        config.token_key = config_dict.get('token_key', 'access_token')
        config.login_url = config_dict.get('login_url')
        config.browser = dict(config_dict.get('browser', {}))
        config.logging_config = dict(config_dict.get('logging', {}))
        return config

    @classmethod
    def from_yaml_file(cls, file_path: Path) -> 'AutomationConfig':
        """Load configuration from YAML file"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                config_dict = yaml.safe_load(f) or {}
            return cls.from_dict(config_dict.get('automation', {}))
        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            logger.warning(f"Failed to load automation config from {file_path}: {e}")
            return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        timing = asdict(self.timing)
        for key in ('typing_delay', 'token_poll', 'element_poll'):
            timing[key] = list(timing[key])
        return {
            'selectors': asdict(self.selectors),
            'timing': timing,
            'token_key': self.token_key,
            'login_url': self.login_url,
            'browser': dict(self.browser),
            'logging': dict(self.logging_config)
        }
