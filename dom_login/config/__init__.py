#!/usr/bin/env python3
"""
Automation Configuration Management
"""

from .automation_config import AutomationConfig, SelectorConfig, TimingConfig
from .site_configs import get_predefined_site_configs, load_site_config

__all__ = [
    'AutomationConfig',
    'SelectorConfig',
    'TimingConfig',
    'get_predefined_site_configs',
    'load_site_config'
]
