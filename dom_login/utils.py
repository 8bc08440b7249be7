import os
import logging
import logging.handlers
import yaml
from typing import Dict, Any
from dotenv import load_dotenv

from .config import AutomationConfig


def load_config(config_path: str = 'config.yaml') -> AutomationConfig:
    """Load automation configuration from YAML file with environment variable overrides."""
    # Load environment variables
    load_dotenv()

    config_dict: Dict[str, Any] = {}
    try:
        if os.path.exists(config_path):
            with open(config_path, 'r', encoding='utf-8') as f:
                config_dict = (yaml.safe_load(f) or {}).get('automation', {})
    except (OSError, yaml.YAMLError, AttributeError) as e:
        logging.warning(f"Could not load config from {config_path}: {e}")
        config_dict = {}

    config_dict = apply_env_overrides(config_dict)

    return AutomationConfig.from_dict(config_dict)


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration."""
    env_mappings = {
        'DOM_LOGIN_URL': (None, 'login_url', str),
        'DOM_LOGIN_TOKEN_KEY': (None, 'token_key', str),
        'DOM_LOGIN_TOKEN_TIMEOUT': ('timing', 'token_timeout', int),
        'DOM_LOGIN_ELEMENT_TIMEOUT': ('timing', 'element_timeout', int),
        'DOM_LOGIN_HEADLESS': ('browser', 'headless', lambda x: x.lower() == 'true'),
        'LOG_LEVEL': ('logging', 'level', str),
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            try:
                converted_value = converter(value)
            except (ValueError, TypeError) as e:
                logging.warning(f"Invalid value for {env_var}: {value} - {e}")
                continue
            if section is None:
                config[key] = converted_value
            else:
                config.setdefault(section, {})[key] = converted_value

    return config


def setup_logging(logging_config: Dict[str, Any]) -> logging.Logger:
    """Setup logging configuration."""
    logger = logging.getLogger()
    level = getattr(logging, str(logging_config.get('level', 'WARNING')).upper(), logging.WARNING)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logging_config.get('log_to_file', False):
        logs_dir = logging_config.get('logs_dir', 'logs')
        os.makedirs(logs_dir, exist_ok=True)
        log_filename = os.path.join(logs_dir, logging_config.get('log_filename', 'dom_login.log'))

        file_handler = logging.handlers.RotatingFileHandler(
            log_filename,
            maxBytes=5*1024*1024,  # 5MB
            backupCount=3,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def mask_mobile(mobile: str) -> str:
    """Hide all but the last three digits of a mobile number."""
    if len(mobile) <= 3:
        return '*' * len(mobile)
    return '*' * (len(mobile) - 3) + mobile[-3:]
