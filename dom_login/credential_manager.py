#!/usr/bin/env python3
"""
Credential Management for Login Flows
"""

import os
import getpass
from typing import Dict, NamedTuple
from .exceptions import CredentialError

MOBILE_ENV_VAR = 'DOM_LOGIN_MOBILE'
PASSWORD_ENV_VAR = 'DOM_LOGIN_PASSWORD'


class Credentials(NamedTuple):
    """Login credentials"""
    mobile: str
    password: str

    def validate(self) -> bool:
        """Validate credentials are not empty"""
        return bool(self.mobile and self.password)


class CredentialManager:
    """Credential lookup with multiple sources"""

    def __init__(self):
        self._cached_credentials: Dict[str, Credentials] = {}

    def get_credentials(self, mobile: str = None, password: str = None,
                        require_password: bool = True) -> Credentials:
        """
        Get credentials from multiple sources in priority order:
        1. Direct parameters
        2. Environment variables
        3. Interactive prompt

        Args:
            mobile: Direct mobile number (highest priority)
            password: Direct password (highest priority)
            require_password: False for flows that only need the number

        Returns:
            Credentials object

        Raises:
            CredentialError: If credentials cannot be obtained
        """
        mobile = mobile or os.getenv(MOBILE_ENV_VAR)
        password = password or os.getenv(PASSWORD_ENV_VAR)

        if mobile and (password or not require_password):
            return Credentials(mobile, password or '')

        # Only answers typed at the prompt are remembered
        cache_key = mobile or ''
        if cache_key in self._cached_credentials:
            return self._cached_credentials[cache_key]

        if os.isatty(0):
            try:
                mobile = mobile or input("Mobile number: ")
                if require_password:
                    password = password or getpass.getpass("Password: ")
            except (KeyboardInterrupt, EOFError):
                raise CredentialError("Login cancelled by user")

        if not mobile:
            raise CredentialError(f"No mobile number provided. Set {MOBILE_ENV_VAR} or pass --mobile.")
        if require_password and not password:
            raise CredentialError(f"No password provided. Set {PASSWORD_ENV_VAR} or pass --password.")

        credentials = Credentials(mobile, password or '')
        if credentials.validate():
            self._cached_credentials[cache_key] = credentials
        return credentials

    def clear_cache(self):
        """Clear cached credentials"""
        self._cached_credentials.clear()

    def get_env_var_names(self) -> Dict[str, str]:
        """Get the environment variable names that are consulted"""
        return {
            'mobile': MOBILE_ENV_VAR,
            'password': PASSWORD_ENV_VAR
        }
