"""Read-only access to the credential token the site stores after login."""

from typing import Optional

from . import scripts

DEFAULT_TOKEN_KEY = 'access_token'


class LocalStorageTokenStore:
    """Reads one key from the page's origin-scoped localStorage"""

    def __init__(self, driver, key: str = DEFAULT_TOKEN_KEY):
        self.driver = driver
        self.key = key

    def read(self) -> Optional[str]:
        value = self.driver.execute_script(scripts.GET_STORAGE_ITEM, self.key)
        return value or None
