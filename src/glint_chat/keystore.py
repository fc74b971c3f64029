"""
KeyStore: per-category provider credentials and the language preference.
"""

import logging
from typing import Optional, Union

from glint_chat.errors import StorageUnavailableError
from glint_chat.models.chat import Category, Language
from glint_chat.storage import KeyValueStore

logger = logging.getLogger("glint_chat.keystore")

LANGUAGE_KEY = "selectedLanguage"
DEFAULT_LANGUAGE = Language.ROMAN_URDU


def credential_key(category: Category) -> str:
    return f"glint_{category.value}_api"


class KeyStore:
    def __init__(self, store: KeyValueStore):
        self._store = store

    def _read(self, key: str) -> Optional[str]:
        try:
            return self._store.get(key)
        except StorageUnavailableError as e:
            logger.error(f"Reading {key} failed: {e}")
            return None

    def get_credential(self, category: Union[Category, str]) -> Optional[str]:
        return self._read(credential_key(Category(category))) or None

    def get_credential_status(self, category: Union[Category, str]) -> bool:
        """True when a credential is configured for ``category``."""
        return self.get_credential(category) is not None

    def set_credential(self, category: Union[Category, str], value: Optional[str]) -> bool:
        """Store a credential, or clear it when ``value`` is empty. Returns the new status."""
        key = credential_key(Category(category))
        value = (value or "").strip()
        try:
            if value:
                self._store.set(key, value)
            else:
                self._store.remove(key)
        except StorageUnavailableError as e:
            logger.error(f"Saving {key} failed: {e}")
        return self.get_credential_status(category)

    def credentials(self) -> dict[Category, str]:
        """Snapshot of every configured credential. Unconfigured categories are absent."""
        result: dict[Category, str] = {}
        for category in Category:
            secret = self.get_credential(category)
            if secret:
                result[category] = secret
        return result

    @property
    def language(self) -> Language:
        raw = self._read(LANGUAGE_KEY)
        try:
            return Language(raw) if raw else DEFAULT_LANGUAGE
        except ValueError:
            logger.warning(f"Unknown language preference {raw!r}, using {DEFAULT_LANGUAGE.value}")
            return DEFAULT_LANGUAGE

    def set_language(self, language: Union[Language, str]) -> Language:
        lang = Language(language)
        try:
            self._store.set(LANGUAGE_KEY, lang.value)
        except StorageUnavailableError as e:
            logger.error(f"Saving language failed: {e}")
        return lang
