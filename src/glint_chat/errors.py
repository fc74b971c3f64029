"""
Glint error types.
"""

from typing import Any, Optional


class GlintError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class ConfigurationError(GlintError):
    """No credential for the requested category. User-actionable."""

    def __init__(self, message: str, code: str = "unconfigured", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class TransportUnsupportedError(ConfigurationError):
    """The category has no usable transport from a client-only process. Permanent."""

    def __init__(self, message: str, category: str = "voice"):
        super().__init__(message, code="transport_unsupported", details={"category": category})
        self.category = category


class ProviderError(GlintError):
    def __init__(self, message: str, status_code: Optional[int] = None, provider: Optional[str] = None):
        super().__init__("provider_rejected", message, {"status_code": status_code, "provider": provider})
        self.status_code = status_code
        self.provider = provider


class StorageUnavailableError(GlintError):
    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__("storage_unavailable", message, {"key": key} if key else None)
        self.key = key


class NoActiveChatError(GlintError):
    def __init__(self, message: str = "No active chat. Create or load a chat first."):
        super().__init__("no_active_chat", message)
