"""
Campaign builder registration errors.

All of them are caller-input failures raised synchronously while a plugin
registers its actions; none are retried.
"""
from typing import Any


class CampaignBuilderError(ValueError):
    """Base class for campaign builder registration errors."""


class DuplicateKeyError(CampaignBuilderError):
    """A key is already registered in the target collection."""

    def __init__(self, category: str, key: str):
        self.category = category
        self.key = key
        label = category.replace("_", " ")
        super().__init__(
            f"The key, '{key}' is already used by another {label}. Please use a different key."
        )


class MissingFieldError(CampaignBuilderError):
    """A required descriptor field is absent."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"The key, '{field}' is missing.")


class InvalidCallableError(CampaignBuilderError):
    """A callback field is not a plausible (or resolvable) callable reference."""

    def __init__(self, value: Any, reason: str = ""):
        self.value = value
        message = (
            f"{value!r} is not callable. Please ensure that it exists and that it is a "
            f"fully qualified path."
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PluginRegistrationError(CampaignBuilderError):
    """One or more plugins failed while registering campaign builder components."""

    def __init__(self, failures: int, first_error: Exception):
        self.failures = failures
        self.first_error = first_error
        super().__init__(
            f"{failures} plugin listener(s) failed during campaign build: {first_error}"
        )


__all__ = [
    "CampaignBuilderError",
    "DuplicateKeyError",
    "MissingFieldError",
    "InvalidCallableError",
    "PluginRegistrationError",
]
