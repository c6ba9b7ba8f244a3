"""
Custom exceptions for AdTags.
"""

from typing import Any


class AdTagsError(Exception):
    """Base exception for AdTags."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigError(AdTagsError):
    """Configuration related errors."""

    pass


class InvalidArgumentError(AdTagsError):
    """A registration call received an unusable argument."""

    def __init__(self, message: str, argument: str, details: dict[str, Any] | None = None):
        self.argument = argument
        super().__init__(message, {"argument": argument, **(details or {})})


class MissingArgumentError(InvalidArgumentError):
    """A required string argument was blank or absent."""

    def __init__(self, argument: str):
        super().__init__(f"Argument '{argument}' must not be blank.", argument)


class DuplicateDefinitionError(InvalidArgumentError):
    """A size mapping name was registered twice in one request."""

    def __init__(self, name: str):
        super().__init__(
            f"Size mapping '{name}' already defined.",
            "name",
            {"size_mapping": name},
        )


class UndefinedReferenceError(InvalidArgumentError):
    """An ad unit referenced a size mapping that is not defined yet."""

    def __init__(self, name: str):
        super().__init__(
            f"Size mapping '{name}' not defined. "
            "Sizes must be defined before adding to a unit.",
            "size_mapping",
            {"size_mapping": name},
        )


class EnvironmentMissingError(AdTagsError):
    """No per-request ad tag context is available."""

    pass
