"""Error hierarchy for the bucketload package."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "AutoloadError",
    "ConfigNotFoundError",
    "ConfigError",
    "InvalidInputError",
    "ModuleLoadError",
    "ErrorCodes",
]


class AutoloadError(Exception):
    """Base error for all bucketload errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(AutoloadError):
    """Raised when a configuration or manifest file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(AutoloadError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class InvalidInputError(AutoloadError):
    """Raised for invalid arguments to the public API."""

    def __init__(self, message: str = "Invalid input", **kwargs: Any) -> None:
        super().__init__(code="GENERAL_INVALID_INPUT", message=message, **kwargs)


class ModuleLoadError(AutoloadError, ImportError):
    """Raised when a resolved file fails while its body is executed.

    Also an ``ImportError`` so the import system reports it the usual way.
    """

    def __init__(self, file_path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="MODULE_LOAD_ERROR",
            message=f"Failed to load '{file_path}': {reason}",
            details={"file_path": file_path, "reason": reason},
            **kwargs,
        )

    @property
    def file_path(self) -> str:
        """The file path that failed to load."""
        return self.details["file_path"]

    @property
    def reason(self) -> str:
        return self.details["reason"]


class ErrorCodes:
    """All error codes as constants.

    Example:
        if error.code == ErrorCodes.MODULE_LOAD_ERROR:
            handle_broken_module()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    GENERAL_INVALID_INPUT = "GENERAL_INVALID_INPUT"
    MODULE_LOAD_ERROR = "MODULE_LOAD_ERROR"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
