"""Configuration error types."""

from typing import List, Optional


class ConfigurationError(Exception):
    """Configuration source is missing, unreadable or malformed."""


class ValidationError(ConfigurationError):
    """Configuration parsed but a required field is absent or invalid."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        if not self.errors:
            return self.args[0]
        lines = [self.args[0]] + [f"  - {error}" for error in self.errors]
        return "\n".join(lines)
