"""Exception hierarchy for fuzzy-select.

The matching and navigation core is total and never raises. Errors only
surface when a host builds an invalid configuration.
"""


class SelectError(Exception):
    """Base exception for all fuzzy-select errors.

    Carries an optional suggestion that is appended to the message so the
    host can show something actionable.
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message} ({self.suggestion})"
        return self.message


class ConfigError(SelectError):
    """Configuration is invalid or missing."""

    pass


class ConfigValidationError(ConfigError):
    """Configuration value failed validation."""

    pass
