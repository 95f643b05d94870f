"""
Exceptions and warnings raised by the calculation engine.
"""


class ParseError(ValueError):
    """A tire size string matched neither the metric nor the flotation grammar."""

    def __init__(self, text: str, message: str | None = None):
        self.text = text
        super().__init__(message or f"Unrecognized tire size: {text!r}")


class InvalidConfigError(ValueError):
    """Drivetrain or vehicle numbers are non-positive, NaN or infinite."""


class MissingDataWarning(UserWarning):
    """An optional input was partially supplied or unknown; the dependent result is omitted."""
