"""Errors raised by the generator.

Every failure aborts the run; nothing here is retried.
"""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for all generator failures."""


class ConfigError(GeneratorError):
    """A required setting is missing or has an unsupported value."""


class FetchError(GeneratorError):
    """The API document could not be downloaded or parsed as JSON."""


class DocumentError(GeneratorError):
    """The API document does not have the shape the generator relies on."""


class CompileError(GeneratorError):
    """The TypeScript compiler failed to lower or declare a file."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output

    def __str__(self) -> str:
        if self.output:
            return f"{self.args[0]}\n{self.output}"
        return self.args[0]
