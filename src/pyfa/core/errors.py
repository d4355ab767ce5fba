"""
Error taxonomy for automaton construction.

All errors derive from ValueError.
"""

from __future__ import annotations


class AutomatonError(ValueError):
    """Base class for automaton construction errors."""


class InvalidSymbolError(AutomatonError):
    """A transition references a symbol outside the declared alphabet."""

    def __init__(self, symbol: str, message: str | None = None):
        self.symbol = symbol
        super().__init__(message or f"symbol {symbol!r} is not in the alphabet")


class MalformedConfigurationError(AutomatonError):
    """Structurally invalid configuration input."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
