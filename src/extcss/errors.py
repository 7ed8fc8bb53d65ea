"""Error hierarchy for selector and stylesheet parsing."""
from __future__ import annotations


class ExtCssError(Exception):
    """Base error for all extcss errors."""

    def __init__(self, message: str, *, fragment: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.fragment = fragment


class SelectorSyntaxError(ExtCssError):
    """Malformed selector text: attribute, regexp boundary, unterminated argument."""


class StructuralError(ExtCssError):
    """AST shape violation: missing regular anchor, wrong child arity, wrong node kind."""


class PolicyViolation(ExtCssError):
    """Selector is well-formed but breaks a nesting or placement restriction."""


class StylesheetError(ExtCssError):
    """Stylesheet text cannot be split into valid rules."""
