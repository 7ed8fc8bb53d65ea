"""Stylesheet model: Style declarations and the final RuleData records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from extcss.selector.nodes import SelectorList

# Pseudo-properties understood by the style applier rather than by the browser.
REMOVE_PSEUDO_PROPERTY_KEY = "remove"
DEBUG_PSEUDO_PROPERTY_KEY = "debug"
PSEUDO_PROPERTY_POSITIVE_VALUE = "true"
DEBUG_PSEUDO_PROPERTY_GLOBAL_VALUE = "global"

VALID_DEBUG_VALUES = frozenset({
    PSEUDO_PROPERTY_POSITIVE_VALUE,
    DEBUG_PSEUDO_PROPERTY_GLOBAL_VALUE,
})


@dataclass(frozen=True)
class Style:
    """A single ``property: value`` declaration."""

    property: str
    value: str


@dataclass
class RawRule:
    """A rule collected by the splitter before its styles are resolved."""

    selector: str
    ast: SelectorList
    styles: list[Style] = field(default_factory=list)


@dataclass(frozen=True)
class RuleData:
    """A parsed stylesheet rule ready to be applied.

    Attributes:
        selector: Trimmed selector text, without a trailing ``:remove()``.
        ast: Compiled selector.
        style: Resolved declarations; ``{"remove": "true"}`` for removal
            rules, ``None`` when the rule only sets ``debug``.
        debug: ``"true"`` or ``"global"`` when debugging is requested.
    """

    selector: str
    ast: SelectorList
    style: dict[str, str] | None = None
    debug: str | None = None

    @property
    def is_remove(self) -> bool:
        return self.style == {REMOVE_PSEUDO_PROPERTY_KEY: PSEUDO_PROPERTY_POSITIVE_VALUE}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"selector": self.selector, "ast": self.ast.to_dict()}
        if self.style is not None:
            data["style"] = dict(self.style)
        if self.debug is not None:
            data["debug"] = self.debug
        return data
