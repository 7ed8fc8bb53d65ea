"""Resolves the styles collected for a selector into a final RuleData record."""

from __future__ import annotations

import logging

from extcss.selector.nodes import SelectorList
from extcss.stylesheet.model import (
    DEBUG_PSEUDO_PROPERTY_KEY,
    PSEUDO_PROPERTY_POSITIVE_VALUE,
    REMOVE_PSEUDO_PROPERTY_KEY,
    VALID_DEBUG_VALUES,
    RuleData,
    Style,
)

__all__ = ["prepare_rule_data"]

logger = logging.getLogger(__name__)


def _is_remove_set(styles: list[Style]) -> bool:
    """'remove' counts only when set to exactly 'true'."""
    return any(
        s.property == REMOVE_PSEUDO_PROPERTY_KEY and s.value == PSEUDO_PROPERTY_POSITIVE_VALUE
        for s in styles
    )


def _debug_value(styles: list[Style]) -> str | None:
    for s in styles:
        if s.property == DEBUG_PSEUDO_PROPERTY_KEY:
            return s.value
    return None


def prepare_rule_data(selector: str, ast: SelectorList, raw_styles: list[Style]) -> RuleData:
    """Build the RuleData for *selector* from its collected *raw_styles*.

    - ``debug`` is taken out of the styles and kept only if it is ``true``
      or ``global``.
    - A positive ``remove`` replaces every other declaration.
    - Otherwise declarations fold into a mapping, later values winning.
    """
    debug: str | None = None
    styles = raw_styles

    debug_value = _debug_value(raw_styles)
    if debug_value is not None:
        styles = [s for s in raw_styles if s.property != DEBUG_PSEUDO_PROPERTY_KEY]
        if debug_value in VALID_DEBUG_VALUES:
            debug = debug_value
        else:
            logger.debug("Dropping invalid debug value %r for selector %r", debug_value, selector)

    if _is_remove_set(styles):
        style: dict[str, str] | None = {REMOVE_PSEUDO_PROPERTY_KEY: PSEUDO_PROPERTY_POSITIVE_VALUE}
    elif styles:
        style = {s.property: s.value for s in styles}
    else:
        style = None

    return RuleData(selector=selector, ast=ast, style=style, debug=debug)
