"""Hand-written splitter for extended CSS stylesheets.

Syntax example:
    div.banner:has(> img) { display: none !important; }
    .ad:contains(/promo/) { debug: true; visibility: hidden; }
    #sidebar > .sponsored:remove()

The stylesheet is scanned alternately in selector mode (text up to the next
``{``) and style mode (declarations up to the next ``}``). A ``{`` that ends
an invalid selector candidate is treated as part of the selector, so braces
inside attribute values or regexp patterns need no escaping.
"""

from __future__ import annotations

import logging
import re

from extcss.config import DEFAULT_CONFIG, ParserConfig
from extcss.errors import SelectorSyntaxError, StylesheetError
from extcss.selector.parser import parse_selector
from extcss.stylesheet.model import (
    PSEUDO_PROPERTY_POSITIVE_VALUE,
    REMOVE_PSEUDO_PROPERTY_KEY,
    RawRule,
    RuleData,
    Style,
)
from extcss.stylesheet.normalizer import normalize
from extcss.stylesheet.rule_data import prepare_rule_data

__all__ = ["parse_stylesheet"]

logger = logging.getLogger(__name__)

NO_SELECTOR_ERROR = "Selector should be defined before style declaration in stylesheet"
NO_STYLE_OR_REMOVE_ERROR = "Invalid css rule, no style or remove"
NO_STYLE_ERROR = "Empty style declaration in stylesheet"
INVALID_STYLE_ERROR = "Invalid style declaration in stylesheet"
UNCLOSED_STYLE_ERROR = "Unclosed style declaration in stylesheet"
NO_PROPERTY_ERROR = "Missing style property in declaration in stylesheet"
NO_VALUE_ERROR = "Missing style value in declaration in stylesheet"
INVALID_REMOVE_ERROR = "Invalid :remove() pseudo-class in selector"

# ':remove()' and the ':remove(' prefix of rules like 'div:remove(2)'
VALID_REMOVE_MARKER = ":remove()"
INVALID_REMOVE_MARKER = ":remove("

_STYLE_START_RE = re.compile(r"(?<!\\)\{")
# Declaration scanning expects ':', ';' and '}'.
_DECLARATION_DIVIDER_RE = re.compile(r"(?<!\\)[:;}]")
_DECLARATION_END_RE = re.compile(r"(?<!\\)[;}]")
_NON_WHITESPACE_RE = re.compile(r"\S")


def _parse_remove_selector(raw_selector: str) -> tuple[str, list[Style]]:
    """Strip a trailing ``:remove()`` and turn it into a synthetic style.

    Returns the selector without the marker and the styles it implies.
    """
    first_index = raw_selector.find(VALID_REMOVE_MARKER)
    if first_index == -1:
        if INVALID_REMOVE_MARKER in raw_selector:
            # 'div:remove(0)'
            raise StylesheetError(f"{INVALID_REMOVE_ERROR}: '{raw_selector}'", fragment=raw_selector)
        return raw_selector, []

    if first_index == 0:
        raise StylesheetError(
            f"Selector should be specified before :remove() pseudo-class: '{raw_selector}'",
            fragment=raw_selector,
        )
    if first_index != raw_selector.rfind(VALID_REMOVE_MARKER):
        # '.block:remove() > .banner:remove()'
        raise StylesheetError(
            f"Pseudo-class :remove() appears more than once in selector: '{raw_selector}'",
            fragment=raw_selector,
        )
    if first_index + len(VALID_REMOVE_MARKER) < len(raw_selector):
        # '.block:remove():upward(2)'
        raise StylesheetError(
            f"Pseudo-class :remove() should be at the end of selector: '{raw_selector}'",
            fragment=raw_selector,
        )
    return raw_selector[:first_index], [
        Style(property=REMOVE_PSEUDO_PROPERTY_KEY, value=PSEUDO_PROPERTY_POSITIVE_VALUE)
    ]


def _parse_declarations(css: str, has_styles: bool) -> tuple[list[Style], int]:
    """Parse declarations at the start of *css* up to the closing ``}``.

    *has_styles* tells whether the rule already carries styles (from
    ``:remove()``), which makes an empty block valid.

    Returns the parsed styles and the index of the closing ``}``.
    """
    styles: list[Style] = []
    index = 0
    while True:
        match = _DECLARATION_DIVIDER_RE.search(css, index)
        if match is None:
            raise StylesheetError(f"{INVALID_STYLE_ERROR}: '{css}'", fragment=css)

        if match.group() == "}":
            chunk = css[index:match.start()]
            if chunk.strip():
                # '{ display: none; visible }'
                raise StylesheetError(f"{INVALID_STYLE_ERROR}: '{css}'", fragment=chunk)
            if not styles and not has_styles:
                # 'div { }'
                raise StylesheetError(f"{NO_STYLE_ERROR}: '{css}'", fragment=css)
            return styles, match.start()

        if match.group() == ";":
            if css[index:match.start()].strip():
                # '{ visible; display: none }'
                raise StylesheetError(f"{INVALID_STYLE_ERROR}: '{css}'", fragment=css)
            index = match.end()
            continue

        colon_index = match.start()
        end_match = _DECLARATION_END_RE.search(css, colon_index + 1)
        if end_match is None:
            raise StylesheetError(f"{UNCLOSED_STYLE_ERROR}: '{css}'", fragment=css)

        prop = css[index:colon_index].strip()
        if not prop:
            raise StylesheetError(f"{NO_PROPERTY_ERROR}: '{css}'", fragment=css)
        value = css[colon_index + 1:end_match.start()].strip()
        if not value:
            raise StylesheetError(f"{NO_VALUE_ERROR}: '{css}'", fragment=css)
        styles.append(Style(property=prop, value=value))

        # '{ display: none }' -- no ';' after the last declaration
        if end_match.group() == "}":
            return styles, end_match.start()
        index = end_match.end()


class _StylesheetSplitter:
    """Parser state for one ``parse_stylesheet`` call."""

    def __init__(self, css: str, config: ParserConfig) -> None:
        self.css = css
        self.config = config
        self.is_selector = True
        self.selector_buffer = ""
        self.raw_rule: RawRule | None = None
        # keyed by trimmed selector text, in first-seen order
        self.results: dict[str, RawRule] = {}

    def run(self) -> list[RuleData]:
        while self.css:
            if self.is_selector:
                self._parse_selector_part()
            else:
                self._parse_style_part()

        if not self.is_selector:
            raise StylesheetError(f"{UNCLOSED_STYLE_ERROR}: '{self.raw_rule.selector}'")  # type: ignore[union-attr]
        if self.selector_buffer.strip():
            raise StylesheetError(
                f"{NO_STYLE_OR_REMOVE_ERROR}: '{self.selector_buffer.strip()}'",
                fragment=self.selector_buffer,
            )

        return [
            prepare_rule_data(selector, raw.ast, raw.styles)
            for selector, raw in self.results.items()
        ]

    def _parse_selector_part(self) -> None:
        match = _STYLE_START_RE.search(self.css)
        if match is None:
            # no style block left; only a ':remove()' rule is valid here
            candidate = (self.selector_buffer + self.css).strip()
            self.css = ""
            self.selector_buffer = ""
            selector, styles = _parse_remove_selector(candidate)
            if not styles:
                raise StylesheetError(f"{NO_STYLE_OR_REMOVE_ERROR}: '{candidate}'", fragment=candidate)
            ast = parse_selector(selector, self.config)
            self._save(RawRule(selector=selector.strip(), ast=ast, styles=styles))
            return

        self.selector_buffer += self.css[:match.start()]
        self.css = self.css[match.start() + 1:]
        candidate = self.selector_buffer.strip()
        if not candidate:
            raise StylesheetError(f"{NO_SELECTOR_ERROR}: '{{{self.css}'", fragment=self.css)

        selector, styles = _parse_remove_selector(candidate)
        try:
            ast = parse_selector(selector, self.config)
        except SelectorSyntaxError as exc:
            # the '{' belongs to the selector, e.g. 'div[data-x="{"]'
            logger.debug("Selector candidate %r is incomplete: %s", candidate, exc)
            self.selector_buffer += "{"
            return

        self.raw_rule = RawRule(selector=selector.strip(), ast=ast, styles=styles)
        self.selector_buffer = ""
        self.is_selector = False

    def _parse_style_part(self) -> None:
        assert self.raw_rule is not None
        styles, end_index = _parse_declarations(self.css, bool(self.raw_rule.styles))
        self.raw_rule.styles.extend(styles)
        self._save(self.raw_rule)
        self.raw_rule = None
        self.is_selector = True

        next_match = _NON_WHITESPACE_RE.search(self.css, end_index + 1)
        self.css = self.css[next_match.start():] if next_match else ""

    def _save(self, raw_rule: RawRule) -> None:
        stored = self.results.get(raw_rule.selector)
        if stored is None:
            self.results[raw_rule.selector] = raw_rule
        else:
            stored.styles.extend(raw_rule.styles)


def parse_stylesheet(stylesheet: str, config: ParserConfig | None = None) -> list[RuleData]:
    """Parse an extended CSS stylesheet into RuleData records.

    Rules for the same selector text are merged; for properties declared in
    several blocks the last declaration wins. Returns records in order of
    first appearance.
    """
    rules = _StylesheetSplitter(normalize(stylesheet), config or DEFAULT_CONFIG).run()
    logger.debug("Parsed stylesheet into %d rule(s)", len(rules))
    return rules
