"""Recursive-descent parser for extended CSS selectors.

Turns a selector list such as ``div.ad > p:contains(/promo/), a:has(> img)``
into a :class:`SelectorList` tree. Regular CSS fragments are collected as
plain text for the native matcher; extended pseudo-classes become
``ExtendedSelector`` nodes. Arguments of relative pseudo-classes (``:has``,
``:not``, ...) are parsed recursively on the same token stream, arguments of
absolute ones (``:contains``, ``:xpath``, ...) are kept as raw strings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from extcss.config import DEFAULT_CONFIG, ParserConfig
from extcss.errors import PolicyViolation, SelectorSyntaxError, StructuralError
from extcss.selector.constants import (
    ANY_ELEMENT_SELECTOR,
    ASTERISK,
    COLON,
    COMBINATORS,
    COMMA,
    PAREN_LEFT,
    PAREN_RIGHT,
    REMOVE_PSEUDO_CLASS_MARKER,
    ROOT_CHILDREN_SELECTOR,
    ROOT_MATCHING_PSEUDO_CLASSES,
    SLASH,
    SQUARE_RIGHT,
    WHITE_SPACE_CHARACTERS,
    XPATH_PSEUDO_CLASS_MARKER,
    XPATH_ROOT_SELECTOR,
)
from extcss.selector.nodes import (
    AbsolutePseudoClass,
    ExtendedSelector,
    RegularSelector,
    RelativePseudoClass,
    Selector,
    SelectorList,
    first_regular_child,
    validate_tree,
)
from extcss.selector.predicates import (
    check_allowed_inside_has,
    check_has_placement,
    does_regular_continue_after_space,
    is_absolute_pseudo_class,
    is_attribute_closing,
    is_attribute_opening,
    is_regexp_closing,
    is_regexp_opening,
    is_relative_pseudo_class,
    is_white_space_char,
)
from extcss.selector.tokenizer import Token, tokenize

__all__ = ["parse_selector"]

logger = logging.getLogger(__name__)

_WHITE_SPACE = "".join(sorted(WHITE_SPACE_CHARACTERS))


def parse_selector(selector: str, config: ParserConfig | None = None) -> SelectorList:
    """Parse an extended CSS selector list into an AST.

    Raises:
        SelectorSyntaxError: malformed attribute, regexp or pseudo-class argument.
        PolicyViolation: forbidden nesting or misplaced ``:remove()``.
        StructuralError: a selector without any regular part, e.g. ``'div,'``.
    """
    ast = _SelectorParser(selector, config or DEFAULT_CONFIG).parse()
    logger.debug("Parsed selector %r into %d selector(s)", selector, len(ast.children))
    return ast


@dataclass
class _SelectorFrame:
    """Mutable state of the Selector node currently being built."""

    # first selector of the whole input, where implicit anchors apply
    at_input_start: bool = False
    children: list[RegularSelector | ExtendedSelector] = field(default_factory=list)
    buffer: str = ""
    regular_pseudo_depth: int = 0
    after_pseudo_element: bool = False
    attribute_open: bool = False
    attribute_buffer: str = ""
    remove_seen: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.buffer and not self.children


class _SelectorParser:
    """Parser state for one ``parse_selector`` call."""

    def __init__(self, selector: str, config: ParserConfig) -> None:
        self.selector = selector.strip(_WHITE_SPACE)
        self.config = config
        self.tokens: list[Token] = tokenize(self.selector)
        self.pos = 0
        # names of extended pseudo-classes whose argument is open
        self.open_names: list[str] = []

    def parse(self) -> SelectorList:
        if not self.tokens:
            raise SelectorSyntaxError("Selector should be defined", fragment=self.selector)
        return validate_tree(self._parse_selector_list(depth=0))

    # -- token cursor --------------------------------------------------------

    def _peek(self, offset: int = 0) -> Token | None:
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def _prev_value(self) -> str | None:
        if self.pos > 0:
            return self.tokens[self.pos - 1].value
        return None

    # -- selector lists ------------------------------------------------------

    def _parse_selector_list(self, depth: int) -> SelectorList:
        """Parse selectors until the closing `)` of the argument or end of input.

        At *depth* 0 this is the whole input; otherwise the closing `)` of
        the enclosing relative pseudo-class is consumed before returning.
        """
        selector_list = SelectorList()
        frame = _SelectorFrame(at_input_start=depth == 0)

        while self.pos < len(self.tokens):
            token = self.tokens[self.pos]
            value = token.value

            if frame.attribute_open:
                self._collect_attribute(frame, value)
                self.pos += 1
                continue

            if frame.remove_seen and not is_white_space_char(value):
                self._check_after_remove(frame, value)

            if value == COMMA and frame.regular_pseudo_depth == 0:
                selector_list.children.append(self._finish_selector(frame))
                frame = _SelectorFrame()
                self.pos += 1
                continue

            if value == PAREN_RIGHT and frame.regular_pseudo_depth == 0 and depth > 0:
                self.pos += 1
                if frame.is_empty and not selector_list.children:
                    raise SelectorSyntaxError(
                        f"Missing arg for :{self.open_names[-1]}() pseudo-class",
                        fragment=self.selector,
                    )
                selector_list.children.append(self._finish_selector(frame))
                return selector_list

            if value == COLON:
                self._handle_colon(frame, depth)
                continue

            if is_white_space_char(value):
                self._handle_space(frame, value)
            elif is_attribute_opening(value, self._prev_value()):
                frame.buffer += value
                frame.attribute_open = True
                frame.attribute_buffer = ""
            elif value == PAREN_LEFT:
                # argument of a regular pseudo-class, e.g. ':nth-child(2n + 1)'
                frame.buffer += value
                frame.regular_pseudo_depth += 1
            elif value == PAREN_RIGHT:
                frame.buffer += value
                if frame.regular_pseudo_depth > 0:
                    frame.regular_pseudo_depth -= 1
            else:
                frame.buffer += value
            self.pos += 1

        if depth > 0:
            raise SelectorSyntaxError(
                f"Unbalanced brackets for extended pseudo-class: ':{self.open_names[-1]}()'",
                fragment=self.selector,
            )
        selector_list.children.append(self._finish_selector(frame))
        return selector_list

    def _finish_selector(self, frame: _SelectorFrame) -> Selector:
        if frame.attribute_open:
            raise SelectorSyntaxError(
                f"Unbalanced attribute brackets in selector: '{self.selector}'",
                fragment=frame.attribute_buffer,
            )
        if frame.buffer:
            frame.children.append(RegularSelector(frame.buffer))
            frame.buffer = ""
        first_regular_child(
            frame.children,
            f"Selector should have a regular part in selector: '{self.selector}'",
        )
        return Selector(children=frame.children)

    # -- regular selector parts ----------------------------------------------

    def _handle_space(self, frame: _SelectorFrame, value: str) -> None:
        if frame.regular_pseudo_depth > 0:
            frame.buffer += value
            return
        # leading spaces of a selector in a list, e.g. 'div, span'
        if frame.is_empty:
            return
        # 'div > span', and 'div:has(img) span' after an extended pseudo-class
        if does_regular_continue_after_space(self._peek(1)):
            frame.buffer += value

    def _collect_attribute(self, frame: _SelectorFrame, value: str) -> None:
        frame.buffer += value
        if value == SQUARE_RIGHT and is_attribute_closing(frame.attribute_buffer):
            frame.attribute_open = False
            frame.attribute_buffer = ""
        else:
            frame.attribute_buffer += value

    def _check_after_remove(self, frame: _SelectorFrame, value: str) -> None:
        if value == COMMA:
            return
        next_token = self._peek(1)
        if (
            value == COLON
            and next_token is not None
            and next_token.value.lower() == REMOVE_PSEUDO_CLASS_MARKER
        ):
            raise PolicyViolation(
                f"Pseudo-class :remove() appears more than once in selector: '{self.selector}'",
                fragment=self.selector,
            )
        raise PolicyViolation(
            f"Pseudo-class :remove() should be at the end of selector: '{self.selector}'",
            fragment=self.selector,
        )

    # -- pseudo-classes ------------------------------------------------------

    def _handle_colon(self, frame: _SelectorFrame, depth: int) -> None:
        name_token = self._peek(1)
        if name_token is not None and name_token.is_word:
            name = name_token.value.lower()
            relative = is_relative_pseudo_class(name)
            absolute = is_absolute_pseudo_class(name)
            if relative or absolute:
                if frame.regular_pseudo_depth > 0:
                    # '::slotted(:has(.a))'; other names stay plain text there
                    check_has_placement(name, True, frame.after_pseudo_element)
                else:
                    check_allowed_inside_has(name, self.open_names)
                    check_has_placement(name, False, frame.after_pseudo_element)
                    paren = self._peek(2)
                    if paren is None or paren.value != PAREN_LEFT:
                        raise SelectorSyntaxError(
                            f"Missing arg for :{name}() pseudo-class",
                            fragment=self.selector,
                        )
                    # skip ':', name and '('
                    self.pos += 3
                    if relative:
                        self._parse_relative(frame, name, depth)
                    else:
                        self._parse_absolute(frame, name, depth)
                    return

        # standard or unknown pseudo-class, copied as is: ':hover' -> '*:hover'
        if frame.is_empty:
            frame.buffer += ASTERISK
        frame.buffer += COLON
        if name_token is not None and name_token.value == COLON:
            frame.after_pseudo_element = True
        self.pos += 1

    def _flush_anchor(self, frame: _SelectorFrame, name: str) -> None:
        """Turn the buffer into the RegularSelector an extended pseudo-class applies to."""
        buffer = frame.buffer
        if not buffer and frame.children:
            # ':not(span):not(p)' -- anchored by the previous regular part
            return
        at_start = frame.at_input_start and not frame.children
        if at_start and buffer in ("", ASTERISK) and name in ROOT_MATCHING_PSEUDO_CLASSES:
            value = ROOT_CHILDREN_SELECTOR
        elif at_start and not buffer and name == XPATH_PSEUDO_CLASS_MARKER:
            value = XPATH_ROOT_SELECTOR
        elif not buffer or buffer[-1] in WHITE_SPACE_CHARACTERS or buffer[-1] in COMBINATORS:
            # '.banner > :has(span)' -> '.banner > *'
            value = buffer + ANY_ELEMENT_SELECTOR
        else:
            value = buffer
        frame.children.append(RegularSelector(value))
        frame.buffer = ""

    def _parse_relative(self, frame: _SelectorFrame, name: str, depth: int) -> None:
        if depth + 1 > self.config.max_nesting_depth:
            raise PolicyViolation(
                f"Selector nesting exceeds maximum depth of {self.config.max_nesting_depth}: "
                f"'{self.selector}'",
                fragment=self.selector,
            )
        self._flush_anchor(frame, name)
        self.open_names.append(name)
        argument = self._parse_selector_list(depth + 1)
        self.open_names.pop()
        frame.children.append(
            ExtendedSelector(children=[RelativePseudoClass(name=name, children=[argument])])
        )

    def _parse_absolute(self, frame: _SelectorFrame, name: str, depth: int) -> None:
        is_remove = name == REMOVE_PSEUDO_CLASS_MARKER
        if is_remove:
            if depth > 0:
                raise PolicyViolation(
                    f"Pseudo-class :remove() is not allowed inside :{self.open_names[-1]}(): "
                    f"'{self.selector}'",
                    fragment=self.selector,
                )
            if not frame.buffer.strip(_WHITE_SPACE) and not frame.children:
                raise PolicyViolation(
                    f"Selector should be specified before :remove() pseudo-class: '{self.selector}'",
                    fragment=self.selector,
                )

        self._flush_anchor(frame, name)
        self.open_names.append(name)
        argument = self._collect_absolute_arg(name)
        self.open_names.pop()

        if is_remove:
            if argument:
                raise SelectorSyntaxError(
                    f"Invalid :remove() pseudo-class in selector: '{self.selector}'",
                    fragment=argument,
                )
            frame.remove_seen = True
        elif not argument:
            raise SelectorSyntaxError(
                f"Missing arg for :{name}() pseudo-class", fragment=self.selector
            )
        frame.children.append(
            ExtendedSelector(children=[AbsolutePseudoClass(name=name, value=argument)])
        )

    def _collect_absolute_arg(self, name: str) -> str:
        """Collect the raw argument up to the matching `)`.

        Inside a regexp pattern `(`, `)`, `,` and `:` carry no meaning until
        the closing unescaped `/`.
        """
        argument = ""
        paren_depth = 1
        regexp_open = False
        while self.pos < len(self.tokens):
            value = self.tokens[self.pos].value
            self.pos += 1
            if regexp_open:
                if value == SLASH and is_regexp_closing(argument):
                    regexp_open = False
            elif value == SLASH:
                regexp_open = is_regexp_opening(self.open_names, argument)
            elif value == PAREN_LEFT:
                paren_depth += 1
            elif value == PAREN_RIGHT:
                paren_depth -= 1
                if paren_depth == 0:
                    return argument
            argument += value

        if regexp_open:
            raise SelectorSyntaxError(
                f"Unbalanced regexp pattern in arg of :{name}() pseudo-class: '{argument}'",
                fragment=argument,
            )
        raise SelectorSyntaxError(
            f"Unbalanced brackets for extended pseudo-class: ':{name}()'",
            fragment=self.selector,
        )
