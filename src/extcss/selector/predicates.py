"""Predicates and validators used by the selector parser.

Checks here are pure functions of their arguments. Validators either return a
boolean or raise the matching ``ExtCssError`` subclass with a message that
embeds the offending selector fragment.
"""

from __future__ import annotations

from typing import Sequence

from extcss.errors import PolicyViolation, SelectorSyntaxError
from extcss.selector.constants import (
    ABSOLUTE_PSEUDO_CLASSES,
    ASTERISK,
    BACKSLASH,
    CLASS_MARKER,
    COLON,
    COMBINATORS,
    CONTAINS_PSEUDO_NAMES,
    DOUBLE_QUOTE,
    EQUAL_SIGN,
    FORBIDDEN_INSIDE_HAS,
    HAS_PSEUDO_NAMES,
    ID_MARKER,
    PAREN_LEFT,
    QUOTES,
    RELATIVE_PSEUDO_CLASSES,
    SINGLE_QUOTE,
    SLASH,
    SPACE,
    SQUARE_LEFT,
    SUPPORTED_PSEUDO_CLASSES,
    WHITE_SPACE_CHARACTERS,
    XPATH_PSEUDO_CLASS_MARKER,
)
from extcss.selector.tokenizer import Token, tokenize_attribute

ATTRIBUTE_CASE_INSENSITIVE_FLAG = "i"

# Characters allowed right before a `/` that opens a regexp pattern.
#   :matches-attr(/data-/)  :matches-attr("/data-/")  :matches-attr(check=/data-v-/)
#   :matches-property(inner./_test/=null)  :matches-css(height:/20px/)
#   :matches-css-after( content  :   /(\\d+\\s)*me/  )
POSSIBLE_MARKS_BEFORE_REGEXP = frozenset({
    PAREN_LEFT,
    SINGLE_QUOTE,
    DOUBLE_QUOTE,
    EQUAL_SIGN,
    CLASS_MARKER,
    COLON,
    SPACE,
})


# ---------------------------------------------------------------------------
# Pseudo-class classification
# ---------------------------------------------------------------------------


def is_supported_pseudo_class(name: str) -> bool:
    """Return True if *name* is a known extended pseudo-class."""
    return name.lower() in SUPPORTED_PSEUDO_CLASSES


def is_relative_pseudo_class(name: str) -> bool:
    """Return True if the argument of *name* is a selector list."""
    return name.lower() in RELATIVE_PSEUDO_CLASSES


def is_absolute_pseudo_class(name: str) -> bool:
    """Return True if the argument of *name* is an opaque string."""
    return name.lower() in ABSOLUTE_PSEUDO_CLASSES


def is_white_space_char(value: str | None) -> bool:
    if not value:
        return False
    return value in WHITE_SPACE_CHARACTERS


# ---------------------------------------------------------------------------
# Regular selector continuation
# ---------------------------------------------------------------------------


def does_regular_continue_after_space(next_token: Token | None) -> bool:
    """Check whether the token after a space continues the regular selector.

    e.g. 'div > span', '#main *:has(> .ad)', 'div :where(.content)',
    "div[class*=' ']".
    """
    if next_token is None:
        return False
    if next_token.is_word:
        return True
    value = next_token.value
    return (
        value in COMBINATORS
        or value in QUOTES
        or value in (ASTERISK, ID_MARKER, CLASS_MARKER, COLON, SQUARE_LEFT)
    )


# ---------------------------------------------------------------------------
# Regexp patterns in pseudo-class arguments
# ---------------------------------------------------------------------------


def is_regexp_opening(open_names: Sequence[str], arg_buffer: str) -> bool:
    """Check whether a `/` following *arg_buffer* opens a regexp pattern.

    *open_names* is the stack of open extended pseudo-class names; its top is
    the pseudo-class whose argument is being collected.
    """
    if not open_names:
        raise SelectorSyntaxError("Regexp pattern allowed only in arg of extended pseudo-class")
    name = open_names[-1]
    if name == XPATH_PSEUDO_CLASS_MARKER:
        return False

    # :contains(/text/), :contains('/text/')
    if name in CONTAINS_PSEUDO_NAMES:
        return arg_buffer == "" or arg_buffer in QUOTES

    prev_char = arg_buffer[-1] if arg_buffer else PAREN_LEFT
    if prev_char == SLASH:
        arg_desc = f"in arg part: '{arg_buffer}'" if arg_buffer else "arg"
        raise SelectorSyntaxError(
            f"Invalid regexp pattern for :{name}() pseudo-class {arg_desc}",
            fragment=arg_buffer,
        )
    return prev_char in POSSIBLE_MARKS_BEFORE_REGEXP


def is_regexp_closing(arg_buffer: str) -> bool:
    """Check whether a `/` following *arg_buffer* is unescaped."""
    return not arg_buffer.endswith(BACKSLASH)


# ---------------------------------------------------------------------------
# Attribute brackets
# ---------------------------------------------------------------------------


def is_attribute_opening(value: str, prev_value: str | None) -> bool:
    """`[` opens an attribute unless it is escaped, e.g. 'div\\[id]'."""
    return value == SQUARE_LEFT and prev_value != BACKSLASH


def is_attribute_closing(attribute_buffer: str) -> bool:
    """Check whether the collected *attribute_buffer* forms a complete attribute.

    Called on each `]`. Returns False when the `]` belongs to the attribute
    value (e.g. '[title="a]b"]') and raises SelectorSyntaxError when the
    attribute can never become valid.
    """
    tokens = tokenize_attribute(attribute_buffer)
    first = tokens[0] if tokens else None
    last = tokens[-1] if tokens else None
    prev_to_last = tokens[-2] if len(tokens) > 1 else None

    # '[="margin"]' is invalid but '[\\:data-service-slot]' is fine
    if first is not None and first.is_mark and first.value != BACKSLASH:
        raise SelectorSyntaxError(
            f"'[{attribute_buffer}]' is not a valid attribute due to '{first.value}' at start of it",
            fragment=attribute_buffer,
        )

    # '[style=]'
    if last is not None and last.value == EQUAL_SIGN:
        raise SelectorSyntaxError(
            f"'[{attribute_buffer}]' is not a valid attribute due to '{EQUAL_SIGN}'",
            fragment=attribute_buffer,
        )

    equal_sign_index = next(
        (i for i, t in enumerate(tokens) if t.is_mark and t.value == EQUAL_SIGN), -1
    )
    if equal_sign_index == -1:
        # just a name: 'div[style]'
        if last is not None and last.is_word:
            return True
        # escaped quotes: '[class\\"ads-article\\"]'
        return (
            prev_to_last is not None
            and prev_to_last.value == BACKSLASH
            and last is not None
            and last.value in QUOTES
        )

    opening = tokens[equal_sign_index + 1].value
    if opening not in QUOTES:
        # 'div[style*=margin]', 'div[style*=MARGIN i]'
        if last is not None and last.is_word:
            return True
        # 'table[style*=border: 0px"]'
        raise SelectorSyntaxError(
            f"'[{attribute_buffer}]' is not a valid attribute",
            fragment=attribute_buffer,
        )

    # 'div[style*="MARGIN" i]'
    if last.is_word and last.value.lower() == ATTRIBUTE_CASE_INSENSITIVE_FLAG:
        return prev_to_last is not None and prev_to_last.value == opening
    return last.value == opening


# ---------------------------------------------------------------------------
# Nesting restrictions
# ---------------------------------------------------------------------------


def check_allowed_inside_has(name: str, open_names: Sequence[str]) -> None:
    """:has, :is and :where may not appear anywhere inside a :has() argument."""
    if name in FORBIDDEN_INSIDE_HAS and any(n in HAS_PSEUDO_NAMES for n in open_names):
        raise PolicyViolation(
            f"Usage of :{name} pseudo-class is not allowed inside upper :has",
            fragment=name,
        )


def check_has_placement(
    name: str, inside_regular_pseudo: bool, after_pseudo_element: bool
) -> None:
    """:has may not sit inside a regular pseudo argument or after a pseudo-element."""
    if name not in HAS_PSEUDO_NAMES:
        return
    if inside_regular_pseudo:
        # '::slotted(:has(.a))'
        raise PolicyViolation(
            f"Usage of :{name} pseudo-class is not allowed inside regular pseudo",
            fragment=name,
        )
    if after_pseudo_element:
        # '::part(foo):has(.a)'
        raise PolicyViolation(
            f"Usage of :{name} pseudo-class is not allowed after any regular pseudo-element",
            fragment=name,
        )
