"""Mark characters and pseudo-class name tables shared by the selector modules."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Mark characters
# ---------------------------------------------------------------------------

SPACE = " "
TAB = "\t"
LINE_FEED = "\n"
CARRIAGE_RETURN = "\r"
FORM_FEED = "\f"

WHITE_SPACE_CHARACTERS = frozenset({SPACE, TAB, LINE_FEED, CARRIAGE_RETURN, FORM_FEED})

SQUARE_LEFT = "["
SQUARE_RIGHT = "]"
PAREN_LEFT = "("
PAREN_RIGHT = ")"
CURLY_LEFT = "{"
CURLY_RIGHT = "}"

SLASH = "/"
BACKSLASH = "\\"
SEMICOLON = ";"
COLON = ":"
COMMA = ","
SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'
CARET = "^"
DOLLAR_SIGN = "$"
ASTERISK = "*"
ID_MARKER = "#"
CLASS_MARKER = "."
EQUAL_SIGN = "="

CHILD_COMBINATOR = ">"
NEXT_SIBLING_COMBINATOR = "+"
SUBSEQUENT_SIBLING_COMBINATOR = "~"

COMBINATORS = frozenset({
    CHILD_COMBINATOR,
    NEXT_SIBLING_COMBINATOR,
    SUBSEQUENT_SIBLING_COMBINATOR,
})

QUOTES = frozenset({SINGLE_QUOTE, DOUBLE_QUOTE})

SUPPORTED_SELECTOR_MARKS = frozenset({
    SQUARE_LEFT,
    SQUARE_RIGHT,
    PAREN_LEFT,
    PAREN_RIGHT,
    CURLY_LEFT,
    CURLY_RIGHT,
    SLASH,
    BACKSLASH,
    SEMICOLON,
    COLON,
    COMMA,
    SINGLE_QUOTE,
    DOUBLE_QUOTE,
    CARET,
    DOLLAR_SIGN,
    ASTERISK,
    ID_MARKER,
    CLASS_MARKER,
    EQUAL_SIGN,
}) | COMBINATORS | WHITE_SPACE_CHARACTERS

# ---------------------------------------------------------------------------
# Extended pseudo-classes
# ---------------------------------------------------------------------------

CONTAINS_PSEUDO_NAMES = frozenset({"contains", "has-text", "-abp-contains"})
HAS_PSEUDO_NAMES = frozenset({"has", "-abp-has"})

IS_PSEUDO_CLASS_MARKER = "is"
NOT_PSEUDO_CLASS_MARKER = "not"
WHERE_PSEUDO_CLASS_MARKER = "where"
IF_NOT_PSEUDO_CLASS_MARKER = "if-not"
XPATH_PSEUDO_CLASS_MARKER = "xpath"
REMOVE_PSEUDO_CLASS_MARKER = "remove"

RELATIVE_PSEUDO_CLASSES = HAS_PSEUDO_NAMES | frozenset({
    IF_NOT_PSEUDO_CLASS_MARKER,
    IS_PSEUDO_CLASS_MARKER,
    NOT_PSEUDO_CLASS_MARKER,
    WHERE_PSEUDO_CLASS_MARKER,
})

ABSOLUTE_PSEUDO_CLASSES = CONTAINS_PSEUDO_NAMES | frozenset({
    "matches-css",
    "matches-css-before",
    "matches-css-after",
    "matches-attr",
    "matches-property",
    XPATH_PSEUDO_CLASS_MARKER,
    "nth-ancestor",
    "upward",
    REMOVE_PSEUDO_CLASS_MARKER,
})

SUPPORTED_PSEUDO_CLASSES = RELATIVE_PSEUDO_CLASSES | ABSOLUTE_PSEUDO_CLASSES

# Pseudo-classes not allowed anywhere inside a :has() argument.
FORBIDDEN_INSIDE_HAS = HAS_PSEUDO_NAMES | frozenset({
    IS_PSEUDO_CLASS_MARKER,
    WHERE_PSEUDO_CLASS_MARKER,
})

# Pseudo-classes able to match the root element; anchored below it.
ROOT_MATCHING_PSEUDO_CLASSES = frozenset({
    IS_PSEUDO_CLASS_MARKER,
    NOT_PSEUDO_CLASS_MARKER,
    WHERE_PSEUDO_CLASS_MARKER,
})

# ---------------------------------------------------------------------------
# Synthesized regular selectors
# ---------------------------------------------------------------------------

ANY_ELEMENT_SELECTOR = ASTERISK
ROOT_CHILDREN_SELECTOR = "html *"
XPATH_ROOT_SELECTOR = "body"
