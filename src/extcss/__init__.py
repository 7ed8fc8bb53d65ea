"""Extended CSS selector compiler and stylesheet splitter."""

from extcss.config import ParserConfig
from extcss.errors import (
    ExtCssError,
    PolicyViolation,
    SelectorSyntaxError,
    StructuralError,
    StylesheetError,
)
from extcss.selector import (
    AbsolutePseudoClass,
    ExtendedSelector,
    NodeType,
    RegularSelector,
    RelativePseudoClass,
    Selector,
    SelectorList,
    node_from_dict,
    parse_selector,
    tokenize,
)
from extcss.stylesheet import RuleData, Style, normalize, parse_stylesheet, prepare_rule_data

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Parsing
    "parse_selector",
    "parse_stylesheet",
    "prepare_rule_data",
    "normalize",
    "tokenize",
    # AST
    "NodeType",
    "SelectorList",
    "Selector",
    "RegularSelector",
    "ExtendedSelector",
    "AbsolutePseudoClass",
    "RelativePseudoClass",
    "node_from_dict",
    # Stylesheet model
    "RuleData",
    "Style",
    # Configuration
    "ParserConfig",
    # Errors
    "ExtCssError",
    "SelectorSyntaxError",
    "StructuralError",
    "PolicyViolation",
    "StylesheetError",
]
