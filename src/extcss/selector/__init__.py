from extcss.selector.nodes import (
    AbsolutePseudoClass,
    ExtendedSelector,
    Node,
    NodeType,
    RegularSelector,
    RelativePseudoClass,
    Selector,
    SelectorList,
    node_from_dict,
)
from extcss.selector.parser import parse_selector
from extcss.selector.tokenizer import Token, TokenKind, tokenize, tokenize_attribute

__all__ = [
    "parse_selector",
    "tokenize",
    "tokenize_attribute",
    "Token",
    "TokenKind",
    "Node",
    "NodeType",
    "SelectorList",
    "Selector",
    "RegularSelector",
    "ExtendedSelector",
    "AbsolutePseudoClass",
    "RelativePseudoClass",
    "node_from_dict",
]
