"""Selector AST: six node kinds and total accessor functions over them.

Example for ``div.banner > div:has(span, p), a img.ad``::

    SelectorList
        Selector
            RegularSelector      'div.banner > div'
            ExtendedSelector
                RelativePseudoClass  has
                    SelectorList
                        Selector
                            RegularSelector  'span'
                        Selector
                            RegularSelector  'p'
        Selector
            RegularSelector      'a img.ad'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union

from extcss.errors import StructuralError

__all__ = [
    "NodeType",
    "Node",
    "SelectorList",
    "Selector",
    "RegularSelector",
    "ExtendedSelector",
    "AbsolutePseudoClass",
    "RelativePseudoClass",
    "name_of",
    "value_of",
    "first_regular_child",
    "last_regular_child",
    "only_child",
    "pseudo_class_of",
    "relative_selector_list_of",
    "validate_tree",
    "node_from_dict",
]

NO_REGULAR_SELECTOR_ERROR = "At least one of Selector node children should be RegularSelector"


class NodeType(Enum):
    """Tag of a selector AST node; values are the serialized ``type`` field."""

    SELECTOR_LIST = "SelectorList"
    SELECTOR = "Selector"
    REGULAR_SELECTOR = "RegularSelector"
    EXTENDED_SELECTOR = "ExtendedSelector"
    ABSOLUTE_PSEUDO_CLASS = "AbsolutePseudoClass"
    RELATIVE_PSEUDO_CLASS = "RelativePseudoClass"


# ---------------------------------------------------------------------------
# Node kinds
# ---------------------------------------------------------------------------


@dataclass
class SelectorList:
    """Root of the tree and the argument of every relative pseudo-class."""

    children: list[Selector] = field(default_factory=list)

    type: ClassVar[NodeType] = NodeType.SELECTOR_LIST

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "children": [c.to_dict() for c in self.children]}


@dataclass
class Selector:
    """One complex selector of a list; must contain a RegularSelector."""

    children: list[RegularSelector | ExtendedSelector] = field(default_factory=list)

    type: ClassVar[NodeType] = NodeType.SELECTOR

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "children": [c.to_dict() for c in self.children]}


@dataclass
class RegularSelector:
    """Selector text handed unchanged to the native matcher."""

    value: str

    type: ClassVar[NodeType] = NodeType.REGULAR_SELECTOR

    @property
    def children(self) -> list[Node]:
        return []

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "value": self.value, "children": []}


@dataclass
class ExtendedSelector:
    """Wrapper around exactly one extended pseudo-class."""

    children: list[AbsolutePseudoClass | RelativePseudoClass] = field(default_factory=list)

    type: ClassVar[NodeType] = NodeType.EXTENDED_SELECTOR

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "children": [c.to_dict() for c in self.children]}


@dataclass
class AbsolutePseudoClass:
    """Extended pseudo-class with an opaque string argument, e.g. ``:contains(ad)``."""

    name: str
    value: str = ""

    type: ClassVar[NodeType] = NodeType.ABSOLUTE_PSEUDO_CLASS

    @property
    def children(self) -> list[Node]:
        return []

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "name": self.name, "value": self.value, "children": []}


@dataclass
class RelativePseudoClass:
    """Extended pseudo-class whose argument is a selector list, e.g. ``:has(> img)``."""

    name: str
    children: list[SelectorList] = field(default_factory=list)

    type: ClassVar[NodeType] = NodeType.RELATIVE_PSEUDO_CLASS

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "name": self.name,
            "children": [c.to_dict() for c in self.children],
        }


Node = Union[
    SelectorList,
    Selector,
    RegularSelector,
    ExtendedSelector,
    AbsolutePseudoClass,
    RelativePseudoClass,
]


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def name_of(node: Node | None) -> str:
    """Return the name of an AbsolutePseudoClass or RelativePseudoClass node."""
    if node is None:
        raise StructuralError("Ast node should be defined")
    if not isinstance(node, (AbsolutePseudoClass, RelativePseudoClass)):
        raise StructuralError(
            "Only AbsolutePseudoClass or RelativePseudoClass ast node can have a name"
        )
    if not node.name:
        raise StructuralError("Extended pseudo-class should have a name")
    return node.name


def value_of(node: Node | None, message: str | None = None) -> str:
    """Return the value of a RegularSelector or AbsolutePseudoClass node."""
    if node is None:
        raise StructuralError("Ast node should be defined")
    if not isinstance(node, (RegularSelector, AbsolutePseudoClass)):
        raise StructuralError(
            "Only RegularSelector or AbsolutePseudoClass ast node can have a value"
        )
    if not node.value:
        raise StructuralError(
            message or "Ast RegularSelector or AbsolutePseudoClass node should have a value"
        )
    return node.value


def first_regular_child(
    children: list[RegularSelector | ExtendedSelector], message: str | None = None
) -> RegularSelector:
    """Return the first RegularSelector among a Selector's *children*."""
    for child in children:
        if isinstance(child, RegularSelector):
            return child
    raise StructuralError(message or NO_REGULAR_SELECTOR_ERROR)


def last_regular_child(children: list[RegularSelector | ExtendedSelector]) -> RegularSelector:
    """Return the last RegularSelector among a Selector's *children*."""
    for child in reversed(children):
        if isinstance(child, RegularSelector):
            return child
    raise StructuralError(NO_REGULAR_SELECTOR_ERROR)


def only_child(node: Node, message: str) -> Node:
    """Return the single child of *node*; anything but exactly one is an error."""
    if len(node.children) != 1:
        raise StructuralError(message)
    return node.children[0]


def pseudo_class_of(node: ExtendedSelector) -> AbsolutePseudoClass | RelativePseudoClass:
    """Return the pseudo-class wrapped by an ExtendedSelector node."""
    child = only_child(node, "Extended selector should be specified")
    if not isinstance(child, (AbsolutePseudoClass, RelativePseudoClass)):
        raise StructuralError("Extended selector child should be a pseudo-class")
    return child


def relative_selector_list_of(node: Node) -> SelectorList:
    """Return the SelectorList argument of a RelativePseudoClass node."""
    if not isinstance(node, RelativePseudoClass):
        raise StructuralError(
            "Only RelativePseudoClass node can have relative SelectorList node as child"
        )
    child = only_child(node, f"Missing arg for :{name_of(node)}() pseudo-class")
    if not isinstance(child, SelectorList):
        raise StructuralError(f"Arg of :{node.name}() pseudo-class should be a SelectorList")
    return child


def validate_tree(root: SelectorList) -> SelectorList:
    """Check every structural invariant of the tree rooted at *root*.

    Returns *root* unchanged so the call can wrap a return value.
    """
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, SelectorList):
            if not node.children:
                raise StructuralError("SelectorList should have at least one Selector")
            for child in node.children:
                if not isinstance(child, Selector):
                    raise StructuralError("SelectorList children should be Selector nodes")
            stack.extend(node.children)
        elif isinstance(node, Selector):
            first_regular_child(node.children)
            for child in node.children:
                if not isinstance(child, (RegularSelector, ExtendedSelector)):
                    raise StructuralError(
                        "Selector children should be RegularSelector or ExtendedSelector nodes"
                    )
            stack.extend(node.children)
        elif isinstance(node, ExtendedSelector):
            stack.append(pseudo_class_of(node))
        elif isinstance(node, RelativePseudoClass):
            stack.append(relative_selector_list_of(node))
        elif isinstance(node, AbsolutePseudoClass):
            name_of(node)
        elif isinstance(node, RegularSelector):
            value_of(node, "RegularSelector should have a value")
        else:
            raise StructuralError(f"Unknown ast node: {node!r}")
    return root


# ---------------------------------------------------------------------------
# Deserialization
# ---------------------------------------------------------------------------


def node_from_dict(data: dict[str, Any]) -> Node:
    """Rebuild a node (and its subtree) from its ``to_dict()`` form."""
    try:
        node_type = NodeType(data["type"])
    except (KeyError, ValueError) as exc:
        raise StructuralError(f"Unknown ast node type in {data!r}") from exc

    children = [node_from_dict(c) for c in data.get("children", [])]
    if node_type is NodeType.SELECTOR_LIST:
        return SelectorList(children=children)  # type: ignore[arg-type]
    if node_type is NodeType.SELECTOR:
        return Selector(children=children)  # type: ignore[arg-type]
    if node_type is NodeType.EXTENDED_SELECTOR:
        return ExtendedSelector(children=children)  # type: ignore[arg-type]
    if node_type is NodeType.RELATIVE_PSEUDO_CLASS:
        return RelativePseudoClass(name=data.get("name", ""), children=children)  # type: ignore[arg-type]
    if children:
        raise StructuralError(f"{node_type.value} node cannot have children")
    if node_type is NodeType.REGULAR_SELECTOR:
        return RegularSelector(value=data.get("value", ""))
    return AbsolutePseudoClass(name=data.get("name", ""), value=data.get("value", ""))
