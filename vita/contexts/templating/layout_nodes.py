"""
Layout tree produced by the composer and consumed by rendering backends.

Nodes are immutable. Props hold plain values (str, int, float, bool, None,
tuples, dicts) plus RichText for rich-text nodes, so a tree can be snapshot
with to_dict() and compared across runs.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple


class NodeRole(str, Enum):
    PAGE = "page"
    HEADER = "header"
    COLUMN_SET = "column-set"
    COLUMN = "column"
    SECTION = "section"
    HEADING = "heading"
    ENTRY = "entry"
    RICH_TEXT = "rich-text"
    LIST = "list"
    TEXT = "text"
    BACKGROUND = "background"


@dataclass(frozen=True)
class LayoutNode:
    """
    One node of the page tree.

    Attributes:
        role: Node role (see NodeRole)
        key: Stable render key (section id, item id, column name)
        props: Role-specific properties
        children: Child nodes in render order
    """

    role: NodeRole
    key: str = ""
    props: Dict[str, Any] = field(default_factory=dict)
    children: Tuple["LayoutNode", ...] = ()

    def walk(self) -> Iterator["LayoutNode"]:
        """Pre-order traversal including self."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, role: NodeRole) -> List["LayoutNode"]:
        return [node for node in self.walk() if node.role == role]

    def find(self, role: NodeRole, key: Optional[str] = None) -> Optional["LayoutNode"]:
        for node in self.walk():
            if node.role == role and (key is None or node.key == key):
                return node
        return None

    def section_ids(self) -> List[str]:
        """Section ids in render order (depth-first, columns left to right)."""
        return [node.key for node in self.find_all(NodeRole.SECTION)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role.value,
            "key": self.key,
            "props": {name: _plain(value) for name, value in self.props.items()},
            "children": [child.to_dict() for child in self.children],
        }


def node(role: NodeRole, key: str = "", children=(), **props) -> LayoutNode:
    """Shorthand constructor; None-valued props are dropped."""
    return LayoutNode(
        role=role,
        key=key,
        props={name: value for name, value in props.items() if value is not None},
        children=tuple(child for child in children if child is not None),
    )


def _plain(value: Any) -> Any:
    """Convert prop values (including frozen dataclasses) to JSON-friendly data."""
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        data = {"type": type(value).__name__}
        data.update({f.name: _plain(getattr(value, f.name)) for f in fields(value)})
        return data
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted(_plain(item) for item in value)
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value
