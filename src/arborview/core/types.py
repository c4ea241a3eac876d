"""
Core type definitions for arborview.

Wire models (TreeHandle, NodeRecord, TreeSnapshot, SearchOutcome) mirror the
JSON the tree service speaks. VisualNode and ResultBanner are client-side
values derived from them and never sent anywhere.
"""

from enum import StrEnum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Child reference meaning "no child" in a snapshot
ABSENT = -1


class TreeVariant(StrEnum):
    """Tree kinds the service can host."""
    BINARY = "binary"
    RED_BLACK = "red_black"
    AVL = "avl"
    SPLAY = "splay"
    SCAPEGOAT = "scapegoat"
    BB_ALPHA = "bb_alpha"

    @classmethod
    def parse(cls, raw: Any) -> "TreeVariant":
        """
        Normalize a variant tag from the wire.

        The list endpoint says ``red_black`` while snapshots say
        ``red_black_tree``; both land on the same member. Unknown tags
        fall back to BINARY so they render without decoration.
        """
        if isinstance(raw, TreeVariant):
            return raw
        tag = str(raw or "").strip().lower()
        if tag.endswith("_tree"):
            tag = tag[: -len("_tree")]
        try:
            return cls(tag)
        except ValueError:
            return cls.BINARY


class NodeColor(StrEnum):
    RED = "red"
    BLACK = "black"


class ChildSide(StrEnum):
    LEFT = "left"
    RIGHT = "right"


class TreeHandle(BaseModel):
    """A tree instance living on the service."""
    id: str
    variant: TreeVariant = Field(default=TreeVariant.BINARY, alias="type")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("variant", mode="before")
    @classmethod
    def _coerce_variant(cls, value: Any) -> TreeVariant:
        return TreeVariant.parse(value)

    @property
    def label(self) -> str:
        return f"{self.variant} ({self.id})"


class NodeRecord(BaseModel):
    """
    One entry of a flat snapshot.

    ``color`` is kept raw; whether it was sent at all is tracked through
    ``model_fields_set`` so that an explicit null is still "present".
    """
    key: int
    left: int = ABSENT
    right: int = ABSENT
    color: Any = None
    height: Optional[int] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @property
    def has_color(self) -> bool:
        return "color" in self.model_fields_set


class TreeSnapshot(BaseModel):
    """Body of ``GET /trees/{id}``."""
    type: Optional[str] = None
    nodes: List[NodeRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class SearchOutcome(BaseModel):
    """Body of ``POST /trees/{id}/search``."""
    found: bool = False
    tree_modified: bool = Field(default=False, alias="treeModified")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class VisualNode(BaseModel):
    """
    Rendered node. Children are ordered left first, then right; ``side``
    records which branch a node hangs from so a lone child keeps its place.
    """
    value: int
    is_highlighted: bool = False
    color: Optional[NodeColor] = None
    height: Optional[int] = None
    side: Optional[ChildSide] = None
    children: List["VisualNode"] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def walk(self) -> Iterator["VisualNode"]:
        """Pre-order traversal without recursion."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def flatten(self) -> List[Dict[str, Any]]:
        """
        Pre-order list of plain dicts, children linked by index (ABSENT when
        missing), root at index 0. Safe for trees of any depth.
        """
        records: List[Dict[str, Any]] = []
        stack: List[Tuple["VisualNode", Optional[int]]] = [(self, None)]
        while stack:
            node, parent = stack.pop()
            index = len(records)
            records.append({
                "value": node.value,
                "is_highlighted": node.is_highlighted,
                "color": None if node.color is None else str(node.color),
                "height": node.height,
                "side": None if node.side is None else str(node.side),
                "left": ABSENT,
                "right": ABSENT,
            })
            if parent is not None:
                records[parent][str(node.side or ChildSide.LEFT)] = index
            stack.extend((child, index) for child in reversed(node.children))
        return records

    def child(self, side: ChildSide) -> Optional["VisualNode"]:
        return next((c for c in self.children if c.side == side), None)

    @property
    def size(self) -> int:
        return sum(1 for _ in self.walk())


class ResultBanner(BaseModel):
    """Outcome of the most recent search, shown until replaced."""
    found: bool
    value: int
    tree_modified: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def message(self) -> str:
        if not self.found:
            return f"Value {self.value} not found in the tree."
        text = f"Found {self.value} in the tree!"
        if self.tree_modified:
            text += " (Tree structure updated)"
        return text

    @property
    def css_class(self) -> str:
        return "search-found" if self.found else "search-not-found"


VisualNode.model_rebuild()
