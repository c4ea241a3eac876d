"""
Snapshot Decoder.

The service serializes a tree as a flat array in pre-order: entry 0 is the
root and every entry names its children by index, with -1 for "no child".
This module turns that arena back into an owned tree of VisualNodes.

Decoding is iterative so a degenerate tree (every key inserted in order
into a plain BST) decodes at any depth, and it keeps a visited set so a
cyclic or shared reference fails instead of looping.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from .decorate import decorate
from .errors import MalformedSnapshot
from .highlight import highlight
from .result import Err, Ok, Result
from .types import ABSENT, ChildSide, NodeRecord, TreeSnapshot, TreeVariant, VisualNode

logger = logging.getLogger(__name__)


def _check_ref(ref: int, count: int, parent: int) -> None:
    if ref < 0 or ref >= count:
        raise MalformedSnapshot(
            f"Node {parent} references index {ref} outside of {count} nodes",
            index=ref,
        )


def _visit_order(nodes: Sequence[NodeRecord]) -> List[int]:
    """Pre-order list of reachable indices, validating every reference."""
    count = len(nodes)
    visited = set()
    order = []
    stack = [0]

    while stack:
        index = stack.pop()
        if index in visited:
            raise MalformedSnapshot(f"Index {index} is referenced more than once", index=index)
        visited.add(index)
        order.append(index)

        record = nodes[index]
        for ref in (record.right, record.left):
            if ref != ABSENT:
                _check_ref(ref, count, index)
                stack.append(ref)

    return order


def decode(
    nodes: Sequence[NodeRecord],
    variant: TreeVariant = TreeVariant.BINARY,
    target: Optional[int] = None,
) -> Optional[VisualNode]:
    """
    Rebuild the tree rooted at index 0.

    Args:
        nodes: The flat snapshot.
        variant: Tree kind, used for decoration.
        target: Value to highlight, if any.

    Returns:
        Optional[VisualNode]: The root, or None for an empty tree.

    Raises:
        MalformedSnapshot: A child reference is out of range or revisits a node.
    """
    if not nodes:
        return None

    order = _visit_order(nodes)
    built: Dict[int, VisualNode] = {}

    for index in reversed(order):
        record = nodes[index]
        children = []
        for ref, side in ((record.left, ChildSide.LEFT), (record.right, ChildSide.RIGHT)):
            if ref != ABSENT:
                children.append(built.pop(ref).model_copy(update={"side": side}))

        node = VisualNode(value=record.key, children=children)
        built[index] = decorate(node, record, variant)

    root = built[0]
    if len(order) < len(nodes):
        logger.debug("Snapshot has %d unreachable nodes", len(nodes) - len(order))

    return highlight(root, target) if target is not None else root


def parse_snapshot(payload: Any) -> TreeSnapshot:
    """Validate a raw ``GET /trees/{id}`` body."""
    try:
        return TreeSnapshot.model_validate(payload)
    except ValidationError as e:
        raise MalformedSnapshot(f"Snapshot does not match the node schema: {e}") from e


def render_snapshot(
    snapshot: TreeSnapshot,
    variant: Optional[TreeVariant] = None,
    target: Optional[int] = None,
) -> Result[Optional[VisualNode], MalformedSnapshot]:
    """
    Decode, decorate and highlight a snapshot.

    When no variant is given the snapshot's own ``type`` tag decides.
    Returns Ok(root), Ok(None) for an empty tree, or Err(MalformedSnapshot).
    """
    if variant is None:
        variant = TreeVariant.parse(snapshot.type)

    try:
        return Ok(decode(snapshot.nodes, variant, target))
    except MalformedSnapshot as e:
        logger.warning(f"Discarding malformed snapshot: {e.message}")
        return Err(e)
