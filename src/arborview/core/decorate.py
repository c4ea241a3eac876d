"""
Variant-specific decoration.

The service has shipped red-black colors both as strings and as numeric
enum values, so color decoding accepts a closed set of red tokens and treats
everything else as black.
"""

from typing import Any

from .types import NodeColor, NodeRecord, TreeVariant, VisualNode

RED_TOKENS = frozenset({"RED", "red"})


def decode_color(raw: Any) -> NodeColor:
    """
    Map a raw color token to a NodeColor.

    ``"RED"``, ``"red"`` and the number 0 are red. Booleans are not numbers
    here, so ``False`` is black.
    """
    if isinstance(raw, str):
        return NodeColor.RED if raw in RED_TOKENS else NodeColor.BLACK
    if isinstance(raw, (int, float)) and not isinstance(raw, bool) and raw == 0:
        return NodeColor.RED
    return NodeColor.BLACK


def decorate(node: VisualNode, record: NodeRecord, variant: TreeVariant) -> VisualNode:
    """Return ``node`` with the attributes its variant calls for."""
    if variant == TreeVariant.RED_BLACK and record.has_color:
        return node.model_copy(update={"color": decode_color(record.color)})
    if variant == TreeVariant.AVL and record.height is not None:
        return node.model_copy(update={"height": record.height})
    return node
