"""
Search highlight overlay.

Marks nodes by value equality. This is not a trace of the path the service
walked; duplicate keys are all marked.
"""

from typing import Dict, Optional

from .types import VisualNode


def highlight(root: VisualNode, target: Optional[int]) -> VisualNode:
    """
    Return a copy of ``root`` where exactly the nodes equal to ``target``
    are highlighted. With no target every mark is cleared.
    """
    order = list(root.walk())
    rebuilt: Dict[int, VisualNode] = {}

    # Children come after their parent in pre-order, so reversed order
    # rebuilds every subtree before the node that owns it.
    for node in reversed(order):
        children = [rebuilt[id(child)] for child in node.children]
        marked = target is not None and node.value == target
        rebuilt[id(node)] = node.model_copy(
            update={"is_highlighted": marked, "children": children}
        )

    return rebuilt[id(root)]
