# FILE: src/arborview/render/html.py
"""
HTML export.

Renders a VisualNode hierarchy as nested divs inside a standalone page:

    div.tree-node
      div.node-value (+ red-node / black-node / highlight)
      div.node-children
        div.child-branch.left-branch
        div.child-branch.right-branch

Both branches are always emitted when a node has any child so that a lone
child stays on its own side.
"""

import html
import webbrowser
from pathlib import Path
from typing import List, Optional, Union

from ..core.session import SELECT_TREE
from ..core.types import ChildSide, NodeColor, ResultBanner, VisualNode

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{
            margin: 0;
            padding: 24px;
            background: #0a0a0a;
            color: #fafafa;
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
        }}
        h1 {{ font-size: 16px; font-weight: 700; }}
        .tree-container {{ display: flex; justify-content: center; overflow: auto; }}
        .tree-node {{ display: flex; flex-direction: column; align-items: center; }}
        .node-value {{
            min-width: 36px;
            padding: 6px 8px;
            margin: 6px;
            border-radius: 18px;
            border: 1px solid #525252;
            background: #171717;
            text-align: center;
            font-family: "SF Mono", "Fira Code", monospace;
        }}
        .node-value .height {{ font-size: 10px; color: #a1a1aa; margin-left: 4px; }}
        .red-node {{ background: #ef4444; border-color: #ef4444; }}
        .black-node {{ background: #262626; border-color: #fafafa; }}
        .highlight {{ outline: 3px solid #f59e0b; }}
        .node-children {{ display: flex; gap: 12px; }}
        .child-branch {{ display: flex; justify-content: center; min-width: 24px; }}
        .placeholder {{ color: #71717a; text-align: center; }}
        .search-result {{ margin-top: 16px; padding: 8px 12px; border-radius: 6px; }}
        .search-found {{ background: rgba(34, 197, 94, 0.15); border: 1px solid #22c55e; }}
        .search-not-found {{ background: rgba(239, 68, 68, 0.15); border: 1px solid #ef4444; }}
    </style>
</head>
<body>
    <h1>{title}</h1>
    <div id="tree-visualization">{body}</div>
    {banner}
</body>
</html>
"""


def _value_div(node: VisualNode) -> str:
    classes = ["node-value"]
    if node.color == NodeColor.RED:
        classes.append("red-node")
    elif node.color == NodeColor.BLACK:
        classes.append("black-node")
    if node.is_highlighted:
        classes.append("highlight")

    height = f'<span class="height">h{node.height}</span>' if node.height is not None else ""
    return f'<div class="{" ".join(classes)}">{node.value}{height}</div>'


def render_nodes(root: VisualNode) -> str:
    """Nested div markup for a hierarchy."""
    parts: List[str] = []
    # Stack holds either markup to emit or a node still to expand.
    stack: List[Union[str, VisualNode]] = [root]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        pending: List[Union[str, VisualNode]] = ['<div class="tree-node">', _value_div(item)]
        if item.children:
            pending.append('<div class="node-children">')
            for side in (ChildSide.LEFT, ChildSide.RIGHT):
                pending.append(f'<div class="child-branch {side}-branch">')
                child = item.child(side)
                if child is not None:
                    pending.append(child)
                pending.append("</div>")
            pending.append("</div>")
        pending.append("</div>")
        stack.extend(reversed(pending))

    return "".join(parts)


def generate_html(
    visualization: Union[VisualNode, str],
    title: str = "arborview",
    banner: Optional[ResultBanner] = None,
) -> str:
    """
    Build a standalone page for a hierarchy or a placeholder string.
    """
    if isinstance(visualization, VisualNode):
        body = f'<div class="tree-container">{render_nodes(visualization)}</div>'
    else:
        body = f'<div class="placeholder">{html.escape(visualization or SELECT_TREE)}</div>'

    banner_html = ""
    if banner is not None:
        banner_html = f'<div class="search-result {banner.css_class}">{html.escape(banner.message)}</div>'

    return HTML_TEMPLATE.format(title=html.escape(title), body=body, banner=banner_html)


def export_html(
    path: Path,
    visualization: Union[VisualNode, str],
    title: str = "arborview",
    banner: Optional[ResultBanner] = None,
    open_browser: bool = False,
) -> Path:
    """Write the page to ``path`` and optionally open it."""
    path.write_text(generate_html(visualization, title, banner), encoding="utf-8")
    if open_browser:
        webbrowser.open(f"file://{path.absolute()}")
    return path
