"""
Terminal display built on rich.

ConsoleDisplay keeps the current frame (tree list, selected id,
visualization, banner) and renders it as one group of panels. Every setter
replaces its slot, so printing the frame after an action shows the new state
wholesale.
"""

from typing import List, Optional, Union

from rich.console import Console, Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ..core.session import NO_TREES, SELECT_TREE, Display
from ..core.types import ChildSide, NodeColor, ResultBanner, TreeHandle, VisualNode

NODE_STYLES = {
    NodeColor.RED: "bold white on red",
    NodeColor.BLACK: "bold white on grey23",
}
HIGHLIGHT_STYLE = "bold black on yellow"


def node_label(node: VisualNode) -> Text:
    """Label for a single node: side marker, value, annotations."""
    label = Text()
    if node.side is not None:
        label.append("L " if node.side == ChildSide.LEFT else "R ", style="dim")

    style = HIGHLIGHT_STYLE if node.is_highlighted else NODE_STYLES.get(node.color, "bold")
    label.append(f" {node.value} ", style=style)

    if node.height is not None:
        label.append(f" h={node.height}", style="dim")
    if node.is_highlighted:
        label.append(" ◀", style="yellow")
    return label


def build_tree(root: VisualNode) -> Tree:
    """Convert a VisualNode hierarchy into a rich Tree."""
    tree = Tree(node_label(root), guide_style="dim")
    stack = [(root, tree)]
    while stack:
        node, branch = stack.pop()
        for child in node.children:
            stack.append((child, branch.add(node_label(child))))
    return tree


class ConsoleDisplay(Display):
    """Display that renders frames to a rich Console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.trees: List[TreeHandle] = []
        self.selected_id: Optional[str] = None
        self.visualization: Union[VisualNode, str] = SELECT_TREE
        self.banner: Optional[ResultBanner] = None
        self.warnings: List[str] = []

    def show_tree_list(self, trees: List[TreeHandle], selected_id: Optional[str]) -> None:
        self.trees = list(trees)
        self.selected_id = selected_id

    def show_selected(self, tree_id: Optional[str]) -> None:
        self.selected_id = tree_id

    def show_tree(self, root: VisualNode) -> None:
        self.visualization = root

    def show_placeholder(self, text: str) -> None:
        self.visualization = text

    def show_banner(self, banner: Optional[ResultBanner]) -> None:
        self.banner = banner

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        self.console.print(f"[yellow]⚠️  {escape(message)}[/yellow]")

    def _tree_list(self) -> RenderableType:
        if not self.trees:
            return Text(NO_TREES, style="dim")

        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("", width=1)
        table.add_column("Type")
        table.add_column("ID")
        for handle in self.trees:
            marker = "▶" if handle.id == self.selected_id else ""
            style = "bold cyan" if handle.id == self.selected_id else None
            table.add_row(marker, str(handle.variant), handle.id, style=style)
        return table

    def _visualization(self) -> RenderableType:
        if isinstance(self.visualization, VisualNode):
            return build_tree(self.visualization)
        return Text(self.visualization, style="dim")

    def list_panel(self) -> Panel:
        return Panel(self._tree_list(), title="Trees", border_style="blue")

    def frame(self) -> RenderableType:
        """The whole current frame as one renderable."""
        parts: List[RenderableType] = [
            self.list_panel(),
            Text.assemble(("Current tree: ", "bold"), self.selected_id or "None"),
            Panel(self._visualization(), title="Visualization", border_style="green"),
        ]
        if self.banner is not None:
            style = "green" if self.banner.found else "red"
            parts.append(Panel(self.banner.message, border_style=style))
        return Group(*parts)

    def render(self) -> None:
        self.console.print(self.frame())
