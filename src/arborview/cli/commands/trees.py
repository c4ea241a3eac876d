"""
Tree Commands - List, create, show and delete trees.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from ...config import ArborviewConfig
from ...core.session import SessionManager
from ...core.types import TreeVariant, VisualNode
from ...render.console import ConsoleDisplay
from ...render.html import export_html
from ..utils import echo_info, echo_success, run_action, select_existing

VARIANT_CHOICE = click.Choice([str(v) for v in TreeVariant], case_sensitive=False)


@click.command()
@click.pass_obj
def list_trees(config: ArborviewConfig):
    """List the trees hosted by the service."""
    display = ConsoleDisplay()

    async def action(session: SessionManager) -> bool:
        return await session.list_trees()

    if not run_action(config, action, display, render=False):
        sys.exit(1)
    display.console.print(display.list_panel())


@click.command()
@click.argument("variant", type=VARIANT_CHOICE)
@click.pass_obj
def create(config: ArborviewConfig, variant: str):
    """
    Create a tree of the given VARIANT and show it.
    """
    async def action(session: SessionManager) -> bool:
        return await session.create_tree(TreeVariant(variant.lower()))

    display = ConsoleDisplay()
    ok = run_action(config, action, display)
    if display.selected_id is not None:
        echo_success(f"Created tree {display.selected_id}")
    if not ok:
        sys.exit(1)


@click.command()
@click.argument("tree_id")
@click.option("-s", "--search", "target", type=int, help="Highlight nodes with this value")
@click.option("--html", "html_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Also write the tree as an HTML page")
@click.option("--open", "open_browser", is_flag=True, help="Open the HTML page in a browser")
@click.option("--json", "as_json", is_flag=True,
              help="Print the rendered nodes as JSON (pre-order, children by index)")
@click.pass_obj
def show(
    config: ArborviewConfig,
    tree_id: str,
    target: Optional[int],
    html_path: Optional[Path],
    open_browser: bool,
    as_json: bool,
):
    """
    Render a tree.

    With --search the matching nodes are highlighted; the service is not
    asked to search, so self-adjusting trees keep their shape.
    """
    display = ConsoleDisplay()

    async def action(session: SessionManager) -> bool:
        ok = await select_existing(session, tree_id)
        if ok and target is not None:
            ok = await session.refresh(target=target)
        return ok

    ok = run_action(config, action, display, render=not as_json)
    visualization = display.visualization

    if as_json:
        is_tree = isinstance(visualization, VisualNode)
        click.echo(json.dumps({
            "tree_id": tree_id,
            "nodes": visualization.flatten() if is_tree else [],
            "placeholder": None if is_tree else visualization,
        }))

    if html_path is not None:
        export_html(html_path, visualization, title=f"Tree {tree_id}", open_browser=open_browser)
        if not as_json:
            echo_success(f"Generated: {html_path}")
            echo_info(f"Open: file://{html_path.absolute()}")

    if not ok:
        sys.exit(1)


@click.command()
@click.argument("tree_id")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def delete(config: ArborviewConfig, tree_id: str, yes: bool):
    """Delete a tree from the service."""
    async def action(session: SessionManager) -> bool:
        await session.list_trees()
        # Selecting only records the id here; the tree is about to go away.
        session.state.select(tree_id)
        return await session.delete_tree()

    confirm = (lambda question: True) if yes else None
    display = ConsoleDisplay()
    if not run_action(config, action, display, confirm=confirm):
        sys.exit(1)
    echo_success(f"Deleted tree {tree_id}")
