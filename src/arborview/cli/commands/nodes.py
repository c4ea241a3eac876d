"""
Node Commands - Insert, remove and search values in a tree.

VALUE is taken as text and validated by the session, so a malformed number
produces the same warning it would in the shell. Negative values can be
passed directly (``arborview insert 1 -5``).
"""

import sys

import click

from ...config import ArborviewConfig
from ...core.session import SessionManager
from ..utils import run_action, select_existing

_ARGS = {"ignore_unknown_options": True}


def _run_on_tree(config: ArborviewConfig, tree_id: str, operation: str, value: str) -> None:
    async def action(session: SessionManager) -> bool:
        await select_existing(session, tree_id)
        return await getattr(session, operation)(value)

    if not run_action(config, action):
        sys.exit(1)


@click.command(context_settings=_ARGS)
@click.argument("tree_id")
@click.argument("value")
@click.pass_obj
def insert(config: ArborviewConfig, tree_id: str, value: str):
    """Insert VALUE into tree TREE_ID."""
    _run_on_tree(config, tree_id, "insert", value)


@click.command(context_settings=_ARGS)
@click.argument("tree_id")
@click.argument("value")
@click.pass_obj
def remove(config: ArborviewConfig, tree_id: str, value: str):
    """Remove VALUE from tree TREE_ID."""
    _run_on_tree(config, tree_id, "remove", value)


@click.command(context_settings=_ARGS)
@click.argument("tree_id")
@click.argument("value")
@click.pass_obj
def search(config: ArborviewConfig, tree_id: str, value: str):
    """
    Search tree TREE_ID for VALUE.

    Matching nodes are highlighted and the result is shown below the tree.
    Self-adjusting trees (splay) may change shape as a result.
    """
    _run_on_tree(config, tree_id, "search", value)
