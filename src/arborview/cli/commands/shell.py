"""
Shell Command - Interactive session.

Keeps one SessionState alive across commands, the way a single open page
would: select a tree once, then insert, remove and search against it.
"""

import asyncio
import shlex
from typing import Awaitable, Callable, Dict, List

import click
from rich.console import Console

from ...config import ArborviewConfig
from ...core.session import SessionManager
from ...core.types import TreeVariant
from ...render.console import ConsoleDisplay
from ..utils import open_session

HELP = """[bold]Commands[/bold]
  list                 Reload the tree list
  create <variant>     Create a tree ({variants})
  select <id>          Select and show a tree
  insert <value>       Insert into the selected tree
  remove <value>       Remove from the selected tree
  search <value>       Search the selected tree
  delete               Delete the selected tree
  help                 Show this message
  quit                 Leave the shell"""

PROMPT = "[bold cyan]arborview>[/bold cyan] "

Handler = Callable[[SessionManager, List[str]], Awaitable[bool]]


def _first(args: List[str]) -> str:
    return args[0] if args else ""


async def _list(session: SessionManager, args: List[str]) -> bool:
    return await session.list_trees()


async def _create(session: SessionManager, args: List[str]) -> bool:
    raw = _first(args).lower()
    if raw not in {str(v) for v in TreeVariant}:
        session.display.warn(f"Usage: create <{'|'.join(TreeVariant)}>")
        return False
    return await session.create_tree(TreeVariant(raw))


async def _select(session: SessionManager, args: List[str]) -> bool:
    if not args:
        session.display.warn("Usage: select <id>")
        return False
    return await session.select_tree(args[0])


async def _insert(session: SessionManager, args: List[str]) -> bool:
    return await session.insert(_first(args))


async def _remove(session: SessionManager, args: List[str]) -> bool:
    return await session.remove(_first(args))


async def _search(session: SessionManager, args: List[str]) -> bool:
    return await session.search(_first(args))


async def _delete(session: SessionManager, args: List[str]) -> bool:
    return await session.delete_tree()


ACTIONS: Dict[str, Handler] = {
    "list": _list,
    "create": _create,
    "select": _select,
    "insert": _insert,
    "remove": _remove,
    "search": _search,
    "delete": _delete,
}


async def repl(config: ArborviewConfig, console: Console) -> None:
    """Read commands until ``quit`` or end of input."""
    display = ConsoleDisplay(console)
    async with open_session(config, display) as session:
        await session.list_trees()
        display.render()

        while True:
            try:
                line = console.input(PROMPT)
            except EOFError:
                break

            try:
                words = shlex.split(line)
            except ValueError as e:
                display.warn(f"Could not parse command: {e}")
                continue
            if not words:
                continue

            name, args = words[0].lower(), words[1:]
            if name in ("quit", "exit"):
                break
            if name == "help":
                console.print(HELP.format(variants=", ".join(TreeVariant)))
                continue

            handler = ACTIONS.get(name)
            if handler is None:
                display.warn(f"Unknown command: {name} (try 'help')")
                continue

            await handler(session, args)
            display.render()


@click.command()
@click.pass_obj
def shell(config: ArborviewConfig):
    """Start an interactive session against the tree service."""
    console = Console()
    console.print(f"Connected to [bold]{config.service_url}[/bold]. Type 'help' for commands.")
    asyncio.run(repl(config, console))
