"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing, logging setup, and the glue that
opens a tree-service session for a command and renders its final frame.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional

import click
from rich.prompt import Confirm

from ..config import ArborviewConfig
from ..core.client import TreeServiceClient
from ..core.session import SessionManager
from ..render.console import ConsoleDisplay

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_info(message: str) -> None:
    click.echo(click.style(f"   {message}", dim=True))


def configure_logging(level: str, verbose: bool = False) -> None:
    """
    Configure the root logger once per process.

    Args:
        level (str): Level name from configuration.
        verbose (bool): Force DEBUG regardless of ``level``.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format=LOG_FORMAT,
    )


def confirm_prompt(question: str) -> bool:
    """Ask a yes/no question on the terminal; defaults to no."""
    return Confirm.ask(question, default=False)


@asynccontextmanager
async def open_session(
    config: ArborviewConfig,
    display: ConsoleDisplay,
    confirm: Optional[Callable[[str], bool]] = None,
) -> AsyncIterator[SessionManager]:
    """Open a client for the configured service and wrap it in a session."""
    async with TreeServiceClient(config.service_url, timeout=config.timeout) as client:
        yield SessionManager(client, display, confirm or confirm_prompt)


def run_action(
    config: ArborviewConfig,
    action: Callable[[SessionManager], Awaitable[bool]],
    display: Optional[ConsoleDisplay] = None,
    confirm: Optional[Callable[[str], bool]] = None,
    render: bool = True,
) -> bool:
    """
    Run one action inside a fresh session and print the resulting frame.

    Returns:
        bool: Whatever the action reported.
    """
    display = display or ConsoleDisplay()

    async def _run() -> bool:
        async with open_session(config, display, confirm) as session:
            return await action(session)

    ok = asyncio.run(_run())
    if render:
        display.render()
    return ok


async def select_existing(session: SessionManager, tree_id: str) -> bool:
    """Load the tree list (for variant lookup) and select ``tree_id``."""
    await session.list_trees()
    return await session.select_tree(tree_id)
