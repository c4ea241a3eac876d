"""
arborview CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

from pathlib import Path
from typing import Optional

import click

from ..config import load_config
from .commands import initialize, nodes, shell, trees
from .utils import configure_logging, echo_error


@click.group()
@click.version_option(package_name="arborview")
@click.option("--url", help="Tree service base URL (overrides config)")
@click.option("--config", "config_file", type=click.Path(dir_okay=False, path_type=Path),
              help="Config file (default: .arborview/config.yaml)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, url: Optional[str], config_file: Optional[Path], verbose: bool):
    """arborview: browse and edit trees hosted by a tree service.

    \b
    Quick Start:
      arborview create red_black
      arborview insert 1 5
      arborview search 1 5
      arborview shell
    """
    try:
        config = load_config(config_file, service_url=url)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    configure_logging(config.log_level, verbose)
    ctx.obj = config


# Register commands
main.add_command(trees.list_trees, name="trees")
main.add_command(trees.create)
main.add_command(trees.show)
main.add_command(trees.delete)
main.add_command(nodes.insert)
main.add_command(nodes.remove)
main.add_command(nodes.search)
main.add_command(shell.shell)
main.add_command(initialize.init)

if __name__ == "__main__":
    main()
