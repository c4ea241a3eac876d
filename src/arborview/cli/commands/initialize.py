"""
Init Command - Write a starter configuration.

Creates ``.arborview/config.yaml`` in the current directory with the service
URL and log level, and keeps the directory out of git.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from ...config import DEFAULT_CONFIG_PATH, DEFAULT_SERVICE_URL, ArborviewConfig

console = Console()


def create_gitignore(config_dir: Path):
    """Ensure the config directory is ignored by git."""
    gitignore = config_dir.parent / ".gitignore"
    entry = f"\n# arborview\n{config_dir.name}/\n"

    if not gitignore.exists():
        with open(gitignore, "w") as f:
            f.write(entry)
    else:
        content = gitignore.read_text()
        if config_dir.name not in content:
            with open(gitignore, "a") as f:
                f.write(entry)


@click.command()
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
@click.option("--url", "service_url", help="Service URL to write (skips the prompt)")
def init(force: bool, service_url: Optional[str]):
    """
    Initialize arborview in the current directory.
    """
    console.print(Panel.fit("🌳 [bold green]arborview Initialization[/bold green]", border_style="green"))

    root_dir = Path.cwd()
    config_file = root_dir / DEFAULT_CONFIG_PATH

    if config_file.exists() and not force:
        console.print(f"[yellow]Configuration already exists at {config_file}[/yellow]")
        if not Confirm.ask("Do you want to overwrite it?"):
            console.print("Aborted.")
            return

    if service_url is None:
        service_url = Prompt.ask("Tree service URL", default=DEFAULT_SERVICE_URL)

    config = ArborviewConfig(service_url=service_url)

    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(config.to_yaml())
    create_gitignore(config_file.parent)

    console.print("\n✨ [bold green]Initialized successfully![/bold green]")
    console.print(f"   Config created at: [dim]{config_file}[/dim]")
