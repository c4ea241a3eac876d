"""Display surfaces: rich terminal frames and standalone HTML pages."""

from .console import ConsoleDisplay, build_tree
from .html import export_html, generate_html

__all__ = ["ConsoleDisplay", "build_tree", "export_html", "generate_html"]
