"""
arborview - viewer and controller for server-hosted binary trees.

Fetches index-linked node snapshots from a tree service, rebuilds them into a
nested hierarchy, and renders that hierarchy to the terminal or to HTML.
"""

__version__ = "0.1.0"
