"""
Session State Manager.

Owns which tree is selected and the single search-result banner, and drives
every user action through the same sequence: validate input, call the
service, re-fetch the authoritative snapshot, decode it, and hand the result
to a Display. Nothing is patched locally; the server snapshot is always the
source of truth.

Overlapping actions are not serialized. Each one re-fetches on completion,
so the last response to arrive decides what is shown, which can briefly be
older than the last mutation sent.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .client import TreeServiceClient
from .decoder import render_snapshot
from .errors import InputValidationError, InvalidValue, MalformedSnapshot, NoTreeSelected, TransportFailure
from .types import ResultBanner, TreeHandle, TreeVariant, VisualNode

logger = logging.getLogger(__name__)

NO_TREES = "No trees created yet"
SELECT_TREE = "Select a tree to visualize it"
TREE_EMPTY = "Tree is empty"
LOAD_ERROR = "Error loading tree data"

DELETE_PROMPT = "Are you sure you want to delete this tree?"

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_value(raw: object) -> int:
    """
    Accept a node value typed by the user.

    Integers pass through; strings must be a whole decimal integer once
    surrounding whitespace is stripped.

    Raises:
        InvalidValue: Anything else.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and _INTEGER.fullmatch(raw.strip()):
        try:
            return int(raw.strip())
        except ValueError:
            # Past the interpreter's int string conversion limit
            raise InvalidValue(raw) from None
    raise InvalidValue(raw)


class Display(ABC):
    """
    Surface a session renders into.

    Each setter replaces what was shown before; a display never accumulates
    more than one visualization or one banner.
    """

    @abstractmethod
    def show_tree_list(self, trees: List[TreeHandle], selected_id: Optional[str]) -> None:
        """Replace the tree list. An empty list shows the NO_TREES placeholder."""

    @abstractmethod
    def show_selected(self, tree_id: Optional[str]) -> None:
        """Update the current-tree field and the selection marker."""

    @abstractmethod
    def show_tree(self, root: VisualNode) -> None:
        """Replace the visualization with a rendered hierarchy."""

    @abstractmethod
    def show_placeholder(self, text: str) -> None:
        """Replace the visualization with a placeholder string."""

    @abstractmethod
    def show_banner(self, banner: Optional[ResultBanner]) -> None:
        """Replace the banner; None removes it."""

    @abstractmethod
    def warn(self, message: str) -> None:
        """Tell the user an action was refused."""


@dataclass
class SessionState:
    """
    Client-held session record.

    ``selected_tree_id`` is a weak reference: the tree may already be gone
    on the service.
    """
    selected_tree_id: Optional[str] = None
    active_banner: Optional[ResultBanner] = None
    trees: List[TreeHandle] = field(default_factory=list)

    def select(self, tree_id: str) -> None:
        if tree_id != self.selected_tree_id:
            self.active_banner = None
        self.selected_tree_id = tree_id

    def clear_selection(self) -> None:
        self.selected_tree_id = None
        self.active_banner = None

    def replace_banner(self, banner: ResultBanner) -> None:
        self.active_banner = banner

    def require_selection(self) -> str:
        if self.selected_tree_id is None:
            raise NoTreeSelected()
        return self.selected_tree_id

    def variant_of(self, tree_id: str) -> Optional[TreeVariant]:
        for handle in self.trees:
            if handle.id == tree_id:
                return handle.variant
        return None


class SessionManager:
    """
    Runs user actions against a tree service and keeps a Display current.

    Args:
        client: Tree service client.
        display: Where frames are rendered.
        confirm: Asked before a tree is deleted; returns True to proceed.
        state: Existing session state to continue, if any.
    """

    def __init__(
        self,
        client: TreeServiceClient,
        display: Display,
        confirm: Callable[[str], bool],
        state: Optional[SessionState] = None,
    ):
        self.client = client
        self.display = display
        self.confirm = confirm
        self.state = state or SessionState()

    def _prepare(self, raw_value: object) -> Optional[tuple]:
        """Validate selection and value; warn and return None on failure."""
        try:
            tree_id = self.state.require_selection()
            value = parse_value(raw_value)
        except InputValidationError as e:
            self.display.warn(e.message)
            return None
        return tree_id, value

    async def list_trees(self) -> bool:
        try:
            trees = await self.client.list_trees()
        except TransportFailure as e:
            logger.error(f"Error loading trees: {e}")
            return False

        self.state.trees = trees
        self.display.show_tree_list(trees, self.state.selected_tree_id)
        return True

    async def create_tree(self, variant: TreeVariant) -> bool:
        try:
            handle = await self.client.create_tree(variant)
        except TransportFailure as e:
            logger.error(f"Error creating tree: {e}")
            return False

        logger.info(f"Created {handle.label}")
        await self.list_trees()
        return await self.select_tree(handle.id)

    async def select_tree(self, tree_id: str) -> bool:
        if self.state.trees and self.state.variant_of(tree_id) is None:
            logger.warning(f"Tree {tree_id} is not in the last loaded list; selecting anyway")

        self.state.select(tree_id)
        logger.info(f"Selected tree {tree_id}")
        self.display.show_selected(tree_id)
        self.display.show_banner(self.state.active_banner)
        return await self.refresh()

    async def refresh(self, target: Optional[int] = None) -> bool:
        """
        Fetch and render the selected tree, highlighting ``target``.

        Returns False when the tree could not be shown; the visualization
        then holds the LOAD_ERROR placeholder.
        """
        tree_id = self.state.selected_tree_id
        if tree_id is None:
            self.display.show_placeholder(SELECT_TREE)
            return False

        try:
            snapshot = await self.client.get_snapshot(tree_id)
        except (TransportFailure, MalformedSnapshot) as e:
            logger.error(f"Error fetching tree data: {e}")
            self.display.show_placeholder(LOAD_ERROR)
            return False

        result = render_snapshot(snapshot, self.state.variant_of(tree_id), target)
        if result.is_err():
            self.display.show_placeholder(LOAD_ERROR)
            return False

        root = result.unwrap()
        if root is None:
            self.display.show_placeholder(TREE_EMPTY)
        else:
            self.display.show_tree(root)
        return True

    async def insert(self, raw_value: object) -> bool:
        prepared = self._prepare(raw_value)
        if prepared is None:
            return False
        tree_id, value = prepared

        try:
            await self.client.insert(tree_id, value)
        except TransportFailure as e:
            logger.error(f"Error inserting node: {e}")
            return False
        return await self.refresh()

    async def remove(self, raw_value: object) -> bool:
        prepared = self._prepare(raw_value)
        if prepared is None:
            return False
        tree_id, value = prepared

        try:
            await self.client.remove(tree_id, value)
        except TransportFailure as e:
            logger.error(f"Error removing node: {e}")
            return False
        return await self.refresh()

    async def search(self, raw_value: object) -> bool:
        prepared = self._prepare(raw_value)
        if prepared is None:
            return False
        tree_id, value = prepared

        try:
            outcome = await self.client.search(tree_id, value)
        except TransportFailure as e:
            logger.error(f"Error searching node: {e}")
            return False

        rendered = await self.refresh(target=value)

        banner = ResultBanner(found=outcome.found, value=value, tree_modified=outcome.tree_modified)
        self.state.replace_banner(banner)
        self.display.show_banner(banner)
        return rendered

    async def delete_tree(self) -> bool:
        try:
            tree_id = self.state.require_selection()
        except NoTreeSelected as e:
            self.display.warn(e.message)
            return False

        if not self.confirm(DELETE_PROMPT):
            return False

        try:
            await self.client.delete_tree(tree_id)
        except TransportFailure as e:
            logger.error(f"Error deleting tree: {e}")
            return False

        logger.info(f"Deleted tree {tree_id}")
        self.state.clear_selection()
        self.display.show_selected(None)
        self.display.show_banner(None)
        self.display.show_placeholder(SELECT_TREE)
        await self.list_trees()
        return True
