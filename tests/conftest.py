"""
Shared fixtures.

FakeTreeService is an in-memory tree service answering the same JSON API as
the real one through httpx.MockTransport, so tests exercise the real client,
session and renderers end to end without a network.
"""

import io
import json
from typing import Any, Dict, List, Optional, Set, Tuple

import httpx
import pytest
from rich.console import Console

from arborview.core.client import TreeServiceClient
from arborview.render.console import ConsoleDisplay

BASE_URL = "http://trees.test"


def _bst_insert(root: Optional[dict], key: int) -> dict:
    node = {"key": key, "left": None, "right": None}
    if root is None:
        return node
    current = root
    while True:
        if key == current["key"]:
            return root
        side = "left" if key < current["key"] else "right"
        if current[side] is None:
            current[side] = node
            return root
        current = current[side]


def _serialize(node: dict, nodes: List[dict], variant: str, depth: int = 0) -> int:
    index = len(nodes)
    record: Dict[str, Any] = {"key": node["key"]}
    if variant == "red_black":
        record["color"] = "black" if depth % 2 == 0 else "red"
    if variant == "avl":
        record["height"] = depth + 1
    nodes.append(record)
    record["left"] = _serialize(node["left"], nodes, variant, depth + 1) if node["left"] else -1
    record["right"] = _serialize(node["right"], nodes, variant, depth + 1) if node["right"] else -1
    return index


class FakeTreeService:
    """Plain BST per tree; colors and heights are illustrative, not balanced."""

    def __init__(self):
        self.trees: Dict[str, dict] = {}
        self.requests: List[Tuple[str, str]] = []
        self.failing: Set[Tuple[str, str]] = set()
        self.snapshot_overrides: Dict[str, Any] = {}
        self._next_id = 0

    def add_tree(self, variant: str = "binary", keys=()) -> str:
        self._next_id += 1
        tree_id = str(self._next_id)
        self.trees[tree_id] = {"type": variant, "keys": list(keys)}
        return tree_id

    def snapshot(self, tree_id: str) -> dict:
        if tree_id in self.snapshot_overrides:
            return self.snapshot_overrides[tree_id]
        tree = self.trees[tree_id]
        root = None
        for key in tree["keys"]:
            root = _bst_insert(root, key)
        nodes: List[dict] = []
        if root is not None:
            _serialize(root, nodes, tree["type"])
        return {"type": f"{tree['type']}_tree", "nodes": nodes}

    def count(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r == (method, path))

    def handler(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        self.requests.append((method, path))
        if (method, path) in self.failing:
            return httpx.Response(500, json={"error": "Internal failure"})

        body = json.loads(request.content) if request.content else {}
        parts = path.strip("/").split("/")

        if parts == ["trees"]:
            if method == "GET":
                return httpx.Response(
                    200, json=[{"id": tid, "type": t["type"]} for tid, t in self.trees.items()]
                )
            if "type" not in body:
                return httpx.Response(400, json={"error": "Tree type is required"})
            tree_id = self.add_tree(body["type"])
            return httpx.Response(200, json={"id": tree_id, "type": body["type"]})

        tree_id = parts[1]
        if tree_id not in self.trees:
            return httpx.Response(404, json={"error": "Tree not found"})
        tree = self.trees[tree_id]

        if len(parts) == 2:
            if method == "DELETE":
                del self.trees[tree_id]
                return httpx.Response(200, json={"success": True})
            return httpx.Response(200, json=self.snapshot(tree_id))

        value = body["value"]
        action = parts[2]
        if action == "insert":
            if value not in tree["keys"]:
                tree["keys"].append(value)
        elif action == "remove":
            if value in tree["keys"]:
                tree["keys"].remove(value)
        elif action == "search":
            found = value in tree["keys"]
            return httpx.Response(
                200, json={"found": found, "treeModified": found and tree["type"] == "splay"}
            )
        return httpx.Response(200, json={"success": True})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> TreeServiceClient:
        return TreeServiceClient(BASE_URL, transport=self.transport)


@pytest.fixture
def service():
    return FakeTreeService()


@pytest.fixture
def display():
    return ConsoleDisplay(Console(file=io.StringIO(), width=100))
