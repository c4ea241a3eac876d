"""
Tree Service Client.

Async wrapper around the tree service's JSON API. Every way a call can go
wrong (connection errors, non-2xx statuses, bodies that are not JSON or do
not match the expected shape) surfaces as a single TransportFailure, so
callers only ever handle one exception type for the network.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from .decoder import parse_snapshot
from .errors import TransportFailure
from .types import SearchOutcome, TreeHandle, TreeSnapshot, TreeVariant

logger = logging.getLogger(__name__)


class TreeServiceClient:
    """
    Client for one tree service.

    Args:
        base_url: Service root, e.g. ``http://localhost:8080``.
        timeout: Seconds per request, or None to wait indefinitely.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "TreeServiceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        logger.debug(f"{method} {path} {json if json is not None else ''}".rstrip())
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise TransportFailure(f"{method} {path} failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            detail = body.get("error") if isinstance(body, dict) else None
            raise TransportFailure(
                f"{method} {path} was rejected: {detail or response.reason_phrase}",
                status_code=response.status_code,
            )
        if body is None:
            raise TransportFailure(f"{method} {path} returned a body that is not JSON")

        return body

    async def list_trees(self) -> List[TreeHandle]:
        body = await self._request("GET", "/trees")
        try:
            return [TreeHandle.model_validate(item) for item in body]
        except (TypeError, ValidationError) as e:
            raise TransportFailure(f"GET /trees returned an unexpected body: {e}") from e

    async def create_tree(self, variant: TreeVariant) -> TreeHandle:
        body = await self._request("POST", "/trees", json={"type": str(variant)})
        if isinstance(body, dict):
            body = {"type": str(variant), **body}
        try:
            return TreeHandle.model_validate(body)
        except ValidationError as e:
            raise TransportFailure(f"POST /trees returned an unexpected body: {e}") from e

    async def get_snapshot(self, tree_id: str) -> TreeSnapshot:
        """
        Fetch a tree's nodes.

        Raises:
            TransportFailure: The call failed.
            MalformedSnapshot: The body arrived but is not a snapshot.
        """
        body = await self._request("GET", f"/trees/{tree_id}")
        return parse_snapshot(body)

    async def insert(self, tree_id: str, value: int) -> None:
        await self._request("POST", f"/trees/{tree_id}/insert", json={"value": value})

    async def remove(self, tree_id: str, value: int) -> None:
        await self._request("POST", f"/trees/{tree_id}/remove", json={"value": value})

    async def search(self, tree_id: str, value: int) -> SearchOutcome:
        body = await self._request("POST", f"/trees/{tree_id}/search", json={"value": value})
        try:
            return SearchOutcome.model_validate(body)
        except ValidationError as e:
            raise TransportFailure(f"Search returned an unexpected body: {e}") from e

    async def delete_tree(self, tree_id: str) -> None:
        await self._request("DELETE", f"/trees/{tree_id}")
