"""Async Notion API client."""

from collections.abc import AsyncIterator
from typing import Any

import httpx

from notion_random_data.exceptions import (
    APIErrorCode,
    ClientErrorCode,
    NotionAPIError,
    NotionClientError,
    RateLimitError,
    RequestTimeoutError,
    UnknownHTTPResponseError,
)
from notion_random_data.models import CreateDatabaseOptions, UpdateDatabaseOptions

NOTION_API_BASE = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"


class NotionClient:
    """Async client for the Notion REST API.

    Each call is a single request. Failures are classified into the
    exceptions in :mod:`notion_random_data.exceptions` and never retried.
    """

    def __init__(
        self,
        token: str,
        timeout: float = 30.0,
        base_url: str = NOTION_API_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token
        self.timeout = timeout
        self.base_url = base_url
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Notion-Version": NOTION_VERSION,
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    def _raise_for_response(self, response: httpx.Response) -> None:
        """Translate an error response into a client exception."""
        try:
            body = response.json()
        except ValueError:
            raise UnknownHTTPResponseError(response.status_code, response.text) from None

        if not isinstance(body, dict) or body.get("object") != "error":
            raise UnknownHTTPResponseError(response.status_code, response.text)

        try:
            code = APIErrorCode(body.get("code"))
        except ValueError:
            raise UnknownHTTPResponseError(response.status_code, response.text) from None

        message = body.get("message", "")
        if code is APIErrorCode.RATE_LIMITED:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(int(retry_after) if retry_after and retry_after.isdigit() else None, message)
        raise NotionAPIError(response.status_code, code, message)

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict | None = None,
        json: dict | None = None,
    ) -> dict:
        """Make authenticated API request."""
        client = await self._get_client()

        try:
            response = await client.request(method, endpoint, params=params, json=json)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(self.timeout) from e
        except httpx.HTTPError as e:
            raise NotionClientError(ClientErrorCode.RESPONSE_ERROR, f"Notion API request failed: {e}") from e

        if response.status_code >= 400:
            self._raise_for_response(response)

        return response.json()

    async def get_database(self, database_id: str) -> dict:
        """Retrieve a database, including its property schema."""
        return await self._request("GET", f"/databases/{database_id}")

    async def create_database(self, options: CreateDatabaseOptions | dict) -> dict:
        """Create a database as a child of a page."""
        body = options.to_request() if isinstance(options, CreateDatabaseOptions) else options
        return await self._request("POST", "/databases", json=body)

    async def update_database(self, database_id: str, options: UpdateDatabaseOptions | dict) -> dict:
        """Update title, description, archived flag or properties of a database."""
        body = options.to_request() if isinstance(options, UpdateDatabaseOptions) else options
        return await self._request("PATCH", f"/databases/{database_id}", json=body)

    async def query_database(
        self,
        database_id: str,
        filter: dict | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict:
        """Query one page of database results."""
        body: dict[str, Any] = {}
        if filter is not None:
            body["filter"] = filter
        if start_cursor:
            body["start_cursor"] = start_cursor
        if page_size:
            body["page_size"] = page_size
        return await self._request("POST", f"/databases/{database_id}/query", json=body)

    async def query_database_all(self, database_id: str, filter: dict | None = None) -> AsyncIterator[dict]:
        """Iterate over every page in a database, following cursors."""
        start_cursor = None
        while True:
            result = await self.query_database(database_id, filter=filter, start_cursor=start_cursor)
            for page in result.get("results", []):
                yield page

            if not result.get("has_more"):
                break
            start_cursor = result.get("next_cursor")
            if not start_cursor:
                break

    async def get_page(self, page_id: str) -> dict:
        """Retrieve a page."""
        return await self._request("GET", f"/pages/{page_id}")

    async def create_page(self, database_id: str, properties: dict) -> dict:
        """Create a page in a database."""
        return await self._request(
            "POST",
            "/pages",
            json={"parent": {"database_id": database_id}, "properties": properties},
        )

    async def get_page_property(self, page_id: str, property_id: str) -> dict:
        """Retrieve a page property item.

        Paginated properties (title, rich_text, people, relation, rollup
        arrays) come back as a ``list`` object; all of its pages are
        collected into the ``results`` of the returned response.
        """
        endpoint = f"/pages/{page_id}/properties/{property_id}"
        response = await self._request("GET", endpoint)
        if response.get("object") != "list":
            return response

        results = list(response.get("results", []))
        page = response
        while page.get("has_more") and page.get("next_cursor"):
            page = await self._request("GET", endpoint, params={"start_cursor": page["next_cursor"]})
            results.extend(page.get("results", []))

        return {**response, "results": results, "has_more": False, "next_cursor": None}
