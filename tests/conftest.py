"""
Shared pytest fixtures for notion-random-data tests.

Provides fixtures for:
- A seeded Faker instance
- An in-memory Notion API served through httpx.MockTransport
- A NotionClient wired to it
"""

import itertools
import json
import re
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest
from faker import Faker

from notion_random_data.notion.client import NotionClient


def error_response(status_code: int, code: str, message: str) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"object": "error", "status": status_code, "code": code, "message": message},
    )


def _text(items: list[dict]) -> str:
    return "".join(item.get("text", {}).get("content", "") for item in items or [])


def _rich_text(content: str) -> list[dict]:
    return [{"type": "text", "text": {"content": content}, "plain_text": content}]


class FakeNotion:
    """Just enough of the Notion API to run the examples against."""

    PAGINATED = {"title", "rich_text", "people", "relation"}

    def __init__(self):
        self.databases: dict[str, dict] = {}
        self.pages: dict[str, dict] = {}
        self.values: dict[tuple[str, str], dict] = {}
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)

    def _id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def _schema_property(self, name: str, schema: dict) -> dict:
        prop_type, payload = next(iter(schema.items()))
        payload = dict(payload)
        if "options" in payload:
            payload["options"] = [
                {"id": self._id("opt"), "color": "default", **option} for option in payload["options"]
            ]
        return {"id": self._id("prop"), "name": name, "type": prop_type, prop_type: payload}

    def add_database(self, properties: dict, title: str = "db") -> dict:
        database = {
            "object": "database",
            "id": self._id("db"),
            "title": _rich_text(title),
            "description": [],
            "properties": {name: self._schema_property(name, schema) for name, schema in properties.items()},
        }
        self.databases[database["id"]] = database
        return database

    def add_page(self, database_id: str, values: dict, created_time: datetime | None = None) -> dict:
        created_time = created_time or datetime.now(timezone.utc)
        database = self.databases[database_id]
        page = {
            "object": "page",
            "id": self._id("page"),
            "url": "https://www.notion.so/page",
            "created_time": created_time.isoformat().replace("+00:00", "Z"),
            "parent": {"database_id": database_id},
            "properties": {},
        }
        for name, prop in database["properties"].items():
            page["properties"][name] = {"id": prop["id"], "type": prop["type"]}
            value = values.get(name, {}).get(prop["type"])
            self.values[(page["id"], prop["id"])] = value
        self.pages[page["id"]] = page
        return page

    def _property_item(self, page_id: str, prop: dict) -> dict:
        prop_type = prop["type"]
        value = self.values.get((page_id, prop["id"]))
        if prop_type in ("title", "rich_text"):
            results = [
                {"object": "property_item", "type": prop_type, prop_type: {"plain_text": item["text"]["content"]}}
                for item in value or []
            ]
            return {"object": "list", "results": results, "has_more": False, "next_cursor": None}
        return {"object": "property_item", "id": prop["id"], "type": prop_type, prop_type: value}

    def _matches(self, page: dict, filter: dict | None) -> bool:
        if not filter:
            return True
        database = self.databases[page["parent"]["database_id"]]
        for name, prop in database["properties"].items():
            if filter["property"] not in (name, prop["id"]):
                continue
            value = self.values.get((page["id"], prop["id"]))
            if "select" in filter:
                return bool(value) and value["name"] == filter["select"]["equals"]
            if "rich_text" in filter:
                return filter["rich_text"]["contains"] in _text(value)
        return False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1")
        body = json.loads(request.content) if request.content else {}

        if request.method == "POST" and path == "/databases":
            properties = {name: schema for name, schema in body["properties"].items()}
            database = self.add_database(properties, _text(body["title"]))
            database["parent"] = body["parent"]
            database["description"] = _rich_text(_text(body.get("description", [])))
            return httpx.Response(200, json=database)

        if match := re.fullmatch(r"/databases/([^/]+)", path):
            database = self.databases.get(match[1])
            if database is None:
                return error_response(404, "object_not_found", f"Could not find database with ID: {match[1]}")
            if request.method == "PATCH":
                if "title" in body:
                    database["title"] = _rich_text(_text(body["title"]))
                if "description" in body:
                    database["description"] = _rich_text(_text(body["description"]))
                for name, schema in body.get("properties", {}).items():
                    database["properties"][name] = self._schema_property(name, schema)
            return httpx.Response(200, json=database)

        if match := re.fullmatch(r"/databases/([^/]+)/query", path):
            if match[1] not in self.databases:
                return error_response(404, "object_not_found", "Could not find database")
            results = [
                page
                for page in self.pages.values()
                if page["parent"]["database_id"] == match[1] and self._matches(page, body.get("filter"))
            ]
            return httpx.Response(200, json={"object": "list", "results": results, "has_more": False, "next_cursor": None})

        if request.method == "POST" and path == "/pages":
            database_id = body["parent"]["database_id"]
            if database_id not in self.databases:
                return error_response(404, "object_not_found", "Could not find database")
            return httpx.Response(200, json=self.add_page(database_id, body["properties"]))

        if match := re.fullmatch(r"/pages/([^/]+)/properties/([^/]+)", path):
            page = self.pages[match[1]]
            database = self.databases[page["parent"]["database_id"]]
            prop = next(p for p in database["properties"].values() if p["id"] == match[2])
            return httpx.Response(200, json=self._property_item(page["id"], prop))

        return error_response(400, "invalid_request_url", f"Invalid request URL: {path}")


@pytest.fixture
def fake() -> Faker:
    faker = Faker()
    faker.seed_instance(1234)
    return faker


@pytest.fixture
def notion() -> FakeNotion:
    return FakeNotion()


@pytest.fixture
def client(notion: FakeNotion) -> NotionClient:
    return NotionClient("secret_test", transport=httpx.MockTransport(notion.handler))


def json_body(request: httpx.Request) -> Any:
    return json.loads(request.content)
