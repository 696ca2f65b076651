"""Random property values for new Notion database pages."""

import logging
from collections.abc import Mapping
from datetime import timezone
from typing import Any

from faker import Faker

logger = logging.getLogger(__name__)

_fake = Faker()


def _value(prop: Mapping[str, Any], prop_type: str, value: Any) -> dict[str, Any]:
    """Wrap a value as a type-tagged property value, keeping the schema id."""
    result: dict[str, Any] = {"type": prop_type}
    if prop.get("id"):
        result["id"] = prop["id"]
    result[prop_type] = value
    return result


def _options(prop: Mapping[str, Any], prop_type: str) -> list[dict[str, Any]]:
    payload = prop.get(prop_type) or {}
    return list(payload.get("options") or [])


def make_fake_properties(
    properties: Mapping[str, Mapping[str, Any]],
    faker: Faker | None = None,
) -> dict[str, dict[str, Any]]:
    """Generate random page property values for a database schema.

    ``properties`` is the ``properties`` object of a retrieved database. The
    result can be passed as the ``properties`` of a new page in it.

    Select and multi_select columns without options are left out, as are
    column types we cannot fake (those are logged). Callers must not assume
    every column gets a value.
    """
    fake = faker or _fake
    values: dict[str, dict[str, Any]] = {}

    for name, prop in properties.items():
        prop_type = prop.get("type")

        if prop_type == "date":
            start = fake.date_time_between(start_date="-1y", end_date="now", tzinfo=timezone.utc)
            values[name] = _value(prop, "date", {"start": start.isoformat()})
        elif prop_type == "multi_select":
            options = _options(prop, "multi_select")
            if options:
                values[name] = _value(prop, "multi_select", [dict(fake.random.choice(options))])
        elif prop_type == "select":
            options = _options(prop, "select")
            if options:
                values[name] = _value(prop, "select", dict(fake.random.choice(options)))
        elif prop_type == "email":
            values[name] = _value(prop, "email", fake.email())
        elif prop_type == "checkbox":
            values[name] = _value(prop, "checkbox", fake.pybool())
        elif prop_type == "url":
            values[name] = _value(prop, "url", fake.url())
        elif prop_type == "number":
            values[name] = _value(prop, "number", fake.random_int(min=0, max=99999))
        elif prop_type == "title":
            content = " ".join(fake.words(nb=3))
            values[name] = _value(prop, "title", [{"type": "text", "text": {"content": content}}])
        elif prop_type == "rich_text":
            content = fake.first_name()
            values[name] = _value(prop, "rich_text", [{"type": "text", "text": {"content": content}}])
        elif prop_type == "phone_number":
            values[name] = _value(prop, "phone_number", fake.phone_number())
        else:
            logger.warning(f"unimplemented property type: {prop_type}")

    return values
