"""Render page property item responses as display strings.

The property item endpoint returns a tagged value: ``type`` names the
variant and the value lives under the key of the same name. ``formula`` and
``rollup`` carry a second tagged value of their own. Every tag in the
closed sets below has exactly one rendering; anything else raises
:class:`UnreachableVariantError` instead of guessing.
"""

import json
from datetime import datetime
from typing import Any, Literal, NoReturn

from notion_random_data.exceptions import UnreachableVariantError

PropertyItemType = Literal[
    "checkbox",
    "created_by",
    "created_time",
    "date",
    "email",
    "url",
    "number",
    "phone_number",
    "select",
    "multi_select",
    "people",
    "last_edited_by",
    "last_edited_time",
    "title",
    "rich_text",
    "files",
    "formula",
    "rollup",
    "relation",
    "status",
]
FormulaType = Literal["string", "number", "boolean", "date"]
RollupType = Literal["number", "date", "array", "incomplete", "unsupported"]

MISSING = "???"


def assert_unreachable(value: Any) -> NoReturn:
    """Fail on a variant outside its closed set."""
    raise UnreachableVariantError(value)


def _to_iso(timestamp: str) -> str:
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).isoformat()


def _bool_to_string(value: bool) -> str:
    return "true" if value else "false"


def user_to_string(user: dict[str, Any]) -> str:
    """Format a user object as ``"<id>: <name>"``."""
    return f"{user['id']}: {user.get('name') or 'Unknown Name'}"


def _option_to_string(option: dict[str, Any]) -> str:
    return f"{option.get('id')} {option.get('name')}"


def _formula_to_string(formula: dict[str, Any]) -> str:
    formula_type = formula.get("type")
    if formula_type == "string":
        return formula.get("string") or MISSING
    elif formula_type == "number":
        number = formula.get("number")
        return str(number) if number is not None else MISSING
    elif formula_type == "boolean":
        boolean = formula.get("boolean")
        return _bool_to_string(boolean) if boolean is not None else MISSING
    elif formula_type == "date":
        date = formula.get("date")
        return _to_iso(date["start"]) if date and date.get("start") else MISSING
    return assert_unreachable(formula)


def _rollup_to_string(rollup: dict[str, Any]) -> str:
    rollup_type = rollup.get("type")
    if rollup_type == "number":
        number = rollup.get("number")
        return str(number) if number is not None else MISSING
    elif rollup_type == "date":
        date = rollup.get("date")
        return _to_iso(date["start"]) if date and date.get("start") else MISSING
    elif rollup_type == "array":
        return json.dumps(rollup.get("array"), separators=(",", ":"))
    elif rollup_type in ("incomplete", "unsupported"):
        return rollup_type
    return assert_unreachable(rollup)


def extract_property_item_value_to_string(item: dict[str, Any]) -> str:
    """Render a single ``property_item`` object."""
    prop_type = item.get("type")

    if prop_type == "checkbox":
        return _bool_to_string(item["checkbox"])
    elif prop_type == "created_by":
        return user_to_string(item["created_by"])
    elif prop_type == "created_time":
        return _to_iso(item["created_time"])
    elif prop_type == "date":
        date = item.get("date")
        return _to_iso(date["start"]) if date and date.get("start") else ""
    elif prop_type == "email":
        return item.get("email") or ""
    elif prop_type == "url":
        return item.get("url") or ""
    elif prop_type == "number":
        number = item.get("number")
        if isinstance(number, (int, float)) and not isinstance(number, bool):
            return str(number)
        return ""
    elif prop_type == "phone_number":
        return item.get("phone_number") or ""
    elif prop_type == "select":
        select = item.get("select")
        if not select:
            return ""
        return _option_to_string(select)
    elif prop_type == "multi_select":
        multi_select = item.get("multi_select")
        if not multi_select:
            return ""
        return ", ".join(_option_to_string(option) for option in multi_select)
    elif prop_type == "people":
        return user_to_string(item["people"])
    elif prop_type == "last_edited_by":
        return user_to_string(item["last_edited_by"])
    elif prop_type == "last_edited_time":
        return _to_iso(item["last_edited_time"])
    elif prop_type == "title":
        return item["title"].get("plain_text", "")
    elif prop_type == "rich_text":
        return item["rich_text"].get("plain_text", "")
    elif prop_type == "files":
        return ", ".join(file["name"] for file in item.get("files", []))
    elif prop_type == "formula":
        return _formula_to_string(item["formula"])
    elif prop_type == "rollup":
        return _rollup_to_string(item["rollup"])
    elif prop_type == "relation":
        relation = item.get("relation")
        if relation:
            return relation["id"]
        return MISSING
    elif prop_type == "status":
        status = item.get("status")
        return status.get("name", "") if status else ""
    return assert_unreachable(item)


def extract_value_to_string(response: dict[str, Any]) -> str:
    """Render a page property response, single item or paginated list."""
    object_type = response.get("object")
    if object_type == "property_item":
        return extract_property_item_value_to_string(response)
    elif object_type == "list":
        return ", ".join(extract_property_item_value_to_string(result) for result in response["results"])
    return assert_unreachable(response)
