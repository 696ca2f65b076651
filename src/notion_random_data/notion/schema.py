"""Notion database schemas used by the example run."""

# Columns of the database created on the parent page
DEFAULT_SCHEMA = {
    # Title field (required)
    "not default title column": {"title": {}},
    "launch date": {"date": {}},
    "tags": {
        "multi_select": {
            "options": [{"name": "tag1"}, {"name": "tag2", "color": "green"}],
        },
    },
    "category": {
        "select": {
            "options": [{"name": "cat1"}, {"name": "cat2", "color": "green"}],
        },
    },
    "email": {"email": {}},
    "checked": {"checkbox": {}},
    "twitter": {"url": {}},
    "amount": {"number": {"format": "number"}},
    "description": {"rich_text": {}},
    "contact_nr": {"phone_number": {}},
}

# Columns added by the update step
UPDATE_SCHEMA = {
    "new property": {"rich_text": {}},
}

# Property types whose schema can be sent back to POST /databases as-is
CREATABLE_TYPES = {
    "title",
    "rich_text",
    "number",
    "select",
    "multi_select",
    "date",
    "checkbox",
    "url",
    "email",
    "phone_number",
}


def to_create_schema(properties: dict) -> dict:
    """Turn a retrieved database's properties into a creatable schema.

    Options lose their ids, since a new database assigns its own. Property
    types that reference other objects (relation, rollup, formula) or are
    computed by Notion (timestamps, users, status) are dropped.
    """
    schema = {}
    for name, prop in properties.items():
        prop_type = prop.get("type")
        if prop_type not in CREATABLE_TYPES:
            continue

        payload = dict(prop.get(prop_type) or {})
        if "options" in payload:
            payload["options"] = [
                {k: v for k, v in option.items() if k in ("name", "color")}
                for option in payload["options"]
            ]
        schema[name] = {prop_type: payload}
    return schema
