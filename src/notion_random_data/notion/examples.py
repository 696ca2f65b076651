"""Scripted walk through the Notion database and page endpoints."""

import logging
import sys
from datetime import datetime, timezone
from urllib.parse import unquote

from faker import Faker

from notion_random_data.exceptions import ExampleError
from notion_random_data.formatter import extract_value_to_string
from notion_random_data.generator import make_fake_properties
from notion_random_data.models import (
    CreateDatabaseOptions,
    PageReading,
    PropertyReading,
    QueryReport,
    RunStats,
    UpdateDatabaseOptions,
    plain_text,
)
from notion_random_data.notion.client import NotionClient
from notion_random_data.notion.schema import DEFAULT_SCHEMA, UPDATE_SCHEMA, to_create_schema

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def _parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class ExampleRunner:
    """Creates, updates, fills and reads back a database under a parent page."""

    def __init__(
        self,
        client: NotionClient,
        parent_page_id: str,
        faker: Faker | None = None,
    ):
        self.client = client
        self.parent_page_id = parent_page_id
        self.fake = faker or Faker()

        # Pages created before this are left out when reading back
        self.start_time = datetime.now(timezone.utc).replace(second=0, microsecond=0)

    async def create_database(self, options: CreateDatabaseOptions) -> dict:
        """Create a database and log its id and title."""
        logger.info("\n=== Create Database ===")
        database = await self.client.create_database(options)
        title = plain_text(database.get("title"))
        logger.info(f"Created database with id {database['id']} and title {title}")
        return database

    async def update_database(self, database_id: str, options: UpdateDatabaseOptions) -> dict:
        """Apply an update to a database and return the updated object."""
        logger.info("\n=== Update Database ===")
        database = await self.client.update_database(database_id, options)
        logger.info(f"Updated database {database_id}: {plain_text(database.get('title'))}")
        return database

    async def create_pages(self, database_id: str, properties: dict, rows: int = 1) -> list[dict]:
        """Create ``rows`` pages with random values for every fakeable column."""
        logger.info("\n=== Create Pages ===")
        pages = []
        for _ in range(rows):
            values = make_fake_properties(properties, faker=self.fake)
            logger.info(f"Creating page with properties: {sorted(values)}")
            pages.append(await self.client.create_page(database_id, values))

        logger.info(f"Wrote {rows} rows after {self.start_time.isoformat()} in database {database_id}")
        return pages

    async def read_pages(
        self, database_id: str, since: datetime | None = None
    ) -> tuple[list[PageReading], int]:
        """Read back every property of the pages created during this run.

        Pages created before ``since`` (default: when the runner started)
        are counted but not read.

        Returns: (readings, skipped)
        """
        if since is None:
            since = self.start_time
        logger.info("\n=== Read Pages ===")
        readings = []
        skipped = 0

        async for page in self.client.query_database_all(database_id):
            # Partial page objects carry no url
            if "url" not in page:
                continue

            created_time = _parse_time(page["created_time"])
            if created_time < since:
                skipped += 1
                continue

            logger.info(f"New page: {page['id']}")
            reading = PageReading(page_id=page["id"], created_time=created_time)
            for name, prop in page.get("properties", {}).items():
                response = await self.client.get_page_property(page["id"], prop["id"])
                value = extract_value_to_string(response)
                logger.info(f" - {name} {prop['id']} - {value}")
                reading.properties.append(PropertyReading(name=name, property_id=prop["id"], value=value))
            readings.append(reading)

        logger.info(f"Skipped {skipped} rows that were written before {since.isoformat()}")
        return readings, skipped

    def find_random_select_column(self, properties: dict) -> tuple[str, str | None]:
        """Pick a random select column and one of its option names.

        Returns ("", None) when the schema has no select column.
        """
        candidates = []
        for name, prop in properties.items():
            if prop.get("type") != "select":
                continue
            options = (prop.get("select") or {}).get("options") or []
            value = self.fake.random.choice(options)["name"] if options else None
            candidates.append((name, value))

        if candidates:
            return self.fake.random.choice(candidates)
        return "", None

    async def _count(self, database_id: str, filter: dict) -> int:
        count = 0
        async for _ in self.client.query_database_all(database_id, filter=filter):
            count += 1
        return count

    async def query_examples(self, database_id: str, properties: dict) -> list[QueryReport]:
        """Query by a random select value, then by a letter in a rich_text column."""
        logger.info("\n=== Query Database ===")
        reports = []

        name, value = self.find_random_select_column(properties)
        if not name or not value:
            raise ExampleError("need a select column to run this part of the example")

        logger.info(f"Looking for {name}={value}")
        select_filter = {"property": name, "select": {"equals": value}}
        matches = await self._count(database_id, select_filter)
        logger.info(f"had {matches} matching rows for {name}={value}")
        reports.append(QueryReport(column=name, value=value, filter=select_filter, matches=matches))

        text_columns = [prop for prop in properties.values() if prop.get("type") == "rich_text"]
        if not text_columns:
            raise ExampleError("Need a rich_text column for this part of the test, could not find one")

        # Filter by id rather than name
        column_id = unquote(self.fake.random.choice(text_columns)["id"])
        letter = self.fake.random_lowercase_letter()
        logger.info(f'Looking for text column with id "{column_id}" contains letter "{letter}"')
        text_filter = {"property": column_id, "rich_text": {"contains": letter}}
        matches = await self._count(database_id, text_filter)
        logger.info(f'Had {matches} matching rows in column with ID "{column_id}" containing letter "{letter}"')
        reports.append(QueryReport(column=column_id, value=letter, filter=text_filter, matches=matches))

        return reports

    async def run(
        self,
        source_database_id: str | None = None,
        update_database_id: str | None = None,
        rows: int = 1,
        read: bool = False,
        query: bool = False,
    ) -> RunStats:
        """
        Run the full example.

        1. Take the schema from a source database, or DEFAULT_SCHEMA
        2. Create a database with it on the parent page
        3. Retrieve it again, select options only get ids once created
        4. Update title, description and add a column
        5. Create pages with random values
        6. Optionally read the pages back and run filtered queries

        Returns RunStats with counts.
        """
        stats = RunStats()

        schema = DEFAULT_SCHEMA
        if source_database_id:
            logger.info(f"Copying schema from database {source_database_id}")
            source = await self.client.get_database(source_database_id)
            schema = to_create_schema(source.get("properties", {}))

        database = await self.create_database(
            CreateDatabaseOptions(
                parent_page_id=self.parent_page_id,
                title="test-database",
                description="non default test-database-description",
                properties=schema,
            )
        )
        database = await self.client.get_database(database["id"])

        database = await self.update_database(
            update_database_id or database["id"],
            UpdateDatabaseOptions(
                title="new title",
                description="updated description",
                properties=UPDATE_SCHEMA,
            ),
        )
        stats.database_id = database["id"]
        stats.database_title = plain_text(database.get("title"))

        pages = await self.create_pages(database["id"], database.get("properties", {}), rows)
        stats.pages_created = len(pages)

        if read:
            readings, skipped = await self.read_pages(database["id"])
            stats.pages_read = len(readings)
            stats.pages_skipped = skipped

        if query:
            try:
                stats.queries = await self.query_examples(database["id"], database.get("properties", {}))
            except ExampleError as e:
                stats.errors.append(str(e))
                logger.error(f"  Error: {e}")

        return stats
