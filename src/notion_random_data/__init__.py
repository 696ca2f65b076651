"""Exercise the Notion API with randomly generated database rows."""

__version__ = "0.1.0"
