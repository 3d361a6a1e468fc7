"""Track placement applications locally: record, list, delete and summarise them."""

__version__ = "0.1.0"
