"""Read API over materialized query results."""

__version__ = "0.1.0"
