"""Personal task tracker: an ordered task list persisted as one JSON file."""

__version__ = "0.1.0"
