"""Content planning, KDP sales report import and post metrics for self-published books."""

__version__ = "0.1.0"