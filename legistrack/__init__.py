"""Legislative tracker: aggregates bills and resolutions from Maryland-area
legislatures into one normalized, reconciled dataset."""

__version__ = "1.0.0"
