"""Admin product catalog service with trash, restore and purge."""

__version__ = "0.1.0"
