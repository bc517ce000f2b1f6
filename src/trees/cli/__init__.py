"""Command-line interface for trees."""
