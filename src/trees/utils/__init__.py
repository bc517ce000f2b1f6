"""Utility modules for trees."""
