"""Closet item and outfit services."""
