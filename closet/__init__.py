"""Closet: outfit composition and retention scoring service."""
