"""HTTP boundary of the closet service."""
