"""Service layer: search and review creation."""
