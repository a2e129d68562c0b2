"""Infrastructure adapters for the filesystem."""
