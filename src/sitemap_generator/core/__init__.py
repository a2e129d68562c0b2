"""Core types, configuration and ports."""
