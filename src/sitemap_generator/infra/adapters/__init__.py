"""Site source adapters."""
