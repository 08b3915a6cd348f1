"""Frame loading."""
