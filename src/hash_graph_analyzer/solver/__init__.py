"""Domain scan drivers and execution policy."""
