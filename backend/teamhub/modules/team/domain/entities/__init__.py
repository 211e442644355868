"""Team entities."""
