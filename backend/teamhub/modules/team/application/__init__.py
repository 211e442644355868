"""Team application layer."""
