"""Team infrastructure adapters."""
