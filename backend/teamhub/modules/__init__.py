"""Bounded-context modules."""
