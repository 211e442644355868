"""TeamHub backend: the Team aggregate, its consistency rules and event model."""

__version__ = "0.1.0"
