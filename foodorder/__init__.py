"""Order placement backend for a food-ordering service."""

__version__ = "0.1.0"
