"""Tournament draw generation and winner propagation."""

__version__ = "0.1.0"
