"""Invoice PDF rendering and delivery."""

__version__ = "0.3.0"
