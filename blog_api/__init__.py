"""Blog content API: posts, categories and comments over pluggable storage."""

__version__ = "0.1.0"
