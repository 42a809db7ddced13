"""contentsync - content indexing pipeline for a remote search index."""

__version__ = "0.1.0"
