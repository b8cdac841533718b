"""Client-side search over a remote store catalog."""

__version__ = "1.0.0"
