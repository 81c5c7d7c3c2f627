"""sealbin -- zero-knowledge encrypted paste service."""

__version__ = "0.1.0"
