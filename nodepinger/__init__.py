"""nodepinger - periodic node liveness pinger."""

__version__ = "1.0.0"
