"""Package starter folders into release archives with a JSON manifest."""

__version__ = "0.1.0"

__all__ = ["__version__"]
