"""Command line interface for starterpack."""
