"""Assemble .gitignore files from the github/gitignore template collection."""

__version__ = "0.1.2"

__all__ = ["__version__"]
