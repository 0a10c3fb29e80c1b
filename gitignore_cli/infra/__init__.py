"""Infra layer utilities."""

from .writer import GitignoreWriter

__all__ = ["GitignoreWriter"]
