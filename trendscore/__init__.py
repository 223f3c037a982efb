"""Trending, hot, and rising ranking engine for notes."""

__version__ = "0.1.0"
