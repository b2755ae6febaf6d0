"""Bookstore: generic MongoDB data-access layer with an author/book/bookstore example."""

__version__ = "0.1.0"
__author__ = "Bookstore Team"

__all__ = ["__version__", "__author__"]
