"""Paperhand CLI - command-line access to the text core."""

__version__ = "1.0.0"
