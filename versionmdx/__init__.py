"""Maintain a Version.mdx changelog from conventional commits and fragments."""

__version__ = "0.1.0"
