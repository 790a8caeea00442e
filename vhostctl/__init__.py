"""Provision or tear down a single nginx or Apache virtual host."""

__version__ = "1.0.0"
