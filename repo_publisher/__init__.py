"""Publish a local project directory as a commit in a new GitHub repository."""

__version__ = "0.1.0"
