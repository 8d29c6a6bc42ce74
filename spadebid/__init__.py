"""Spadebid: rules engine for a four-player bidding and trump trick-taking game."""

__version__ = "0.1.0"
