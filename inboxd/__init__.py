"""Capture helpers for an org-mode inbox: text, link and page processing, tracking and UI parsing."""

__version__ = "0.1.0"