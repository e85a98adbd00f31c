"""Copilot client core.

Identity/session caching and purchase verification for the copilot chat
client. The view layer consumes this package through ``src.copilot.view``.
"""

__version__ = "0.1.0"
