"""Shared pytest fixtures and helpers for client core tests."""

from .core import *  # noqa: F401,F403
from .services import *  # noqa: F401,F403
