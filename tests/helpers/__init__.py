"""Test helper utilities for Build SMS Notifier tests."""

from .http import make_response, make_session

__all__ = ["make_response", "make_session"]
